#!/usr/bin/env python
import os

import requests
from sdk.pystore import ProductClient

def main():
    c = ProductClient(
        base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.environ.get("API_KEY"),
    )

    # -----------------------------
    # Root route (no key needed)
    # -----------------------------
    print("Root says:", c.hello())

    # -----------------------------
    # Seed data
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print("\nKitchen only:", c.list_products(category="kitchen"))
    print("Page 2, one per page:", c.list_products(page=2, limit=1))

    # -----------------------------
    # Search and stats
    # -----------------------------
    print("\nSearching for 'phone'...")
    print(c.search_products("phone"))
    print("\nStats:", c.product_stats())

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "1.7L, stainless", 35, "kitchen", True)
    print(kettle)

    print("\nMarking it out of stock...")
    print(c.update_product(kettle["id"], inStock=False))

    print("\nDeleting it...")
    c.delete_product(kettle["id"])
    try:
        c.get_product(kettle["id"])
    except requests.exceptions.HTTPError as e:
        print("Lookup after delete:", e.response.status_code, e.response.json())

    # -----------------------------
    # Wrong key
    # -----------------------------
    bad = ProductClient(base_url=c.base_url, api_key="wrong-key")
    try:
        bad.list_products()
    except requests.exceptions.HTTPError as e:
        print("\nWith a wrong key:", e.response.status_code, e.response.json())

if __name__ == "__main__":
    main()

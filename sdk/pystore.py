# sdk/pystore.py
import requests
import httpx
from typing import Optional, Dict, Any

API_KEY_HEADER = "X-API-Key"

class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/products{path}"

    # Root (no auth)
    def hello(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(""), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def search_products(self, name: str):
        r = self.session.get(self._url("/search"), params={"name": name}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def product_stats(self) -> Dict[str, int]:
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Writes
    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        r = self.session.post(self._url(""), json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **fields: Any):
        # accept the pythonic spelling too
        if "in_stock" in fields:
            fields["inStock"] = fields.pop("in_stock")
        r = self.session.put(self._url(f"/{product_id}"), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        r.raise_for_status()

    # Async create (used by the concurrency demo)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: bool = True, client: Optional[httpx.AsyncClient] = None):
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
        if client is not None:
            return await client.post(self._url(""), json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            return await ac.post(self._url(""), json=payload, headers=headers)


def _str_to_bool(raw: str) -> bool:
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y"):
        return True
    if v in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


if __name__ == "__main__":
    import argparse
    import os
    from rich import print

    parser = argparse.ArgumentParser(description="Products API CLI")
    parser.add_argument("--base-url", default=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.environ.get("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--page", type=int, help="Page number (1-indexed)")
    lp.add_argument("--limit", type=int, help="Items per page")

    sp = subparsers.add_parser("search", help="Search for products by name")
    sp.add_argument("--name", required=True, help="Name substring to search for")

    subparsers.add_parser("stats", help="Count products per category")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--description", required=True, help="Product description")
    cp.add_argument("--price", type=float, required=True, help="Price")
    cp.add_argument("--category", required=True, help="Product category")
    cp.add_argument("--in-stock", type=_str_to_bool, default=True, help="true/false")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", required=True, help="ID of the product")
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", type=_str_to_bool)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products(args.category, args.page, args.limit))

    elif args.command == "search":
        print(c.search_products(args.name))

    elif args.command == "stats":
        print(c.product_stats())

    elif args.command == "get-product":
        print(c.get_product(args.product_id))

    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))

    elif args.command == "update-product":
        fields = {k: v for k, v in {
            "name": args.name, "description": args.description, "price": args.price,
            "category": args.category, "inStock": args.in_stock,
        }.items() if v is not None}
        print(c.update_product(args.product_id, **fields))

    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        print(f"Deleted {args.product_id}")

import asyncio
import os

import httpx
from sdk.pystore import ProductClient

N_CLIENTS = 20

async def create_one(client: ProductClient, ac: httpx.AsyncClient, n: int):
    r = await client.create_product_async(f"Widget {n}", f"Batch item {n}", 10 + n, "widgets", n % 2 == 0, client=ac)
    if r.status_code == 201:
        print(f"✅ created {r.json()['id']} (Widget {n})")
    else:
        print(f"❌ Widget {n} failed: {r.status_code} {r.text}")
    return r

async def main():
    c = ProductClient(
        base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.environ.get("API_KEY"),
    )
    before = c.product_stats().get("widgets", 0)

    print(f"\n⚡ Creating {N_CLIENTS} products concurrently...")
    async with httpx.AsyncClient(timeout=c.timeout) as ac:
        results = await asyncio.gather(*(create_one(c, ac, n) for n in range(N_CLIENTS)))

    ids = [r.json()["id"] for r in results if r.status_code == 201]
    after = c.product_stats().get("widgets", 0)

    print(f"\n🆔 unique ids: {len(set(ids))}/{len(ids)}")
    print(f"📦 widgets before={before} after={after} (expected {before + len(ids)})")

if __name__ == "__main__":
    asyncio.run(main())

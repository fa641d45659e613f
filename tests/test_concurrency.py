# tests/test_concurrency.py
import asyncio
from concurrent.futures import ThreadPoolExecutor

import httpx

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

HEADERS = {"X-API-Key": "k"}


async def _create_task(ac, n):
    return await ac.post("/api/products", json={
        "name": f"Widget {n}", "description": "batch", "price": n + 1,
        "category": "widgets", "inStock": True,
    }, headers=HEADERS)


async def _create_many(app, count):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(*(_create_task(ac, n) for n in range(count)))


def test_concurrent_creates_over_http():
    store = ProductStore()
    app = create_app(settings=Settings(api_key="k"), store=store)

    results = asyncio.run(_create_many(app, 25))
    assert all(r.status_code == 201 for r in results)
    ids = [r.json()["id"] for r in results]
    assert len(set(ids)) == 25
    assert len(store) == 3 + 25
    assert store.stats()["widgets"] == 25


def test_threaded_store_mutations_are_not_lost():
    store = ProductStore(seed=False)
    fields = {"name": "t", "description": "d", "price": 1, "category": "c", "inStock": True}

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda _: store.create(fields), range(200)))

    assert len({p.id for p in created}) == 200
    assert len(store) == 200

    with ThreadPoolExecutor(max_workers=8) as pool:
        deleted = list(pool.map(lambda p: store.delete(p.id), created[:100]))

    assert all(deleted)
    assert len(store) == 100

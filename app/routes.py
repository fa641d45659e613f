"""CRUD, search and stats endpoints for the product collection."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from app.auth import require_api_key
from app.core import parse_int, validate_create, validate_update
from app.database import ProductStore
from app.errors import ProductNotFoundError
from app.models import Product

router = APIRouter(prefix="/api/products", tags=["products"], dependencies=[Depends(require_api_key)])


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# Literal paths (/search, /stats) are registered before /{product_id}:
# routes match in registration order and the parameterized route would
# otherwise swallow them as ids.

@router.get("", response_model=List[Product], summary="List products")
async def list_products(
    category: Optional[str] = Query(None, description="Exact category filter"),
    page: Optional[str] = Query(None, description="1-indexed page number"),
    limit: Optional[str] = Query(None, description="Items per page (default: all)"),
    store: ProductStore = Depends(get_store),
):
    items = store.list(category or None)
    return store.paginate(items, parse_int(page), parse_int(limit))


@router.get("/search", response_model=List[Product], summary="Search products by name")
async def search_products(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    store: ProductStore = Depends(get_store),
):
    # no term: every name contains the empty string
    return store.search(name)


@router.get("/stats", response_model=Dict[str, int], summary="Product count per category")
async def product_stats(store: ProductStore = Depends(get_store)):
    return store.stats()


@router.get("/{product_id}", response_model=Product, summary="Get a product")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    product = store.get(product_id)
    if product is None:
        raise ProductNotFoundError()
    return product


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED, summary="Create a product")
async def create_product(
    payload: Any = Body(None),
    store: ProductStore = Depends(get_store),
):
    fields = validate_create(payload)
    return store.create(fields.model_dump())


@router.put("/{product_id}", response_model=Product, summary="Update a product")
async def update_product(
    product_id: str,
    payload: Any = Body(None),
    store: ProductStore = Depends(get_store),
):
    if store.get(product_id) is None:
        raise ProductNotFoundError()
    changes = validate_update(payload)
    product = store.update(product_id, changes)
    if product is None:
        raise ProductNotFoundError()
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a product")
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)) -> Response:
    if not store.delete(product_id):
        raise ProductNotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

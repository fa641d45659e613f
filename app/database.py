import logging
import threading
import uuid
from typing import Any, Dict, List, Optional, Sequence

from .models import Product

# This file holds the in-memory product collection and its lock.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Laptop", "description": "16GB RAM", "price": 1200, "category": "electronics", "inStock": True},
    {"id": "2", "name": "Smartphone", "description": "128GB storage", "price": 800, "category": "electronics", "inStock": True},
    {"id": "3", "name": "Coffee Maker", "description": "Timer", "price": 50, "category": "kitchen", "inStock": False},
]


class ProductStore:
    """Insertion-ordered product collection.

    Every operation runs under one lock, so concurrent handlers observe the
    same serial behaviour as a single-threaded server. Records handed out are
    copies; mutation only happens through the methods below. Unknown ids are
    reported as ``None``/``False``, never raised.
    """

    def __init__(self, seed: bool = True):
        self._lock = threading.Lock()
        self._products: List[Product] = []
        if seed:
            self._products = [Product(**p) for p in SEED_PRODUCTS]

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def list(self, category: Optional[str] = None) -> List[Product]:
        with self._lock:
            return [
                p.model_copy()
                for p in self._products
                if category is None or p.category == category
            ]

    @staticmethod
    def paginate(items: Sequence[Product], page: Optional[int] = None, limit: Optional[int] = None) -> List[Product]:
        # 0 behaves like "not given"; negatives select nothing
        page = page or 1
        limit = limit or len(items)
        if page < 1 or limit < 1:
            return []
        start = (page - 1) * limit
        return list(items[start:start + limit])

    def search(self, term: Optional[str] = None) -> List[Product]:
        needle = (term or "").lower()
        with self._lock:
            return [p.model_copy() for p in self._products if needle in p.name.lower()]

    def stats(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        with self._lock:
            for p in self._products:
                out[p.category] = out.get(p.category, 0) + 1
        return out

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            return self._products[i].model_copy() if i != -1 else None

    def create(self, fields: Dict[str, Any]) -> Product:
        data = {k: v for k, v in fields.items() if k != "id"}
        with self._lock:
            pid = str(uuid.uuid4())
            # uuid4 collisions are not a practical concern, but ids must stay unique
            while self._index_of(pid) != -1:
                pid = str(uuid.uuid4())
            product = Product(id=pid, **data)
            self._products.append(product)
        logger.info(f"Created product {pid}")
        return product.model_copy()

    def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        changes = {k: v for k, v in fields.items() if k != "id"}
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            merged = self._products[i].model_copy(update=changes)
            self._products[i] = merged
        logger.info(f"Updated product {product_id}")
        return merged.model_copy()

    def delete(self, product_id: str) -> bool:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return False
            del self._products[i]
        logger.info(f"Deleted product {product_id}")
        return True

    def reset(self, seed: bool = True) -> None:
        with self._lock:
            self._products = [Product(**p) for p in SEED_PRODUCTS] if seed else []

"""Shared fixtures: in-memory product stores and a test client wired to them."""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.product import Product
from app.services.product_service import get_product_store
from app.services.product_store import ProductStore


class InMemoryProductStore(ProductStore):
    """Dict-backed store with the same observable rules as the database store."""

    def __init__(self):
        self.products: Dict[int, Product] = {}
        self.next_id = 1
        self.calls: List[str] = []

    def _copy(self, product: Product) -> Product:
        return Product(**product.model_dump())

    def _ordered(self, key, order: Optional[str]) -> List[Product]:
        descending = (order or "").lower() in ("desc", "descending")
        ordered = sorted(self.products.values(), key=lambda p: p.id)
        ordered.sort(key=key, reverse=descending)
        return [self._copy(p) for p in ordered]

    async def add(self, product: Product) -> Product:
        self.calls.append("add")
        stored = Product(**product.model_dump(exclude={"id"}), id=self.next_id)
        self.products[stored.id] = stored
        self.next_id += 1
        return self._copy(stored)

    async def list_all(self) -> List[Product]:
        self.calls.append("list_all")
        return [self._copy(p) for _, p in sorted(self.products.items())]

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        self.calls.append("get_by_id")
        product = self.products.get(product_id)
        return self._copy(product) if product else None

    async def search_by_name(self, name: str) -> List[Product]:
        self.calls.append("search_by_name")
        return [self._copy(p) for p in self.products.values() if name.lower() in p.name.lower()]

    async def total_count(self) -> int:
        self.calls.append("total_count")
        return len(self.products)

    async def update(self, product: Product) -> bool:
        self.calls.append("update")
        stored = self.products.get(product.id)
        if stored is None:
            return False
        stored.name = product.name
        stored.description = product.description
        stored.price = product.price
        stored.category = product.category
        return True

    async def sort_by_name(self, order: Optional[str]) -> List[Product]:
        self.calls.append("sort_by_name")
        return self._ordered(lambda p: p.name, order)

    async def sort_by_category(self, order: Optional[str]) -> List[Product]:
        self.calls.append("sort_by_category")
        return self._ordered(lambda p: p.category or "", order)

    async def sort_by_price(self, order: Optional[str]) -> List[Product]:
        self.calls.append("sort_by_price")
        return self._ordered(lambda p: p.price, order)

    async def list_by_category(self, category: str) -> List[Product]:
        self.calls.append("list_by_category")
        return [self._copy(p) for p in self.products.values() if p.category == category]

    async def delete_by_id(self, product_id: int) -> bool:
        self.calls.append("delete_by_id")
        return self.products.pop(product_id, None) is not None

    async def delete_all(self) -> None:
        self.calls.append("delete_all")
        self.products.clear()


class FailingProductStore(ProductStore):
    """Store whose every operation raises the same fault."""

    def __init__(self, message: str = "database unavailable"):
        self.message = message

    def _fail(self, *args, **kwargs):
        raise RuntimeError(self.message)

    async def add(self, product):
        self._fail()

    async def list_all(self):
        self._fail()

    async def get_by_id(self, product_id):
        self._fail()

    async def search_by_name(self, name):
        self._fail()

    async def total_count(self):
        self._fail()

    async def update(self, product):
        self._fail()

    async def sort_by_name(self, order):
        self._fail()

    async def sort_by_category(self, order):
        self._fail()

    async def sort_by_price(self, order):
        self._fail()

    async def list_by_category(self, category):
        self._fail()

    async def delete_by_id(self, product_id):
        self._fail()

    async def delete_all(self):
        self._fail()


@pytest.fixture
def store():
    return InMemoryProductStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_product_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_product_store] = lambda: FailingProductStore()
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()

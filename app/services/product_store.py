"""
Contract between the products HTTP resource and whatever owns product persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.models.product import Product


class ProductStore(ABC):
    """Async collaborator consumed by the products controller.

    Implementations own identity assignment, matching and ordering rules.
    ``update`` and ``delete_by_id`` report whether a product with the given id
    existed, and must decide that atomically with the write.
    """

    @abstractmethod
    async def add(self, product: Product) -> Product:
        """Persist a new product and return it with its assigned id."""

    @abstractmethod
    async def list_all(self) -> List[Product]:
        pass

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def search_by_name(self, name: str) -> List[Product]:
        pass

    @abstractmethod
    async def total_count(self) -> int:
        pass

    @abstractmethod
    async def update(self, product: Product) -> bool:
        """Copy name, description, price and category onto the stored product with the same id."""

    @abstractmethod
    async def sort_by_name(self, order: Optional[str]) -> List[Product]:
        pass

    @abstractmethod
    async def sort_by_category(self, order: Optional[str]) -> List[Product]:
        pass

    @abstractmethod
    async def sort_by_price(self, order: Optional[str]) -> List[Product]:
        pass

    @abstractmethod
    async def list_by_category(self, category: str) -> List[Product]:
        pass

    @abstractmethod
    async def delete_by_id(self, product_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_all(self) -> None:
        pass

from typing import List, Optional
from sqlalchemy.orm import sessionmaker
from app.core.database import async_session_maker
from app.dao.product_dao import product_dao
from app.models.product import Product
from app.services.product_store import ProductStore
import structlog

logger = structlog.get_logger()

DESCENDING_ORDERS = {"desc", "descending"}

# Fields an update may overwrite; the id always comes from the stored row
UPDATABLE_FIELDS = ("name", "description", "price", "category")


def is_descending(order: Optional[str]) -> bool:
    return bool(order) and order.strip().lower() in DESCENDING_ORDERS


class ProductService(ProductStore):
    def __init__(self, session_maker: sessionmaker = async_session_maker):
        self.session_maker = session_maker
        self.product_dao = product_dao

    async def add(self, product: Product) -> Product:
        async with self.session_maker() as db:
            try:
                product_data = product.model_dump(exclude={"id"})
                created = await self.product_dao.create(db, obj_in=product_data)
                logger.info("Product created successfully", product_id=created.id)
                return created
            except Exception as e:
                logger.error("Error creating product", error=str(e))
                raise

    async def list_all(self) -> List[Product]:
        async with self.session_maker() as db:
            products = await self.product_dao.get_all(db)
            logger.info("Retrieved products", count=len(products))
            return products

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        async with self.session_maker() as db:
            product = await self.product_dao.get_by_id(db, product_id)
            if not product:
                logger.warning("Product not found", product_id=product_id)
            return product

    async def search_by_name(self, name: str) -> List[Product]:
        async with self.session_maker() as db:
            products = await self.product_dao.search_by_name(db, name or "")
            logger.info("Searched products by name", name=name, count=len(products))
            return products

    async def total_count(self) -> int:
        async with self.session_maker() as db:
            return await self.product_dao.count(db)

    async def update(self, product: Product) -> bool:
        async with self.session_maker() as db:
            update_data = {field: getattr(product, field) for field in UPDATABLE_FIELDS}
            matched = await self.product_dao.update_by_id(db, id=product.id, obj_in=update_data)
            if not matched:
                logger.warning("Product not found for update", product_id=product.id)
                return False
            logger.info("Product updated successfully", product_id=product.id)
            return True

    async def sort_by_name(self, order: Optional[str]) -> List[Product]:
        return await self._sorted("name", order)

    async def sort_by_category(self, order: Optional[str]) -> List[Product]:
        return await self._sorted("category", order)

    async def sort_by_price(self, order: Optional[str]) -> List[Product]:
        return await self._sorted("price", order)

    async def _sorted(self, column: str, order: Optional[str]) -> List[Product]:
        async with self.session_maker() as db:
            descending = is_descending(order)
            products = await self.product_dao.get_sorted(db, column, descending=descending)
            logger.info("Sorted products", column=column, descending=descending, count=len(products))
            return products

    async def list_by_category(self, category: str) -> List[Product]:
        async with self.session_maker() as db:
            products = await self.product_dao.get_by_category(db, category)
            logger.info("Retrieved products by category", category=category, count=len(products))
            return products

    async def delete_by_id(self, product_id: int) -> bool:
        async with self.session_maker() as db:
            deleted = await self.product_dao.delete_by_id(db, id=product_id)
            if not deleted:
                logger.warning("Product not found for delete", product_id=product_id)
                return False
            logger.info("Product deleted successfully", product_id=product_id)
            return True

    async def delete_all(self) -> None:
        async with self.session_maker() as db:
            removed = await self.product_dao.delete_all(db)
            logger.info("Deleted all products", count=removed)


product_service = ProductService()


def get_product_store() -> ProductStore:
    """FastAPI dependency resolving the store used by the products controller"""
    return product_service

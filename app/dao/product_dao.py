from typing import List
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.dao.base_dao import BaseDAO
from app.models.product import Product
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    # Columns a caller may sort by
    SORTABLE_COLUMNS = {
        "name": Product.name,
        "category": Product.category,
        "price": Product.price,
    }

    def __init__(self):
        super().__init__(Product)

    async def get_by_category(self, db: AsyncSession, category: str) -> List[Product]:
        try:
            result = await db.execute(
                select(Product)
                .where(Product.category == category)
                .order_by(Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting products by category", category=category, error=str(e))
            raise

    async def search_by_name(self, db: AsyncSession, name: str) -> List[Product]:
        try:
            result = await db.execute(
                select(Product)
                .where(Product.name.icontains(name, autoescape=True))
                .order_by(Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error searching products by name", name=name, error=str(e))
            raise

    async def get_sorted(self, db: AsyncSession, column: str, descending: bool = False) -> List[Product]:
        try:
            sort_column = self.SORTABLE_COLUMNS[column]
            result = await db.execute(
                select(Product)
                .order_by(sort_column.desc() if descending else sort_column.asc(), Product.id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error sorting products", column=column, descending=descending, error=str(e))
            raise


product_dao = ProductDAO()

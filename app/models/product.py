from sqlmodel import SQLModel, Field
from typing import Optional


class ProductBase(SQLModel):
    name: str = Field(index=True)
    description: Optional[str] = None
    price: float = Field(default=0)
    category: Optional[str] = Field(default=None, index=True)


class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        index=True,
    )



from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse
from app.models.product import Product
from app.schemas.product_schemas import ProductRequest, ProductResponse
from app.services.product_service import get_product_store
from app.services.product_store import ProductStore
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/products", tags=["Products"])


def store_failure(action: str, exc: Exception, **context) -> PlainTextResponse:
    logger.error(f"Failed to {action}", error=str(exc), **context)
    return PlainTextResponse(
        "Error - " + str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def add_product(
    payload: ProductRequest,
    store: ProductStore = Depends(get_product_store)
):
    """Add a new product; the store assigns its id"""
    try:
        product = Product(**payload.model_dump(exclude={"id"}))
        return await store.add(product)
    except Exception as e:
        return store_failure("add product", e)


@router.get("", response_model=List[ProductResponse])
async def get_products(store: ProductStore = Depends(get_product_store)):
    try:
        return await store.list_all()
    except Exception as e:
        return store_failure("list products", e)


@router.get("/search", response_model=List[ProductResponse])
async def get_products_by_name(
    name: str = "",
    store: ProductStore = Depends(get_product_store)
):
    """Search products by name; matching rules belong to the store"""
    try:
        return await store.search_by_name(name)
    except Exception as e:
        return store_failure("search products", e, name=name)


@router.get("/total-count", response_model=int)
async def get_total_product_count(store: ProductStore = Depends(get_product_store)):
    try:
        return await store.total_count()
    except Exception as e:
        return store_failure("count products", e)


@router.get("/sort", response_model=List[ProductResponse])
async def sort_products(
    criteria: Optional[str] = None,
    order: Optional[str] = None,
    store: ProductStore = Depends(get_product_store)
):
    """
    Sort products by name, category or price in the requested order.

    Unknown criteria return the unsorted product list.
    """
    try:
        if criteria == "name":
            return await store.sort_by_name(order)
        if criteria == "category":
            return await store.sort_by_category(order)
        if criteria == "price":
            return await store.sort_by_price(order)
        return await store.list_all()
    except Exception as e:
        return store_failure("sort products", e, criteria=criteria, order=order)


@router.get("/category/{category}", response_model=List[ProductResponse])
async def get_products_by_category(
    category: str,
    store: ProductStore = Depends(get_product_store)
):
    try:
        return await store.list_by_category(category)
    except Exception as e:
        return store_failure("get products by category", e, category=category)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product_by_id(
    product_id: int,
    store: ProductStore = Depends(get_product_store)
):
    try:
        product = await store.get_by_id(product_id)
    except Exception as e:
        return store_failure("get product", e, product_id=product_id)

    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return product


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_product(
    product_id: int,
    payload: ProductRequest,
    store: ProductStore = Depends(get_product_store)
):
    """
    Overwrite name, description, price and category of an existing product.

    The id in the body must match the route id; the stored id is never changed.
    """
    if product_id != payload.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="id in route is different id in body"
        )

    try:
        updated = await store.update(Product(**payload.model_dump()))
    except Exception as e:
        return store_failure("update product", e, product_id=product_id)

    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    store: ProductStore = Depends(get_product_store)
):
    try:
        deleted = await store.delete_by_id(product_id)
    except Exception as e:
        return store_failure("delete product", e, product_id=product_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_products(store: ProductStore = Depends(get_product_store)):
    try:
        await store.delete_all()
    except Exception as e:
        return store_failure("delete all products", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Shop product API routes
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from storefront.core.database import get_db
from .filters import ProductFilter
from .schemas import ProductData, ProductListResponse, ProductResponse
from .services import ProductService

router = APIRouter()


@router.get(
    "/get",
    response_model=ProductListResponse,
    summary="List products",
    description="Filter by comma-separated category and brand values and sort the listing"
)
async def get_filtered_products(
    category: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    db: AsyncSession = Depends(get_db)
):
    service = ProductService(db)
    products = await service.list_products(ProductFilter.from_query(category, brand, sort_by))
    return {
        "success": True,
        "message": "Products fetched successfully",
        "data": [ProductData.model_validate(p) for p in products],
    }


@router.get("/get/{product_id}", response_model=ProductResponse)
async def get_product_details(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get product details"""
    service = ProductService(db)
    product = await service.get_product(product_id)
    return {"success": True, "message": "Product fetched successfully", "data": ProductData.model_validate(product)}

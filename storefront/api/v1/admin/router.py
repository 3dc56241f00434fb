"""Admin management endpoints"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.schemas import MessageResponse
from storefront.api.v1.orders.schemas import OrderListResponse, OrderResponse, OrderStatusUpdate
from storefront.api.v1.orders.services import OrderService, serialize_order
from storefront.api.v1.products.schemas import (
    ProductCreate, ProductData, ProductListResponse, ProductResponse, ProductUpdate
)
from storefront.api.v1.products.services import ProductService

products_router = APIRouter()
orders_router = APIRouter()


@products_router.post("/add", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def add_product(
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add product to the catalog"""
    service = ProductService(db)
    product = await service.create_product(product_data)
    return {"success": True, "message": "Product added successfully", "data": ProductData.model_validate(product)}


@products_router.get("/get", response_model=ProductListResponse)
async def get_all_products(db: AsyncSession = Depends(get_db)):
    service = ProductService(db)
    products = await service.list_products()
    return {
        "success": True,
        "message": "Products fetched successfully",
        "data": [ProductData.model_validate(p) for p in products],
    }


@products_router.put("/edit/{product_id}", response_model=ProductResponse)
async def edit_product(
    product_id: uuid.UUID,
    product_data: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update product fields"""
    service = ProductService(db)
    product = await service.update_product(product_id, product_data)
    return {"success": True, "message": "Product updated successfully", "data": ProductData.model_validate(product)}


@products_router.delete("/delete/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    service = ProductService(db)
    await service.delete_product(product_id)
    return {"success": True, "message": "Product deleted successfully"}


@orders_router.get("/get", response_model=OrderListResponse)
async def get_all_orders(db: AsyncSession = Depends(get_db)):
    """Get orders of all users"""
    service = OrderService(db)
    orders = await service.list_all_orders()
    return {
        "success": True,
        "message": "Orders fetched successfully",
        "data": [serialize_order(order) for order in orders],
    }


@orders_router.get("/details/{order_id}", response_model=OrderResponse)
async def get_order_details(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    order = await service.get_order(order_id)
    return {"success": True, "message": "Order fetched successfully", "data": serialize_order(order)}


@orders_router.put("/update/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: uuid.UUID,
    status_data: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Change order status

    Only cancellation of a pending order is accepted here; completion
    happens through payment capture.
    """
    service = OrderService(db)
    order = await service.update_status(order_id, status_data.order_status)
    return {"success": True, "message": "Order status updated successfully", "data": serialize_order(order)}

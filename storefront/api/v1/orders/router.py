"""
Shop order API routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.config import Settings, get_settings
from storefront.core.database import get_db
from storefront.api.v1.payments.services import PaymentService, get_payment_service
from .schemas import OrderCapture, OrderCreatedResponse, OrderListResponse, OrderResponse
from .services import OrderService, serialize_order
from .validation import ValidatedCart, validate_cart_before_checkout

router = APIRouter()


@router.post(
    "/create",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Validate the cart against the catalog and open a payment with the provider"
)
async def create_order(
    checkout: ValidatedCart = Depends(validate_cart_before_checkout),
    payments: PaymentService = Depends(get_payment_service),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db)
):
    """Create new order"""
    service = OrderService(db, payments)
    result = await service.create_order(checkout, settings)
    return {
        "success": True,
        "message": "Order created successfully",
        "order_id": result["order"].id,
        "approvalURL": result["approvalURL"],
        "is_demo": result["isDemo"],
    }


@router.post("/capture", response_model=OrderResponse, summary="Capture payment")
async def capture_payment(
    capture_data: OrderCapture,
    payments: PaymentService = Depends(get_payment_service),
    db: AsyncSession = Depends(get_db)
):
    """Capture payment and complete the order"""
    service = OrderService(db, payments)
    order = await service.capture_payment(capture_data)
    return {"success": True, "message": "Order confirmed", "data": serialize_order(order)}


@router.get("/list/{user_id}", response_model=OrderListResponse)
async def list_orders(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """List a user's orders"""
    service = OrderService(db)
    orders = await service.list_orders(user_id)
    return {
        "success": True,
        "message": "Orders fetched successfully",
        "data": [serialize_order(order) for order in orders],
    }


@router.get("/details/{order_id}", response_model=OrderResponse)
async def get_order_details(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    order = await service.get_order(order_id)
    return {"success": True, "message": "Order fetched successfully", "data": serialize_order(order)}

"""
Order schemas for request/response validation
"""

from pydantic import Field, field_validator
from typing import Optional, List, Any
from datetime import datetime
import uuid

from storefront.models.order import OrderStatus, PaymentStatus
from storefront.core.config import settings
from storefront.schemas import BaseSchema


class CheckoutLine(BaseSchema):
    """
    Cart line as submitted by the client

    Only productId and quantity are kept; any price, title or stock fields
    sent by the client are dropped.
    """
    product_id: str
    quantity: int = 1

    @field_validator("product_id", mode="before")
    @classmethod
    def strip_product_id(cls, v: Any) -> str:
        return str(v).strip()

    @field_validator("quantity", mode="before")
    @classmethod
    def clamp_quantity(cls, v: Any) -> int:
        try:
            quantity = int(v)
        except (TypeError, ValueError):
            quantity = 0
        if quantity < 1:
            quantity = 1
        return min(quantity, settings.MAX_LINE_QUANTITY)


class AddressInfo(BaseSchema):
    """Shipping address snapshot stored on the order"""
    address_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class OrderCreate(BaseSchema):
    """Schema for creating order"""
    user_id: uuid.UUID
    cart_id: Optional[uuid.UUID] = None
    cart_items: Optional[List[CheckoutLine]] = None
    address_info: AddressInfo = Field(default_factory=AddressInfo)
    payment_method: str = Field("paypal", max_length=50)
    # Accepted for compatibility, never trusted; the server recomputes it
    total_amount: Optional[float] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def strip_user_id(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class OrderCapture(BaseSchema):
    """Schema for capturing payment of an order"""
    order_id: uuid.UUID
    payment_id: Optional[str] = Field(None, max_length=200)
    payer_id: Optional[str] = Field(None, max_length=200)


class OrderStatusUpdate(BaseSchema):
    """Admin status change"""
    order_status: OrderStatus


class OrderItemResponse(BaseSchema):
    """Schema for order item snapshot"""
    product_id: uuid.UUID
    title: str
    image: Optional[str] = None
    price: float
    quantity: int


class OrderData(BaseSchema):
    """Schema for order response"""
    id: uuid.UUID
    user_id: uuid.UUID
    cart_id: Optional[uuid.UUID] = None
    cart_items: List[OrderItemResponse]
    address_info: dict
    order_status: OrderStatus
    payment_status: PaymentStatus
    payment_method: str
    total_amount: float
    payment_id: Optional[str] = None
    payer_id: Optional[str] = None
    is_demo_order: bool
    order_date: datetime
    order_update_date: datetime


class OrderCreatedResponse(BaseSchema):
    """Response after order creation"""
    success: bool = True
    message: str
    order_id: uuid.UUID
    approval_url: Optional[str] = Field(None, alias="approvalURL")
    is_demo: bool


class OrderResponse(BaseSchema):
    success: bool = True
    message: str
    data: OrderData


class OrderListResponse(BaseSchema):
    success: bool = True
    message: str
    data: List[OrderData]

"""
Cart schemas for request/response validation
"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
import uuid

from storefront.schemas import BaseSchema


class CartItemCreate(BaseSchema):
    """Schema for adding item to cart"""
    user_id: uuid.UUID
    product_id: uuid.UUID
    quantity: int = Field(..., gt=0)


class CartItemUpdate(BaseSchema):
    """Schema for updating cart item quantity"""
    user_id: uuid.UUID
    product_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    version: Optional[int] = Field(None, ge=1, description="Cart version the client last saw")


class CartLineResponse(BaseSchema):
    """Cart line with live product fields"""
    product_id: uuid.UUID
    image: Optional[str] = None
    title: str
    price: float
    sale_price: float
    quantity: int


class CartData(BaseSchema):
    """Schema for complete cart"""
    id: uuid.UUID
    user_id: uuid.UUID
    version: int
    items: List[CartLineResponse]
    created_at: datetime
    updated_at: datetime


class CartResponse(BaseSchema):
    """Envelope returned by every cart endpoint"""
    success: bool = True
    message: str
    data: CartData

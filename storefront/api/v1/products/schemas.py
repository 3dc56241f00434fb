"""
Product schemas for request/response validation
"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
import uuid

from storefront.schemas import BaseSchema


class ProductBase(BaseSchema):
    """Base schema for products"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    image: Optional[str] = Field(None, max_length=500)
    category: str = Field(..., min_length=1, max_length=100)
    brand: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    sale_price: Decimal = Field(Decimal("0"), ge=0)
    total_stock: int = Field(0, ge=0)
    average_review: Decimal = Field(Decimal("0"), ge=0, le=5)


class ProductCreate(ProductBase):
    """Schema for creating product"""
    pass


class ProductUpdate(BaseSchema):
    """Partial update; omitted fields keep their value"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    brand: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0)
    sale_price: Optional[Decimal] = Field(None, ge=0)
    total_stock: Optional[int] = Field(None, ge=0)
    average_review: Optional[Decimal] = Field(None, ge=0, le=5)


class ProductData(BaseSchema):
    """Schema for product response"""
    id: uuid.UUID
    title: str
    description: str
    image: Optional[str] = None
    category: str
    brand: str
    price: float
    sale_price: float
    total_stock: int
    average_review: float
    created_at: datetime
    updated_at: datetime


class ProductResponse(BaseSchema):
    success: bool = True
    message: str
    data: ProductData


class ProductListResponse(BaseSchema):
    success: bool = True
    message: str
    data: List[ProductData]

"""
Address schemas for request/response validation
"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
import uuid

from storefront.schemas import BaseSchema


class AddressCreate(BaseSchema):
    """All fields are required"""
    user_id: uuid.UUID
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=1, max_length=20)
    phone: str = Field(..., min_length=1, max_length=30)
    notes: str = Field(..., min_length=1)


class AddressUpdate(BaseSchema):
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    pincode: Optional[str] = Field(None, min_length=1, max_length=20)
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    notes: Optional[str] = Field(None, min_length=1)


class AddressData(BaseSchema):
    id: uuid.UUID
    user_id: uuid.UUID
    address: str
    city: str
    pincode: str
    phone: str
    notes: str
    created_at: datetime
    updated_at: datetime


class AddressResponse(BaseSchema):
    success: bool = True
    message: str
    data: AddressData


class AddressListResponse(BaseSchema):
    success: bool = True
    message: str
    data: List[AddressData]

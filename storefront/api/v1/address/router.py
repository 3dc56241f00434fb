"""
Shop address API routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.schemas import MessageResponse
from .schemas import AddressCreate, AddressData, AddressListResponse, AddressResponse, AddressUpdate
from .services import AddressService

router = APIRouter()


@router.post("/add", response_model=AddressResponse, status_code=status.HTTP_201_CREATED)
async def add_address(
    address_data: AddressCreate,
    db: AsyncSession = Depends(get_db)
):
    service = AddressService(db)
    address = await service.add_address(address_data)
    return {"success": True, "message": "Address added successfully", "data": AddressData.model_validate(address)}


@router.get("/get/{user_id}", response_model=AddressListResponse)
async def fetch_all_addresses(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    service = AddressService(db)
    addresses = await service.list_addresses(user_id)
    return {
        "success": True,
        "message": "All addresses fetched successfully",
        "data": [AddressData.model_validate(a) for a in addresses],
    }


@router.put("/update/{user_id}/{address_id}", response_model=AddressResponse)
async def edit_address(
    user_id: uuid.UUID,
    address_id: uuid.UUID,
    address_data: AddressUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = AddressService(db)
    address = await service.update_address(user_id, address_id, address_data)
    return {"success": True, "message": "Address updated successfully", "data": AddressData.model_validate(address)}


@router.delete("/delete/{user_id}/{address_id}", response_model=MessageResponse)
async def delete_address(
    user_id: uuid.UUID,
    address_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    service = AddressService(db)
    await service.delete_address(user_id, address_id)
    return {"success": True, "message": "Address deleted successfully"}

"""
Address service layer
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import uuid
import logging

from storefront.models import Address
from storefront.core.exceptions import NotFoundException
from .schemas import AddressCreate, AddressUpdate

logger = logging.getLogger(__name__)


class AddressService:
    """Saved shipping addresses of a user"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_address(self, user_id: uuid.UUID, address_id: uuid.UUID) -> Address:
        result = await self.db.execute(
            select(Address).where(Address.id == address_id, Address.user_id == user_id)
        )
        address = result.scalar_one_or_none()
        if not address:
            raise NotFoundException("Address not found")
        return address

    async def add_address(self, data: AddressCreate) -> Address:
        address = Address(**data.model_dump())
        self.db.add(address)
        await self.db.commit()
        await self.db.refresh(address)

        logger.info(f"Address {address.id} added for user {data.user_id}")
        return address

    async def list_addresses(self, user_id: uuid.UUID) -> List[Address]:
        result = await self.db.execute(
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.created_at)
        )
        return list(result.scalars().all())

    async def update_address(
        self,
        user_id: uuid.UUID,
        address_id: uuid.UUID,
        data: AddressUpdate
    ) -> Address:
        """
        Update an address owned by the user

        Raises:
            NotFoundException: If the user has no such address
        """
        address = await self._require_address(user_id, address_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(address, field, value)

        await self.db.commit()
        await self.db.refresh(address)
        return address

    async def delete_address(self, user_id: uuid.UUID, address_id: uuid.UUID) -> None:
        """
        Delete an address owned by the user

        Raises:
            NotFoundException: If the user has no such address
        """
        address = await self._require_address(user_id, address_id)
        await self.db.delete(address)
        await self.db.commit()

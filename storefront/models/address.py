"""User shipping address"""

from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import UUID

from .base import Base, TimestampedModel, UUIDModel


class Address(Base, TimestampedModel, UUIDModel):
    """Saved shipping address"""

    __tablename__ = "addresses"

    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    pincode = Column(String(20), nullable=False)
    phone = Column(String(30), nullable=False)
    notes = Column(Text, nullable=False)

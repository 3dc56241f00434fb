"""Catalog product model"""

from sqlalchemy import Column, String, Text, Numeric, Integer, Index, CheckConstraint
from decimal import Decimal

from .base import Base, TimestampedModel, UUIDModel


class Product(Base, TimestampedModel, UUIDModel):
    """Product listed in the shop; source of truth for price and stock"""

    __tablename__ = "products"

    # Basic info
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    image = Column(String(500), nullable=True)

    # Categorization
    category = Column(String(100), nullable=False, index=True)
    brand = Column(String(100), nullable=False, index=True)

    # Pricing
    price = Column(Numeric(10, 2), nullable=False, default=0)
    sale_price = Column(Numeric(10, 2), nullable=False, default=0)  # 0 means not on sale

    # Inventory
    total_stock = Column(Integer, nullable=False, default=0)

    # Stats
    average_review = Column(Numeric(3, 2), nullable=False, default=0)

    # Constraints
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_non_negative_price"),
        CheckConstraint("sale_price >= 0", name="check_non_negative_sale_price"),
        CheckConstraint("total_stock >= 0", name="check_non_negative_stock"),
        Index("idx_products_category_brand", "category", "brand"),
    )

    @property
    def final_price(self) -> Decimal:
        """Unit price charged at checkout"""
        if self.sale_price and self.sale_price > 0:
            return Decimal(self.sale_price)
        return Decimal(self.price)

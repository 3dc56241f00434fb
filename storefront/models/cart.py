"""
Shopping cart model
One cart per user, created lazily on first add
"""

from sqlalchemy import Column, Integer, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, UUIDModel


class Cart(Base, TimestampedModel, UUIDModel):
    """Per-user cart document"""

    __tablename__ = "carts"

    user_id = Column(UUID(as_uuid=True), nullable=False, unique=True, index=True)

    # Optimistic revision, bumped by the ORM on every UPDATE of this row
    version = Column(Integer, nullable=False)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.created_at",
    )

    __mapper_args__ = {"version_id_col": version}


class CartItem(Base, TimestampedModel, UUIDModel):
    """Shopping cart line: product reference plus quantity"""

    __tablename__ = "cart_items"

    cart_id = Column(UUID(as_uuid=True), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    # Relationships
    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")

    # Constraints
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_product"),
        CheckConstraint("quantity > 0", name="check_positive_cart_quantity"),
        Index("idx_cart_items_cart", "cart_id"),
    )

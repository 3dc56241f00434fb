"""Order model with payment tracking"""

from sqlalchemy import Column, String, Numeric, Integer, Enum, ForeignKey, Index, DateTime, Boolean, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, UUIDModel, utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class Order(Base, TimestampedModel, UUIDModel):
    """Customer order; cart lines are copied into OrderItem snapshots"""

    __tablename__ = "orders"

    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    cart_id = Column(UUID(as_uuid=True), nullable=True)

    # Status
    order_status = Column(
        Enum(OrderStatus, values_callable=lambda e: [m.value for m in e]),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_status = Column(
        Enum(PaymentStatus, values_callable=lambda e: [m.value for m in e]),
        default=PaymentStatus.PENDING,
        nullable=False,
    )

    # Payment
    payment_method = Column(String(50), nullable=False, default="paypal")
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_reference = Column(String(200), nullable=True)  # provider order id from creation
    payment_id = Column(String(200), nullable=True)
    payer_id = Column(String(200), nullable=True)
    is_demo_order = Column(Boolean, nullable=False, default=False)

    # Shipping address snapshot
    address_info = Column(JSON, nullable=False, default=dict)

    # Timestamps
    order_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    order_update_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        Index("idx_orders_user_status", "user_id", "order_status"),
    )

    @property
    def cart_items(self):
        return self.items


class OrderItem(Base, UUIDModel):
    """Item snapshot taken at order time"""

    __tablename__ = "order_items"

    order_id = Column(UUID(as_uuid=True), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # Snapshot fields; product_id is not a foreign key
    product_id = Column(UUID(as_uuid=True), nullable=False)
    title = Column(String(200), nullable=False)
    image = Column(String(500), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")

    __table_args__ = (
        Index("idx_order_items_order", "order_id"),
    )

"""Models package initialization"""

from .base import Base
from .product import Product
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderStatus, PaymentStatus
from .address import Address

# Export all models
__all__ = [
    "Base",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "Address",
]

"""Admin module exports"""

from .router import orders_router, products_router

__all__ = ["orders_router", "products_router"]

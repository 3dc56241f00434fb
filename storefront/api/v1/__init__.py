"""API v1 routes aggregation"""

from fastapi import APIRouter

from .cart.router import router as cart_router
from .orders.router import router as orders_router
from .products.router import router as products_router
from .address.router import router as address_router
from .admin.router import products_router as admin_products_router
from .admin.router import orders_router as admin_orders_router

# Create v1 router
api_router = APIRouter()

# Shop
api_router.include_router(cart_router, prefix="/shop/cart", tags=["Cart"])
api_router.include_router(orders_router, prefix="/shop/order", tags=["Orders"])
api_router.include_router(products_router, prefix="/shop/products", tags=["Products"])
api_router.include_router(address_router, prefix="/shop/address", tags=["Address"])

# Admin
api_router.include_router(admin_products_router, prefix="/admin/products", tags=["Admin Products"])
api_router.include_router(admin_orders_router, prefix="/admin/orders", tags=["Admin Orders"])

router = api_router

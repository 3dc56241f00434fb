"""Shop cart router"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from .schemas import CartItemCreate, CartItemUpdate, CartResponse
from .services import CartService, serialize_cart

router = APIRouter()


@router.post("/add", response_model=CartResponse)
async def add_to_cart(
    item_data: CartItemCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add item to cart"""
    service = CartService(db)
    cart = await service.add_to_cart(
        user_id=item_data.user_id,
        product_id=item_data.product_id,
        quantity=item_data.quantity
    )
    return {"success": True, "message": "Item added to cart successfully", "data": serialize_cart(cart)}


@router.get("/get/{user_id}", response_model=CartResponse)
async def get_cart(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get the user's cart with live product details"""
    service = CartService(db)
    cart = await service.get_cart(user_id)
    return {"success": True, "message": "Cart fetched successfully", "data": serialize_cart(cart)}


@router.put("/update-cart", response_model=CartResponse)
async def update_cart_item(
    update_data: CartItemUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update cart item quantity"""
    service = CartService(db)
    cart = await service.update_quantity(
        user_id=update_data.user_id,
        product_id=update_data.product_id,
        quantity=update_data.quantity,
        version=update_data.version
    )
    return {"success": True, "message": "Quantity updated successfully", "data": serialize_cart(cart)}


@router.delete("/{user_id}/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    user_id: uuid.UUID,
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Remove item from cart"""
    service = CartService(db)
    cart = await service.remove_from_cart(user_id=user_id, product_id=product_id)
    return {"success": True, "message": "Product removed from cart successfully", "data": serialize_cart(cart)}

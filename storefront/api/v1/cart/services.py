"""
Cart service layer
Handles shopping cart business logic
"""

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError
import uuid
import logging

from storefront.models import Cart, CartItem, Product
from storefront.core.exceptions import NotFoundException, StaleCartException

logger = logging.getLogger(__name__)


def serialize_cart(cart: Cart) -> Dict[str, Any]:
    """Flatten a loaded cart into the response shape"""
    return {
        "id": cart.id,
        "user_id": cart.user_id,
        "version": cart.version,
        "items": [
            {
                "product_id": item.product_id,
                "image": item.product.image,
                "title": item.product.title,
                "price": item.product.price,
                "sale_price": item.product.sale_price,
                "quantity": item.quantity,
            }
            for item in cart.items
            if item.product is not None
        ],
        "created_at": cart.created_at,
        "updated_at": cart.updated_at,
    }


class CartService:
    """Shopping cart service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load_cart(self, user_id: uuid.UUID) -> Optional[Cart]:
        """Load the user's cart with lines and their products"""
        result = await self.db.execute(
            select(Cart)
            .options(selectinload(Cart.items).selectinload(CartItem.product))
            .where(Cart.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _require_cart(self, user_id: uuid.UUID) -> Cart:
        cart = await self._load_cart(user_id)
        if not cart:
            raise NotFoundException("Cart not found")
        return cart

    async def _commit(self) -> None:
        """Commit, translating lost optimistic-lock races into 409"""
        try:
            await self.db.commit()
        except (StaleDataError, IntegrityError) as e:
            await self.db.rollback()
            logger.warning(f"Concurrent cart write rejected: {e}")
            raise StaleCartException()

    @staticmethod
    def _find_line(cart: Cart, product_id: uuid.UUID) -> Optional[CartItem]:
        for item in cart.items:
            if item.product_id == product_id:
                return item
        return None

    async def add_to_cart(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int
    ) -> Cart:
        """
        Add item to cart, creating the cart on first use

        Stock is not checked here; checkout validation enforces it.

        Raises:
            NotFoundException: If product not found
        """
        product = await self.db.get(Product, product_id)
        if not product:
            raise NotFoundException("Product not found")

        cart = await self._load_cart(user_id)
        if not cart:
            cart = Cart(user_id=user_id, items=[])
            self.db.add(cart)

        existing_item = self._find_line(cart, product_id)
        if existing_item:
            existing_item.quantity += quantity
        else:
            cart.items.append(CartItem(product_id=product_id, quantity=quantity))

        cart.touch()
        await self._commit()

        logger.info(f"Added {quantity} x {product_id} to cart of user {user_id}")
        return await self._load_cart(user_id)

    async def get_cart(self, user_id: uuid.UUID) -> Cart:
        """
        Get the user's cart, dropping lines whose product no longer exists

        Raises:
            NotFoundException: If the user has no cart
        """
        cart = await self._require_cart(user_id)

        orphans = [item for item in cart.items if item.product is None]
        if orphans:
            for item in orphans:
                cart.items.remove(item)
            cart.touch()
            await self._commit()
            logger.info(f"Pruned {len(orphans)} deleted products from cart of user {user_id}")
            cart = await self._require_cart(user_id)

        return cart

    async def update_quantity(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int,
        version: Optional[int] = None
    ) -> Cart:
        """
        Set the quantity of an existing line

        Raises:
            NotFoundException: If cart or line not found
            StaleCartException: If the client's version is out of date
        """
        cart = await self._require_cart(user_id)

        if version is not None and version != cart.version:
            raise StaleCartException(
                f"Cart has changed (version {cart.version}, expected {version}), reload and try again"
            )

        item = self._find_line(cart, product_id)
        if not item:
            raise NotFoundException("Product not found in cart")

        item.quantity = quantity
        cart.touch()
        await self._commit()

        return await self._load_cart(user_id)

    async def remove_from_cart(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID
    ) -> Cart:
        """
        Remove a line from the cart

        Raises:
            NotFoundException: If cart or line not found
        """
        cart = await self._require_cart(user_id)

        item = self._find_line(cart, product_id)
        if not item:
            raise NotFoundException("Product not found in cart")

        cart.items.remove(item)
        cart.touch()
        await self._commit()

        return await self._load_cart(user_id)

    async def delete_user_cart(self, user_id: uuid.UUID) -> None:
        """Delete the user's cart and its lines without committing"""
        cart_ids = select(Cart.id).where(Cart.user_id == user_id)
        await self.db.execute(delete(CartItem).where(CartItem.cart_id.in_(cart_ids)))
        await self.db.execute(delete(Cart).where(Cart.user_id == user_id))

"""
Checkout validation
Re-derives prices and stock from the catalog before an order is created
"""

from typing import Any, Dict, List, Tuple
from decimal import Decimal
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid
import logging

from storefront.core.config import Settings, get_settings
from storefront.core.database import get_db
from storefront.core.exceptions import BadRequestException, CartValidationException
from storefront.models import Product
from .schemas import CheckoutLine, OrderCreate

logger = logging.getLogger(__name__)


class ValidatedCart:
    """Request data plus the server-priced lines and total"""

    def __init__(self, order: OrderCreate, items: List[Dict[str, Any]], total_amount: Decimal):
        self.order = order
        self.items = items
        self.total_amount = total_amount


def check_cart_size(lines: List[CheckoutLine], max_items: int, max_quantity: int) -> None:
    """
    Reject carts over the distinct-product or total-quantity caps

    Raises:
        BadRequestException: If either cap is exceeded
    """
    if len(lines) > max_items:
        raise BadRequestException(
            f"Cart cannot contain more than {max_items} different products",
            error_code="CART_TOO_LARGE"
        )

    total_quantity = sum(line.quantity for line in lines)
    if total_quantity > max_quantity:
        raise BadRequestException(
            f"Cart cannot contain more than {max_quantity} total items",
            error_code="CART_TOO_LARGE"
        )


async def validate_checkout_lines(
    db: AsyncSession,
    lines: List[CheckoutLine]
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Check every line against the catalog

    All lines are checked; errors are collected rather than failing fast.

    Returns:
        (validated_items, errors)
    """
    validated_items: List[Dict[str, Any]] = []
    errors: List[Dict[str, Any]] = []

    for line in lines:
        try:
            product_uuid = uuid.UUID(line.product_id)
        except ValueError:
            product = None
        else:
            product = await db.get(Product, product_uuid)

        if not product:
            errors.append({
                "productId": line.product_id,
                "message": "Product not found or no longer available",
            })
            continue

        if product.total_stock < line.quantity:
            errors.append({
                "productId": line.product_id,
                "title": product.title,
                "message": f"Only {product.total_stock} items available in stock",
                "requestedQuantity": line.quantity,
                "availableStock": product.total_stock,
            })
            continue

        validated_items.append({
            "productId": product.id,
            "title": product.title,
            "image": product.image,
            "price": product.final_price,
            "quantity": line.quantity,
            "totalStock": product.total_stock,
        })

    return validated_items, errors


def calculate_total(items: List[Dict[str, Any]]) -> Decimal:
    return sum((Decimal(item["price"]) * item["quantity"] for item in items), Decimal("0"))


def validate_cart_size(
    order_data: OrderCreate,
    settings: Settings = Depends(get_settings)
) -> OrderCreate:
    """Dependency: size guard, enforced server-side regardless of client caps"""
    if order_data.cart_items:
        check_cart_size(order_data.cart_items, settings.MAX_CART_ITEMS, settings.MAX_CART_QUANTITY)
    return order_data


async def validate_cart_before_checkout(
    order_data: OrderCreate = Depends(validate_cart_size),
    db: AsyncSession = Depends(get_db)
) -> ValidatedCart:
    """
    Dependency: validate lines and recompute the total

    Raises:
        BadRequestException: If the cart is empty
        CartValidationException: If any line fails, with all errors and the passing lines
    """
    if not order_data.cart_items:
        raise BadRequestException("Cart is empty or invalid", error_code="EMPTY_CART")

    validated_items, errors = await validate_checkout_lines(db, order_data.cart_items)

    if errors:
        logger.info(f"Checkout rejected for user {order_data.user_id}: {len(errors)} invalid lines")
        raise CartValidationException(errors=errors, validated_items=validated_items)

    return ValidatedCart(
        order=order_data,
        items=validated_items,
        total_amount=calculate_total(validated_items),
    )

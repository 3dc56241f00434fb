"""
Order service layer
Handles order creation, payment capture and status management
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
import uuid
import logging

from storefront.models import Order, OrderItem, OrderStatus, PaymentStatus, Product
from storefront.models.base import utcnow
from storefront.core.config import Settings
from storefront.core.exceptions import (
    BadRequestException, NotFoundException, InsufficientStockException,
    InvalidOrderTransitionException
)
from storefront.api.v1.cart.services import CartService
from storefront.api.v1.payments.services import (
    PaymentService, build_payment_payload, extract_capture_id, extract_payer_id
)
from .schemas import OrderCapture
from .state_machine import OrderStateMachine
from .validation import ValidatedCart

logger = logging.getLogger(__name__)


def serialize_order(order: Order) -> Dict[str, Any]:
    """Flatten an order and its item snapshots into the response shape"""
    return {
        "id": order.id,
        "user_id": order.user_id,
        "cart_id": order.cart_id,
        "cart_items": [
            {
                "product_id": item.product_id,
                "title": item.title,
                "image": item.image,
                "price": item.price,
                "quantity": item.quantity,
            }
            for item in order.items
        ],
        "address_info": order.address_info or {},
        "order_status": order.order_status,
        "payment_status": order.payment_status,
        "payment_method": order.payment_method,
        "total_amount": order.total_amount,
        "payment_id": order.payment_id,
        "payer_id": order.payer_id,
        "is_demo_order": order.is_demo_order,
        "order_date": order.order_date,
        "order_update_date": order.order_update_date,
    }


class OrderService:
    """Order service for business logic"""

    def __init__(self, db: AsyncSession, payments: Optional[PaymentService] = None):
        self.db = db
        self.payments = payments
        self.cart_service = CartService(db)
        self.state_machine = OrderStateMachine()

    async def create_order(self, checkout: ValidatedCart, settings: Settings) -> Dict[str, Any]:
        """
        Create the provider payment, then persist a pending order

        Args:
            checkout: Server-validated lines and total
            settings: Supplies currency and redirect URLs for the payload

        Returns:
            {order, approvalURL, isDemo}

        Raises:
            PaymentGatewayException: If the provider order could not be created;
                nothing is persisted in that case
        """
        data = checkout.order
        payment_data = build_payment_payload(checkout.items, checkout.total_amount, settings)

        payment = await self.payments.create_payment(payment_data)

        order = Order(
            user_id=data.user_id,
            cart_id=data.cart_id,
            address_info=data.address_info.model_dump(by_alias=True, exclude_none=True),
            order_status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            payment_method=data.payment_method,
            total_amount=checkout.total_amount,
            payment_reference=payment["orderId"],
            is_demo_order=payment["isDemo"],
            order_date=utcnow(),
            order_update_date=utcnow(),
            items=[
                OrderItem(
                    position=position,
                    product_id=item["productId"],
                    title=item["title"],
                    image=item["image"],
                    price=item["price"],
                    quantity=item["quantity"],
                )
                for position, item in enumerate(checkout.items)
            ],
        )
        self.db.add(order)
        await self.db.commit()

        logger.info(
            f"Order {order.id} created for user {data.user_id} "
            f"(total {checkout.total_amount}, reference {payment['orderId']}, demo={payment['isDemo']})"
        )

        return {
            "order": order,
            "approvalURL": payment["approvalURL"],
            "isDemo": payment["isDemo"],
        }

    async def _decrement_stock(self, item: OrderItem) -> None:
        """
        Take stock for one line with a single conditional UPDATE

        Raises:
            NotFoundException: If the product no longer exists
            InsufficientStockException: If stock dropped below the line quantity
        """
        result = await self.db.execute(
            update(Product)
            .where(Product.id == item.product_id, Product.total_stock >= item.quantity)
            .values(total_stock=Product.total_stock - item.quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return

        product = await self.db.get(Product, item.product_id)
        if not product:
            raise NotFoundException(f"Product {item.title} is no longer available")
        raise InsufficientStockException(item.title, product.total_stock)

    @staticmethod
    def _capture_reference(order: Order, data: OrderCapture) -> str:
        """
        Pick the provider order to capture

        Provider orders are pinned to the reference stored at creation. Demo
        orders accept the caller's id so declines can be simulated.

        Raises:
            BadRequestException: If the reference is missing or belongs to another payment
        """
        if order.is_demo_order:
            reference = data.payment_id or order.payment_reference
        else:
            if data.payment_id and data.payment_id != order.payment_reference:
                raise BadRequestException(
                    "Payment does not belong to this order",
                    error_code="PAYMENT_REFERENCE_MISMATCH"
                )
            reference = order.payment_reference

        if not reference:
            raise BadRequestException("Payment reference is missing", error_code="MISSING_PAYMENT_REFERENCE")
        return reference

    async def _claim_pending(self, order: Order) -> None:
        """
        Move the order out of pending with a conditional UPDATE

        Raises:
            InvalidOrderTransitionException: If another request already moved it
        """
        result = await self.db.execute(
            update(Order)
            .where(Order.id == order.id, Order.order_status == OrderStatus.PENDING)
            .values(order_status=OrderStatus.COMPLETED, order_update_date=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise InvalidOrderTransitionException(OrderStatus.PENDING.value, OrderStatus.COMPLETED.value)

    async def capture_payment(self, data: OrderCapture) -> Order:
        """
        Capture payment for a pending order

        Claiming the order, stock decrement, capture and removal of the buyer's
        cart share one transaction; any failure rolls all of it back and the
        order stays pending.

        Raises:
            NotFoundException: If order not found
            BadRequestException: If the payment reference is missing or foreign
            InvalidOrderTransitionException: If the order is no longer pending
            InsufficientStockException: If a line would oversell
            PaymentGatewayException: If the provider capture failed
        """
        order = await self.get_order(data.order_id)

        if not self.state_machine.can_transition(order.order_status, OrderStatus.COMPLETED):
            raise InvalidOrderTransitionException(order.order_status.value, OrderStatus.COMPLETED.value)

        if order.is_demo_order != self.payments.is_demo:
            raise BadRequestException(
                "Order was created in a different payment mode",
                error_code="PAYMENT_MODE_MISMATCH"
            )

        reference = self._capture_reference(order, data)

        try:
            await self._claim_pending(order)

            for item in order.items:
                await self._decrement_stock(item)

            capture = await self.payments.capture_payment(reference)
        except Exception:
            await self.db.rollback()
            logger.warning(f"Capture of order {data.order_id} rolled back")
            raise

        supplied_id = data.payment_id if order.is_demo_order else None
        order.payment_id = supplied_id or extract_capture_id(capture) or reference
        order.payer_id = data.payer_id or extract_payer_id(capture)
        order.payment_status = PaymentStatus.PAID
        order.order_status = OrderStatus.COMPLETED
        order.order_update_date = utcnow()

        await self.cart_service.delete_user_cart(order.user_id)
        await self.db.commit()

        logger.info(f"Order {order.id} captured (payment {order.payment_id})")
        return order

    async def get_order(self, order_id: uuid.UUID) -> Order:
        """
        Get order by ID

        Raises:
            NotFoundException: If order not found
        """
        order = await self.db.get(Order, order_id)
        if not order:
            raise NotFoundException("Order not found")
        return order

    async def list_orders(self, user_id: uuid.UUID) -> List[Order]:
        """
        List a user's orders, newest first

        Raises:
            NotFoundException: If the user has no orders
        """
        result = await self.db.execute(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.order_date.desc())
        )
        orders = list(result.scalars().all())
        if not orders:
            raise NotFoundException("No orders found")
        return orders

    async def list_all_orders(self) -> List[Order]:
        """All orders for the admin dashboard"""
        result = await self.db.execute(select(Order).order_by(Order.order_date.desc()))
        return list(result.scalars().all())

    async def update_status(self, order_id: uuid.UUID, new_status: OrderStatus) -> Order:
        """
        Apply an admin status change

        Completion is reachable only through payment capture.

        Raises:
            NotFoundException: If order not found
            InvalidOrderTransitionException: If the transition is not allowed
        """
        order = await self.get_order(order_id)

        if not self.state_machine.can_set_manually(order.order_status, new_status):
            raise InvalidOrderTransitionException(order.order_status.value, new_status.value)

        order.order_status = new_status
        order.order_update_date = utcnow()
        await self.db.commit()

        logger.info(f"Order {order_id} status changed to {new_status.value}")
        return order

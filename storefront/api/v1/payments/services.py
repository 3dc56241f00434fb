"""
Payment service layer
Uniform facade over the mock and PayPal gateways
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol
from decimal import Decimal
from fastapi import Request
import logging

from storefront.core.config import Settings
from storefront.core.exceptions import PaymentGatewayException
from .mock_gateway import MockPaymentGateway
from .paypal_client import PayPalGateway

logger = logging.getLogger(__name__)

APPROVAL_RELS = ("approve", "payer-action", "approval_url")

TWO_PLACES = Decimal("0.01")


class PaymentGateway(Protocol):
    is_demo: bool

    async def create_order(self, order_data: Dict[str, Any]) -> Dict[str, Any]: ...

    async def capture_payment(self, order_id: str) -> Dict[str, Any]: ...

    async def get_order_details(self, order_id: str) -> Dict[str, Any]: ...


def find_approval_url(links: Optional[Iterable[Dict[str, Any]]]) -> Optional[str]:
    """Return the buyer approval link from a provider link collection"""
    by_rel = {link.get("rel"): link.get("href") for link in links or []}
    for rel in APPROVAL_RELS:
        if by_rel.get(rel):
            return by_rel[rel]
    return None


def extract_payer_id(capture: Dict[str, Any]) -> Optional[str]:
    return (capture.get("payer") or {}).get("payer_id")


def extract_capture_id(capture: Dict[str, Any]) -> Optional[str]:
    for unit in capture.get("purchase_units") or []:
        captures = (unit.get("payments") or {}).get("captures") or []
        if captures:
            return captures[0].get("id")
    return None


def _money(value: Decimal) -> str:
    return str(Decimal(value).quantize(TWO_PLACES))


def build_payment_payload(
    items: List[Dict[str, Any]],
    total_amount: Decimal,
    settings: Settings,
) -> Dict[str, Any]:
    """
    Build the provider order payload from validated cart lines

    Args:
        items: Validated lines (productId, title, price, quantity)
        total_amount: Server-computed order total
        settings: Supplies currency and redirect URLs

    Returns:
        Orders API payload
    """
    currency = settings.PAYMENT_CURRENCY

    return {
        "intent": "CAPTURE",
        "purchase_units": [
            {
                "reference_id": "default",
                "description": "Payment for order",
                "items": [
                    {
                        "name": item["title"],
                        "sku": str(item["productId"]),
                        "unit_amount": {"currency_code": currency, "value": _money(item["price"])},
                        "quantity": str(item["quantity"]),
                    }
                    for item in items
                ],
                "amount": {
                    "currency_code": currency,
                    "value": _money(total_amount),
                    "breakdown": {
                        "item_total": {"currency_code": currency, "value": _money(total_amount)},
                    },
                },
            }
        ],
        "application_context": {
            "return_url": settings.PAYMENT_RETURN_URL,
            "cancel_url": settings.PAYMENT_CANCEL_URL,
        },
    }


class PaymentService:
    """Payment facade; callers never branch on the payment mode"""

    def __init__(self, gateway: PaymentGateway, mode: str = "demo"):
        self.gateway = gateway
        self.mode = mode
        logger.info(f"[PaymentService] Initialized in {mode.upper()} mode")

    @property
    def is_demo(self) -> bool:
        return self.gateway.is_demo

    async def create_payment(self, payment_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a provider order for the payload

        Returns:
            {approvalURL, isDemo, orderId, status}
        """
        try:
            order = await self.gateway.create_order(payment_data)
        except PaymentGatewayException:
            raise
        except Exception as e:
            logger.exception(f"[PaymentService] Payment creation failed: {e}")
            raise PaymentGatewayException("Failed to create payment order", error=str(e))

        return {
            "approvalURL": find_approval_url(order.get("links")),
            "isDemo": self.is_demo,
            "orderId": order["id"],
            "status": order.get("status"),
        }

    async def create_order(self, order_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.gateway.create_order(order_data)

    async def capture_payment(self, order_id: str) -> Dict[str, Any]:
        """
        Capture payment for a provider order

        Raises:
            PaymentGatewayException: If the provider did not complete the capture
        """
        try:
            result = await self.gateway.capture_payment(order_id)
        except PaymentGatewayException:
            raise
        except Exception as e:
            logger.exception(f"[PaymentService] Capture of {order_id} raised: {e}")
            raise PaymentGatewayException("Payment capture failed", error=str(e))

        if result.get("status") != "COMPLETED":
            error = result.get("error") or {}
            message = error.get("message") or f"Capture status {result.get('status')}"
            logger.warning(f"[PaymentService] Capture of {order_id} failed: {message}")
            raise PaymentGatewayException("Payment capture failed", error=message)

        return result

    async def get_order_details(self, order_id: str) -> Dict[str, Any]:
        return await self.gateway.get_order_details(order_id)


def create_payment_service(settings: Settings) -> PaymentService:
    """Select the gateway once from configuration"""
    if settings.is_demo_payment:
        gateway = MockPaymentGateway(latency_scale=settings.MOCK_PAYMENT_LATENCY)
    else:
        gateway = PayPalGateway(
            client_id=settings.PAYPAL_CLIENT_ID or "",
            client_secret=settings.PAYPAL_CLIENT_SECRET or "",
            mode=settings.PAYMENT_MODE,
            timeout=settings.PAYMENT_TIMEOUT_SECONDS,
        )
    return PaymentService(gateway, mode=settings.PAYMENT_MODE)


def get_payment_service(request: Request) -> PaymentService:
    """FastAPI dependency returning the facade composed at startup"""
    return request.app.state.payment_service

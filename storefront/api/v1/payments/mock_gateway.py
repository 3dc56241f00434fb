"""
Mock payment gateway
Simulates the PayPal order flow for demo deployments without external calls
"""

from typing import Dict, Any, Optional, Callable
from datetime import datetime, timezone
import asyncio
import logging
import random
import string
import time

logger = logging.getLogger(__name__)

# Capture deterministically fails for order ids containing this marker
FAILURE_SENTINEL = "FAIL"

_ALPHABET = string.ascii_lowercase + string.digits


def _random_suffix(length: int) -> str:
    return "".join(random.choices(_ALPHABET, k=length))


def generate_order_id() -> str:
    return f"DEMO-{int(time.time() * 1000)}-{_random_suffix(9)}"


def generate_payment_id() -> str:
    return f"PAY-{_random_suffix(9).upper()}"


def generate_payer_id() -> str:
    return f"DEMO-PAYER-{_random_suffix(5).upper()}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class MockPaymentGateway:
    """Drop-in replacement for the real gateway, returning PayPal-shaped responses"""

    is_demo = True

    def __init__(
        self,
        latency_scale: float = 1.0,
        sleep: Optional[Callable[[float], Any]] = None,
    ):
        self.latency_scale = latency_scale
        self._sleep = sleep or asyncio.sleep

    async def _simulate_latency(self, seconds: float) -> None:
        delay = seconds * self.latency_scale
        if delay > 0:
            await self._sleep(delay)

    async def create_order(self, order_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a mock order

        Args:
            order_data: Provider payload (intent, purchase units)

        Returns:
            Order creation response with approve and self links
        """
        await self._simulate_latency(0.5)

        order_id = generate_order_id()
        logger.info(f"[DEMO MODE] Creating mock payment order: {order_id}")

        return {
            "id": order_id,
            "status": "CREATED",
            "links": [
                {"href": f"http://demo-payment/{order_id}", "rel": "approve", "method": "GET"},
                {"href": f"http://api/orders/{order_id}", "rel": "self", "method": "GET"},
            ],
        }

    async def capture_payment(self, order_id: str) -> Dict[str, Any]:
        """
        Capture a mock payment

        Args:
            order_id: Provider order id to capture

        Returns:
            Capture response; status is FAILED when the id carries the failure sentinel
        """
        await self._simulate_latency(0.8)

        if order_id and FAILURE_SENTINEL in order_id:
            logger.info(f"[DEMO MODE] Simulating payment failure for: {order_id}")
            return {
                "id": order_id,
                "status": "FAILED",
                "error": {
                    "name": "PAYMENT_DECLINED",
                    "message": "Payment declined - Demo Mode",
                    "debug_id": f"DEBUG-{_random_suffix(9)}",
                },
            }

        logger.info(f"[DEMO MODE] Capturing mock payment: {order_id}")
        now = _now_iso()

        return {
            "id": order_id,
            "status": "COMPLETED",
            "purchase_units": [
                {
                    "reference_id": "default",
                    "payments": {
                        "captures": [
                            {
                                "id": generate_payment_id(),
                                "status": "COMPLETED",
                                "amount": {"currency_code": "USD", "value": "0.00"},
                                "final_capture": True,
                                "create_time": now,
                                "update_time": now,
                            }
                        ]
                    },
                }
            ],
            "payer": {
                "payer_id": generate_payer_id(),
                "email_address": "demo@example.com",
                "name": {"given_name": "Demo", "surname": "User"},
            },
            "create_time": now,
            "update_time": now,
        }

    async def get_order_details(self, order_id: str) -> Dict[str, Any]:
        await self._simulate_latency(0.3)

        logger.info(f"[DEMO MODE] Fetching mock order details: {order_id}")

        return {
            "id": order_id,
            "status": "CREATED",
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "reference_id": "default",
                    "amount": {"currency_code": "USD", "value": "0.00"},
                }
            ],
            "create_time": _now_iso(),
            "links": [
                {"href": f"http://demo-payment/{order_id}", "rel": "approve", "method": "GET"},
            ],
        }

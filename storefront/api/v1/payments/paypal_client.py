"""
PayPal payment gateway integration (REST v2 Orders API)
"""

import httpx
import logging
import time
from typing import Dict, Any, Optional

from storefront.core.exceptions import PaymentGatewayException

logger = logging.getLogger(__name__)

PAYPAL_BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}


def _error_message(response: httpx.Response) -> str:
    """Pull the most useful message out of a PayPal error body"""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    details = body.get("details") or []
    if details and details[0].get("description"):
        return details[0]["description"]
    return body.get("message") or body.get("error_description") or f"HTTP {response.status_code}"


class PayPalGateway:
    """PayPal REST API client wrapper"""

    is_demo = False

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        mode: str = "sandbox",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if mode not in PAYPAL_BASE_URLS:
            raise ValueError(f"Unknown PayPal mode: {mode}")

        self.mode = mode
        self.base_url = PAYPAL_BASE_URLS[mode]
        self._auth = (client_id, client_secret)
        self._timeout = timeout
        self._transport = transport
        self._access_token: Optional[str] = None
        self._token_expires_at = 0.0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _get_access_token(self, client: httpx.AsyncClient) -> str:
        """Fetch an OAuth2 client-credentials token, reusing it until shortly before expiry"""
        if self._access_token and time.monotonic() < self._token_expires_at:
            return self._access_token

        response = await client.post(
            "/v1/oauth2/token",
            auth=self._auth,
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        token = response.json()

        self._access_token = token["access_token"]
        self._token_expires_at = time.monotonic() + int(token.get("expires_in", 0)) - 60
        return self._access_token

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                token = await self._get_access_token(client)
                response = await client.request(
                    method,
                    path,
                    json=json,
                    headers={
                        "Authorization": f"Bearer {token}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(f"[PayPal {self.mode}] {action} failed: {message}")
            raise PaymentGatewayException(f"Failed to {action}", error=message)
        except httpx.HTTPError as e:
            logger.error(f"[PayPal {self.mode}] {action} failed: {e}")
            raise PaymentGatewayException(f"Failed to {action}", error=str(e))

    async def create_order(self, order_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create PayPal order

        Args:
            order_data: Order payload (intent, purchase_units, application_context)

        Returns:
            PayPal order with id, status and links
        """
        order = await self._request("POST", "/v2/checkout/orders", "create payment order", json=order_data)
        logger.info(f"[PayPal {self.mode}] Created order {order.get('id')}")
        return order

    async def capture_payment(self, order_id: str) -> Dict[str, Any]:
        """
        Capture payment for an approved order

        Args:
            order_id: PayPal order ID

        Returns:
            Capture details
        """
        result = await self._request(
            "POST", f"/v2/checkout/orders/{order_id}/capture", "capture payment", json={}
        )
        logger.info(f"[PayPal {self.mode}] Captured order {order_id}: {result.get('status')}")
        return result

    async def get_order_details(self, order_id: str) -> Dict[str, Any]:
        """
        Fetch PayPal order details

        Args:
            order_id: PayPal order ID

        Returns:
            Order details
        """
        return await self._request("GET", f"/v2/checkout/orders/{order_id}", "fetch order")

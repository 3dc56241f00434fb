"""
Async HTTP client for the shop API
"""

from typing import Any, Dict, List, Optional
import httpx
import logging

logger = logging.getLogger(__name__)


class ShopClientError(Exception):
    """Request to the shop API failed"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


class ShopClient:
    """
    Thin wrapper over httpx.AsyncClient

    Every call returns the decoded JSON body of a successful response and raises
    ShopClientError with the server message otherwise.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ShopClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ShopClientError(f"Network error: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_error or body.get("success") is False:
            message = body.get("message") or f"HTTP {response.status_code}"
            raise ShopClientError(message, status_code=response.status_code, payload=body)

        return body

    # Cart
    async def add_to_cart(self, user_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        return await self._request(
            "POST", "/shop/cart/add",
            json={"userId": user_id, "productId": product_id, "quantity": quantity},
        )

    async def get_cart(self, user_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/shop/cart/get/{user_id}")

    async def update_cart(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        version: Optional[int] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"userId": user_id, "productId": product_id, "quantity": quantity}
        if version is not None:
            payload["version"] = version
        return await self._request("PUT", "/shop/cart/update-cart", json=payload)

    async def remove_from_cart(self, user_id: str, product_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/shop/cart/{user_id}/{product_id}")

    # Orders
    async def create_order(
        self,
        user_id: str,
        cart_items: List[Dict[str, Any]],
        cart_id: Optional[str] = None,
        address_info: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", "/shop/order/create",
            json={
                "userId": user_id,
                "cartId": cart_id,
                "cartItems": cart_items,
                "addressInfo": address_info or {},
                "paymentMethod": "paypal",
            },
        )

    async def capture_order(
        self,
        order_id: str,
        payment_id: Optional[str] = None,
        payer_id: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", "/shop/order/capture",
            json={"orderId": order_id, "paymentId": payment_id, "payerId": payer_id},
        )

    async def list_orders(self, user_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/shop/order/list/{user_id}")

    # Catalog
    async def get_products(
        self,
        filters: Optional[Dict[str, List[str]]] = None,
        sort_by: str = "price-lowtohigh"
    ) -> Dict[str, Any]:
        params = {key: ",".join(values) for key, values in (filters or {}).items() if values}
        params["sortBy"] = sort_by
        return await self._request("GET", "/shop/products/get", params=params)

import httpx
import pytest

from storefront.client.api import ShopClient, ShopClientError


def client_returning(status_code, **response_kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **response_kwargs)

    return ShopClient(base_url="http://shop/api", transport=httpx.MockTransport(handler))


async def test_envelope_is_returned_as_is():
    async with client_returning(200, json={"success": True, "data": {"items": []}}) as shop:
        body = await shop.get_cart("u1")

    assert body == {"success": True, "data": {"items": []}}


async def test_error_envelope_raises_with_server_message():
    async with client_returning(404, json={"success": False, "message": "Cart not found"}) as shop:
        with pytest.raises(ShopClientError) as exc_info:
            await shop.get_cart("u1")

    assert exc_info.value.message == "Cart not found"
    assert exc_info.value.status_code == 404


async def test_non_object_success_body_is_wrapped():
    async with client_returning(200, json=[1, 2]) as shop:
        body = await shop.get_cart("u1")

    assert body == {"data": [1, 2]}


@pytest.mark.parametrize("payload", [["boom"], "boom", 7])
async def test_non_object_error_body_raises_client_error(payload):
    async with client_returning(502, json=payload) as shop:
        with pytest.raises(ShopClientError) as exc_info:
            await shop.get_cart("u1")

    assert exc_info.value.message == "HTTP 502"
    assert exc_info.value.payload == {"data": payload}


async def test_network_failure_raises_client_error():
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    async with ShopClient(base_url="http://shop/api", transport=httpx.MockTransport(unreachable)) as shop:
        with pytest.raises(ShopClientError) as exc_info:
            await shop.get_cart("u1")

    assert exc_info.value.message.startswith("Network error")

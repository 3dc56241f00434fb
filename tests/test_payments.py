import json
from decimal import Decimal

import httpx
import pytest

from storefront.api.v1.payments.mock_gateway import MockPaymentGateway
from storefront.api.v1.payments.paypal_client import PAYPAL_BASE_URLS, PayPalGateway
from storefront.api.v1.payments.services import (
    PaymentService, build_payment_payload, create_payment_service, extract_capture_id,
    extract_payer_id, find_approval_url
)
from storefront.core.config import Settings
from storefront.core.exceptions import PaymentGatewayException


@pytest.fixture
def mock_gateway():
    return MockPaymentGateway(latency_scale=0)


async def test_mock_create_order_shape(mock_gateway):
    order = await mock_gateway.create_order({})

    assert order["id"].startswith("DEMO-")
    assert order["status"] == "CREATED"
    assert find_approval_url(order["links"]) == f"http://demo-payment/{order['id']}"


async def test_mock_capture_succeeds(mock_gateway):
    result = await mock_gateway.capture_payment("DEMO-1-abc")

    assert result["status"] == "COMPLETED"
    assert extract_capture_id(result).startswith("PAY-")
    assert extract_payer_id(result).startswith("DEMO-PAYER-")


async def test_mock_capture_fails_on_sentinel(mock_gateway):
    result = await mock_gateway.capture_payment("DEMO-FAIL-1")

    assert result["status"] == "FAILED"
    assert result["error"]["message"] == "Payment declined - Demo Mode"


async def test_mock_latency_is_scaled():
    delays = []

    async def record(seconds):
        delays.append(seconds)

    gateway = MockPaymentGateway(latency_scale=2.0, sleep=record)
    await gateway.create_order({})
    await gateway.capture_payment("X")
    await gateway.get_order_details("X")

    assert delays == [1.0, 1.6, 0.6]


async def test_facade_raises_on_failed_capture(mock_gateway):
    service = PaymentService(mock_gateway, mode="demo")

    with pytest.raises(PaymentGatewayException) as exc_info:
        await service.capture_payment("FAIL")

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == "Payment declined - Demo Mode"


async def test_facade_create_payment(mock_gateway):
    service = PaymentService(mock_gateway, mode="demo")

    result = await service.create_payment({})

    assert result["isDemo"] is True
    assert result["status"] == "CREATED"
    assert result["approvalURL"].endswith(result["orderId"])


async def test_facade_wraps_unexpected_errors():
    class Exploding:
        is_demo = False

        async def create_order(self, order_data):
            raise RuntimeError("socket closed")

        async def capture_payment(self, order_id):
            raise RuntimeError("socket closed")

    service = PaymentService(Exploding(), mode="live")

    with pytest.raises(PaymentGatewayException) as create_error:
        await service.create_payment({})
    with pytest.raises(PaymentGatewayException) as capture_error:
        await service.capture_payment("ORDER-1")

    assert create_error.value.error == "socket closed"
    assert capture_error.value.detail == "Payment capture failed"


def test_find_approval_url_prefers_approve():
    links = [
        {"rel": "self", "href": "https://api/self"},
        {"rel": "payer-action", "href": "https://pay/action"},
        {"rel": "approve", "href": "https://pay/approve"},
    ]

    assert find_approval_url(links) == "https://pay/approve"
    assert find_approval_url(links[:2]) == "https://pay/action"
    assert find_approval_url(links[:1]) is None
    assert find_approval_url(None) is None


def test_build_payment_payload():
    settings = Settings(PAYMENT_CURRENCY="EUR", PAYMENT_RETURN_URL="https://shop/return", PAYMENT_CANCEL_URL="https://shop/cancel")
    items = [
        {"productId": "p1", "title": "Shirt", "price": Decimal("80"), "quantity": 2},
        {"productId": "p2", "title": "Cap", "price": Decimal("9.5"), "quantity": 1},
    ]

    payload = build_payment_payload(items, Decimal("169.5"), settings)

    assert payload["intent"] == "CAPTURE"
    unit = payload["purchase_units"][0]
    assert unit["amount"] == {
        "currency_code": "EUR",
        "value": "169.50",
        "breakdown": {"item_total": {"currency_code": "EUR", "value": "169.50"}},
    }
    assert unit["items"][0] == {
        "name": "Shirt",
        "sku": "p1",
        "unit_amount": {"currency_code": "EUR", "value": "80.00"},
        "quantity": "2",
    }
    assert payload["application_context"] == {
        "return_url": "https://shop/return",
        "cancel_url": "https://shop/cancel",
    }


def test_create_payment_service_selects_gateway():
    demo = create_payment_service(Settings(PAYMENT_MODE="demo", MOCK_PAYMENT_LATENCY=0))
    sandbox = create_payment_service(Settings(PAYMENT_MODE="sandbox", PAYPAL_CLIENT_ID="id", PAYPAL_CLIENT_SECRET="s"))
    live = create_payment_service(Settings(PAYMENT_MODE="live", PAYPAL_CLIENT_ID="id", PAYPAL_CLIENT_SECRET="s"))

    assert demo.is_demo and isinstance(demo.gateway, MockPaymentGateway)
    assert not sandbox.is_demo
    assert sandbox.gateway.base_url == PAYPAL_BASE_URLS["sandbox"]
    assert live.gateway.base_url == PAYPAL_BASE_URLS["live"]
    assert live.mode == "live"


def test_paypal_gateway_rejects_unknown_mode():
    with pytest.raises(ValueError):
        PayPalGateway("id", "secret", mode="demo")


class FakePayPal:
    """Handler for httpx.MockTransport recording the calls it receives"""

    def __init__(self):
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))

        if request.url.path == "/v1/oauth2/token":
            assert request.headers["Authorization"].startswith("Basic ")
            return httpx.Response(200, json={"access_token": "token-1", "expires_in": 3600})

        assert request.headers["Authorization"] == "Bearer token-1"

        if request.url.path == "/v2/checkout/orders":
            body = json.loads(request.content)
            if body["purchase_units"][0]["amount"]["value"] == "0.00":
                return httpx.Response(422, json={
                    "name": "UNPROCESSABLE_ENTITY",
                    "message": "The requested action could not be performed",
                    "details": [{"issue": "AMOUNT_MISMATCH", "description": "Amount must be positive"}],
                })
            return httpx.Response(201, json={
                "id": "5O190127TN364715T",
                "status": "PAYER_ACTION_REQUIRED",
                "links": [
                    {"rel": "self", "href": "https://api/self"},
                    {"rel": "payer-action", "href": "https://www.sandbox.paypal.com/checkoutnow?token=5O190127TN364715T"},
                ],
            })

        if request.url.path.endswith("/capture"):
            return httpx.Response(201, json={
                "id": "5O190127TN364715T",
                "status": "COMPLETED",
                "payer": {"payer_id": "QYR5Z8XDVJNXQ"},
                "purchase_units": [{"payments": {"captures": [{"id": "3C679366HH908993F"}]}}],
            })

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def fake_paypal():
    return FakePayPal()


@pytest.fixture
def paypal_service(fake_paypal):
    gateway = PayPalGateway("id", "secret", mode="sandbox", transport=httpx.MockTransport(fake_paypal))
    return PaymentService(gateway, mode="sandbox")


def payload(total: str):
    settings = Settings()
    return build_payment_payload(
        [{"productId": "p1", "title": "Shirt", "price": Decimal(total), "quantity": 1}],
        Decimal(total),
        settings,
    )


async def test_paypal_create_and_capture(paypal_service, fake_paypal):
    created = await paypal_service.create_payment(payload("25.00"))

    assert created == {
        "approvalURL": "https://www.sandbox.paypal.com/checkoutnow?token=5O190127TN364715T",
        "isDemo": False,
        "orderId": "5O190127TN364715T",
        "status": "PAYER_ACTION_REQUIRED",
    }

    captured = await paypal_service.capture_payment(created["orderId"])

    assert extract_capture_id(captured) == "3C679366HH908993F"
    assert extract_payer_id(captured) == "QYR5Z8XDVJNXQ"
    # token fetched once and reused
    assert [path for _, path in fake_paypal.calls].count("/v1/oauth2/token") == 1


async def test_paypal_error_carries_provider_message(paypal_service):
    with pytest.raises(PaymentGatewayException) as exc_info:
        await paypal_service.create_payment(payload("0.00"))

    assert exc_info.value.detail == "Failed to create payment order"
    assert exc_info.value.error == "Amount must be positive"


async def test_paypal_network_error_is_wrapped():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = PayPalGateway("id", "secret", transport=httpx.MockTransport(unreachable))

    with pytest.raises(PaymentGatewayException) as exc_info:
        await gateway.capture_payment("ORDER-1")

    assert exc_info.value.error == "connection refused"

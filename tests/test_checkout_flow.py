"""Guest shopping through to a paid order, driven by the client package"""

import httpx
import pytest

from storefront.client.api import ShopClient, ShopClientError
from storefront.client.local_cart import LocalCart
from storefront.client.merge import merge_guest_cart
from storefront.client.session import SessionState
from storefront.client.storage import MemoryStorage
from storefront.main import app
from storefront.models import Product


@pytest.fixture
async def shop(client):
    shop = ShopClient(base_url="http://test/api", transport=httpx.ASGITransport(app=app))
    yield shop
    await shop.aclose()


async def test_guest_to_paid_order(shop, user_id, make_product, fetch):
    shirt = await make_product(title="Shirt", price=100, total_stock=10)
    local_cart = LocalCart(MemoryStorage())
    session = SessionState(MemoryStorage())

    # Browsing as a guest
    assert local_cart.add(str(shirt.id), 2)["success"]
    session.remember_redirect("/shop/checkout")

    # Login
    cart = await merge_guest_cart(shop, local_cart, user_id)
    assert not local_cart.has_items()
    assert session.pop_redirect() == "/shop/checkout"

    created = await shop.create_order(
        user_id,
        [{"productId": line["productId"], "quantity": line["quantity"], "price": 1} for line in cart["items"]],
        cart_id=cart["id"],
        address_info={"city": "Pune"},
    )
    assert created["isDemo"] is True

    paid = await shop.capture_order(created["orderId"])
    order = paid["data"]
    assert order["orderStatus"] == "completed"
    assert order["totalAmount"] == 200.0

    assert (await fetch(Product, shirt.id)).total_stock == 8
    with pytest.raises(ShopClientError):
        await shop.get_cart(user_id)

    orders = await shop.list_orders(user_id)
    assert [o["id"] for o in orders["data"]] == [created["orderId"]]


async def test_declined_payment_can_be_retried(shop, user_id, make_product, fetch):
    shirt = await make_product(total_stock=5)

    created = await shop.create_order(user_id, [{"productId": str(shirt.id), "quantity": 1}])

    with pytest.raises(ShopClientError) as exc_info:
        await shop.capture_order(created["orderId"], payment_id="FAIL-TEST")
    assert exc_info.value.status_code == 500
    assert exc_info.value.payload["error"] == "Payment declined - Demo Mode"

    retried = await shop.capture_order(created["orderId"])
    assert retried["data"]["orderStatus"] == "completed"
    assert (await fetch(Product, shirt.id)).total_stock == 4


async def test_client_product_listing(shop, make_product):
    await make_product(title="B", category="men", brand="nike")
    await make_product(title="A", category="women", brand="nike")

    listing = await shop.get_products({"category": ["men", "women"], "brand": []}, sort_by="title-atoz")

    assert [p["title"] for p in listing["data"]] == ["A", "B"]

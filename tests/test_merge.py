import uuid

import httpx
import pytest

from storefront.client.api import ShopClient, ShopClientError
from storefront.client.local_cart import LocalCart
from storefront.client.merge import CartMergeError, merge_guest_cart
from storefront.client.storage import MemoryStorage
from storefront.main import app


@pytest.fixture
async def shop(client):
    # `client` installs the database and payment overrides on the app
    shop = ShopClient(base_url="http://test/api", transport=httpx.ASGITransport(app=app))
    yield shop
    await shop.aclose()


@pytest.fixture
def local_cart():
    return LocalCart(MemoryStorage())


async def test_merge_pushes_lines_and_clears_local_cart(shop, local_cart, user_id, make_product):
    first = await make_product(title="A")
    second = await make_product(title="B")
    local_cart.add(str(first.id), 2)
    local_cart.add(str(second.id), 1)

    cart = await merge_guest_cart(shop, local_cart, user_id)

    assert sorted((i["title"], i["quantity"]) for i in cart["items"]) == [("A", 2), ("B", 1)]
    assert not local_cart.has_items()


async def test_merge_adds_to_existing_server_lines(shop, local_cart, user_id, make_product):
    product = await make_product()
    await shop.add_to_cart(user_id, str(product.id), 1)
    local_cart.add(str(product.id), 3)

    cart = await merge_guest_cart(shop, local_cart, user_id)

    assert cart["items"][0]["quantity"] == 4


async def test_merge_stops_at_first_failure_and_keeps_local_cart(shop, local_cart, user_id, make_product):
    good = await make_product(title="Good")
    missing = str(uuid.uuid4())
    local_cart.add(str(good.id), 1)
    local_cart.add(missing, 1)

    with pytest.raises(CartMergeError) as exc_info:
        await merge_guest_cart(shop, local_cart, user_id)

    assert exc_info.value.message == "Product not found"
    assert exc_info.value.product_id == missing
    assert exc_info.value.merged == 1
    assert local_cart.get_count() == 2

    # Lines before the failure stay on the server
    server = await shop.get_cart(user_id)
    assert [i["title"] for i in server["data"]["items"]] == ["Good"]


async def test_merge_of_empty_local_cart_is_noop(shop, local_cart, user_id):
    assert await merge_guest_cart(shop, local_cart, user_id) == {}

    with pytest.raises(ShopClientError) as exc_info:
        await shop.get_cart(user_id)
    assert exc_info.value.status_code == 404

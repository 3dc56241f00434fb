import uuid

import pytest


@pytest.fixture
def address_payload(user_id):
    return {
        "userId": user_id,
        "address": "12 Hill Rd",
        "city": "Pune",
        "pincode": "411001",
        "phone": "5550100",
        "notes": "Ring twice",
    }


async def test_add_and_list_addresses(client, user_id, address_payload):
    created = await client.post("/api/shop/address/add", json=address_payload)

    assert created.status_code == 201
    assert created.json()["data"]["city"] == "Pune"

    listing = await client.get(f"/api/shop/address/get/{user_id}")
    assert [a["address"] for a in listing.json()["data"]] == ["12 Hill Rd"]

    other = await client.get(f"/api/shop/address/get/{uuid.uuid4()}")
    assert other.json()["data"] == []


@pytest.mark.parametrize("field", ["address", "city", "pincode", "phone", "notes"])
async def test_add_requires_every_field(client, address_payload, field):
    del address_payload[field]

    response = await client.post("/api/shop/address/add", json=address_payload)

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_update_address(client, user_id, address_payload):
    address_id = (await client.post("/api/shop/address/add", json=address_payload)).json()["data"]["id"]

    response = await client.put(f"/api/shop/address/update/{user_id}/{address_id}", json={"city": "Mumbai"})

    assert response.status_code == 200
    assert response.json()["data"]["city"] == "Mumbai"
    assert response.json()["data"]["pincode"] == "411001"


async def test_update_missing_address_is_404(client, user_id):
    response = await client.put(f"/api/shop/address/update/{user_id}/{uuid.uuid4()}", json={"city": "Mumbai"})

    assert response.status_code == 404
    assert response.json()["message"] == "Address not found"


async def test_delete_address(client, user_id, address_payload):
    address_id = (await client.post("/api/shop/address/add", json=address_payload)).json()["data"]["id"]

    response = await client.delete(f"/api/shop/address/delete/{user_id}/{address_id}")

    assert response.status_code == 200
    assert (await client.get(f"/api/shop/address/get/{user_id}")).json()["data"] == []


async def test_cannot_delete_another_users_address(client, address_payload):
    address_id = (await client.post("/api/shop/address/add", json=address_payload)).json()["data"]["id"]

    response = await client.delete(f"/api/shop/address/delete/{uuid.uuid4()}/{address_id}")

    assert response.status_code == 404

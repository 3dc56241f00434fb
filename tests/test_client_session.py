from storefront.client.session import SessionState
from storefront.client.storage import FILTERS_KEY, REDIRECT_KEY, MemoryStorage


def test_redirect_is_returned_once():
    storage = MemoryStorage()
    session = SessionState(storage)

    session.remember_redirect("/shop/checkout")

    assert storage.get_item(REDIRECT_KEY) == "/shop/checkout"
    assert session.pop_redirect() == "/shop/checkout"
    assert session.pop_redirect() == "/shop/home"


def test_filters_round_trip():
    storage = MemoryStorage()
    session = SessionState(storage)

    assert session.load_filters() is None

    session.save_filters({"category": ["men", "women"], "brand": ["nike"]})

    assert session.load_filters() == {"category": ["men", "women"], "brand": ["nike"]}
    assert FILTERS_KEY in storage._data


def test_corrupt_filters_read_as_none():
    storage = MemoryStorage()
    storage.set_item(FILTERS_KEY, "{oops")

    assert SessionState(storage).load_filters() is None

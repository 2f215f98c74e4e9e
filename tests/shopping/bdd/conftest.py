"""Shared BDD fixtures and step definitions for the Shopping domain."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then, when
from shopping.basket.discounts import AttachDiscountToBasket
from shopping.basket.items import AddItemsToBasket, RemoveItemFromBasket
from shopping.basket.management import CreateBasket
from shopping.basket.shipping import AttachShippingDestination
from shopping.basket.store import basket_store, process_exclusively
from shopping.catalog.seed import APPLE_ID, BANANA_ID, ORANGE_ID, seed_catalog
from shopping.errors import ShoppingError

# Product names used in feature files; unknown names pass through as ids
PRODUCT_IDS = {
    "Apple": APPLE_ID,
    "Banana": BANANA_ID,
    "Orange": ORANGE_ID,
}


def product_id_for(name):
    return PRODUCT_IDS.get(name, name)


def add_items(basket_id, *items):
    process_exclusively(AddItemsToBasket(basket_id=basket_id, items=json.dumps(list(items))))


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the error captured by a When step."""
    return {"exc": None}


@pytest.fixture(autouse=True)
def _default_vat_rate(monkeypatch):
    monkeypatch.delenv("VAT_RATE", raising=False)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the default catalog")
def _():
    seed_catalog()


@given("an empty basket", target_fixture="basket_id")
def _():
    return current_domain.process(CreateBasket(), asynchronous=False)


@given(parsers.cfparse('{qty:d} "{name}" is in the basket'))
@given(parsers.cfparse('{qty:d} "{name}" are in the basket'))
def _(basket_id, qty, name):
    add_items(basket_id, {"product_id": product_id_for(name), "quantity": qty})


@given(parsers.cfparse('{qty:d} "{name}" are in the basket with discount "{discount_id}"'))
def _(basket_id, qty, name, discount_id):
    add_items(
        basket_id,
        {"product_id": product_id_for(name), "quantity": qty, "discount_id": discount_id},
    )


@given(parsers.cfparse('the basket discount is "{discount_id}"'))
def _(basket_id, discount_id):
    process_exclusively(AttachDiscountToBasket(basket_id=basket_id, discount_id=discount_id))


@given(parsers.cfparse('the basket ships to "{country}"'))
def _(basket_id, country):
    process_exclusively(AttachShippingDestination(basket_id=basket_id, country=country))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the error "{kind}" is reported'))
def _(error, kind):
    assert error["exc"] is not None
    assert error["exc"].kind == kind


@then(parsers.cfparse("the basket has {count:d} line item"))
@then(parsers.cfparse("the basket has {count:d} line items"))
def _(basket_id, count):
    assert len(basket_store.get_basket(basket_id).items) == count


@then(parsers.cfparse('the basket holds {qty:d} "{name}"'))
def _(basket_id, qty, name):
    item = basket_store.get_basket(basket_id).item_for(product_id_for(name))
    assert item is not None
    assert item.quantity == qty


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{qty:d} "{name}" is added to the basket'))
@when(parsers.cfparse('{qty:d} "{name}" are added to the basket'))
def _(basket_id, qty, name):
    add_items(basket_id, {"product_id": product_id_for(name), "quantity": qty})


@when(parsers.cfparse('a batch of {qty1:d} "{name1}" and {qty2:d} "{name2}" is added to the basket'))
def _(basket_id, qty1, name1, qty2, name2, error):
    try:
        add_items(
            basket_id,
            {"product_id": product_id_for(name1), "quantity": qty1},
            {"product_id": product_id_for(name2), "quantity": qty2},
        )
    except ShoppingError as exc:
        error["exc"] = exc


@when(parsers.cfparse('"{name}" is removed from the basket'))
def _(basket_id, name, error):
    try:
        process_exclusively(RemoveItemFromBasket(basket_id=basket_id, product_id=product_id_for(name)))
    except ShoppingError as exc:
        error["exc"] = exc


@then(parsers.cfparse('the line items are "{names}"'))
def _(basket_id, names):
    names_by_id = {pid: name for name, pid in PRODUCT_IDS.items()}
    items = basket_store.get_basket(basket_id).items
    assert ", ".join(names_by_id[str(i.product_id)] for i in items) == names

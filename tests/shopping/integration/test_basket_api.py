"""Integration tests for the basket and catalog API endpoints via TestClient."""

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from shopping.api import (
    basket_router,
    discount_router,
    product_router,
    register_error_handlers,
    shipping_router,
)
from shopping.basket.store import basket_store
from shopping.catalog.seed import APPLE_ID, BANANA_ID, ORANGE_ID


@pytest.fixture()
def client(catalog):
    app = FastAPI()
    app.include_router(basket_router)
    app.include_router(product_router)
    app.include_router(discount_router)
    app.include_router(shipping_router)
    register_error_handlers(app)
    return TestClient(app)


def _create_basket(client):
    """Helper: POST /baskets and return the basket id."""
    response = client.post("/baskets")
    assert response.status_code == 201
    return response.json()["id"]


def _add_items(client, basket_id, *items):
    return client.post(f"/baskets/{basket_id}/items", json=list(items))


class TestCreateBasketEndpoint:
    def test_create_basket(self, client):
        response = client.post("/baskets")
        assert response.status_code == 201

        body = response.json()
        assert body["items"] == []
        assert body["discount_id"] is None
        assert body["shipping_destination"] is None
        assert basket_store.get_basket(body["id"]) is not None

    def test_get_basket(self, client):
        basket_id = _create_basket(client)
        response = client.get(f"/baskets/{basket_id}")
        assert response.status_code == 200
        assert response.json()["id"] == basket_id

    def test_get_unknown_basket(self, client):
        response = client.get("/baskets/no-such-basket")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Basket not found."


class TestBasketItemEndpoints:
    def test_add_items(self, client):
        basket_id = _create_basket(client)
        response = _add_items(
            client,
            basket_id,
            {"product_id": APPLE_ID, "quantity": 2},
            {"product_id": BANANA_ID, "quantity": 1, "discount_id": "10PERCENT"},
        )
        assert response.status_code == 200

        items = response.json()["items"]
        assert [(i["product_id"], i["quantity"], i["discount_id"]) for i in items] == [
            (APPLE_ID, 2, None),
            (BANANA_ID, 1, "10PERCENT"),
        ]

    def test_adding_same_product_merges(self, client):
        basket_id = _create_basket(client)
        _add_items(client, basket_id, {"product_id": APPLE_ID, "quantity": 1})
        response = _add_items(client, basket_id, {"product_id": APPLE_ID, "quantity": 2})

        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3

    def test_rejected_batch_returns_all_errors(self, client):
        basket_id = _create_basket(client)
        response = _add_items(
            client,
            basket_id,
            {"product_id": APPLE_ID, "quantity": 1},
            {"product_id": BANANA_ID, "quantity": 0},
            {"product_id": "ghost", "quantity": 1},
        )
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["kind"] == "BasketItemsRejected"
        assert [e["kind"] for e in error["errors"]] == ["InvalidQuantity", "NotFound"]
        assert client.get(f"/baskets/{basket_id}").json()["items"] == []

    def test_empty_batch(self, client):
        basket_id = _create_basket(client)
        response = _add_items(client, basket_id)
        assert response.status_code == 400
        assert response.json()["error"]["kind"] == "NoItemsProvided"

    def test_add_to_unknown_basket(self, client):
        response = _add_items(client, "no-such-basket", {"product_id": APPLE_ID, "quantity": 1})
        assert response.status_code == 404

    def test_remove_item(self, client):
        basket_id = _create_basket(client)
        _add_items(
            client,
            basket_id,
            {"product_id": APPLE_ID, "quantity": 1},
            {"product_id": ORANGE_ID, "quantity": 1},
        )
        response = client.delete(f"/baskets/{basket_id}/items/{APPLE_ID}")
        assert response.status_code == 200
        assert [i["product_id"] for i in response.json()["items"]] == [ORANGE_ID]

    def test_remove_absent_item(self, client):
        basket_id = _create_basket(client)
        response = client.delete(f"/baskets/{basket_id}/items/{APPLE_ID}")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "ProductNotInBasket"


class TestBasketAttachmentEndpoints:
    def test_attach_discount(self, client):
        basket_id = _create_basket(client)
        response = client.post(f"/baskets/{basket_id}/discount/10PERCENT")
        assert response.status_code == 200
        assert response.json()["discount_id"] == "10PERCENT"

    def test_attach_unknown_discount(self, client):
        basket_id = _create_basket(client)
        response = client.post(f"/baskets/{basket_id}/discount/FREE")
        assert response.status_code == 404
        assert response.json()["error"]["entity"] == "Discount"

    def test_attach_shipping(self, client):
        basket_id = _create_basket(client)
        response = client.post(f"/baskets/{basket_id}/shipping/UK")
        assert response.status_code == 200
        assert response.json()["shipping_destination"] == "UK"

    def test_attach_unsupported_shipping(self, client):
        basket_id = _create_basket(client)
        response = client.post(f"/baskets/{basket_id}/shipping/ZZ")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Shipping not supported for ZZ"


class TestBasketTotalEndpoints:
    def test_total_requires_shipping_destination(self, client):
        basket_id = _create_basket(client)
        _add_items(client, basket_id, {"product_id": APPLE_ID, "quantity": 1})

        response = client.get(f"/baskets/{basket_id}/total")
        assert response.status_code == 400
        assert response.json()["error"]["kind"] == "MissingShippingDestination"

    def test_full_basket_lifecycle(self, client, monkeypatch):
        monkeypatch.delenv("VAT_RATE", raising=False)
        basket_id = _create_basket(client)
        _add_items(
            client,
            basket_id,
            {"product_id": APPLE_ID, "quantity": 4},
            {"product_id": ORANGE_ID, "quantity": 5, "discount_id": "10PERCENT"},
        )
        client.post(f"/baskets/{basket_id}/discount/1")
        client.post(f"/baskets/{basket_id}/shipping/FR")

        without_vat = client.get(f"/baskets/{basket_id}/total-without-vat")
        assert without_vat.status_code == 200
        assert without_vat.json()["vat_included"] is False
        # apples 2.00 less 5% = 1.90; oranges 3.00 less 10% = 2.70; shipping 5
        assert Decimal(str(without_vat.json()["total"])) == Decimal("9.6")

        with_vat = client.get(f"/baskets/{basket_id}/total")
        assert with_vat.json()["vat_included"] is True
        assert Decimal(str(with_vat.json()["total"])) == Decimal("11.52")


class TestCatalogEndpoints:
    def test_list_products(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        assert sorted(p["name"] for p in response.json()) == ["Apple", "Banana", "Orange"]

    def test_list_discounts(self, client):
        response = client.get("/discounts")
        assert sorted(d["id"] for d in response.json()) == ["1", "10PERCENT"]

    def test_list_shipping_rates(self, client):
        response = client.get("/shipping-rates")
        assert sorted(r["country"] for r in response.json()) == ["FR", "UK", "US"]

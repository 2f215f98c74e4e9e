"""FastAPI routes for the Shopping domain: baskets and catalog lookups."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from shopping.api.schemas import (
    AddBasketItemRequest,
    BasketResponse,
    BasketTotalResponse,
    DiscountResponse,
    ProductResponse,
    ShippingRateResponse,
)
from shopping.basket.discounts import AttachDiscountToBasket
from shopping.basket.items import AddItemsToBasket, RemoveItemFromBasket
from shopping.basket.management import CreateBasket
from shopping.basket.pricing import to_decimal
from shopping.basket.shipping import AttachShippingDestination
from shopping.basket.store import process_exclusively
from shopping.basket.totals import get_basket, get_total, get_total_without_vat
from shopping.catalog.discount import Discount
from shopping.catalog.product import Product
from shopping.catalog.shipping import ShippingRate

# ---------------------------------------------------------------------------
# Basket Router
# ---------------------------------------------------------------------------
basket_router = APIRouter(prefix="/baskets", tags=["baskets"])


@basket_router.post("", status_code=201, response_model=BasketResponse)
async def create_basket() -> BasketResponse:
    basket_id = current_domain.process(CreateBasket(), asynchronous=False)
    return BasketResponse.from_basket(get_basket(basket_id))


@basket_router.get("/{basket_id}", response_model=BasketResponse)
async def read_basket(basket_id: str) -> BasketResponse:
    return BasketResponse.from_basket(get_basket(basket_id))


@basket_router.post("/{basket_id}/items", response_model=BasketResponse)
async def add_basket_items(basket_id: str, body: list[AddBasketItemRequest]) -> BasketResponse:
    command = AddItemsToBasket(
        basket_id=basket_id,
        items=json.dumps([item.model_dump() for item in body]),
    )
    process_exclusively(command)
    return BasketResponse.from_basket(get_basket(basket_id))


@basket_router.delete("/{basket_id}/items/{product_id}", response_model=BasketResponse)
async def remove_basket_item(basket_id: str, product_id: str) -> BasketResponse:
    command = RemoveItemFromBasket(basket_id=basket_id, product_id=product_id)
    process_exclusively(command)
    return BasketResponse.from_basket(get_basket(basket_id))


@basket_router.post("/{basket_id}/discount/{discount_id}", response_model=BasketResponse)
async def attach_basket_discount(basket_id: str, discount_id: str) -> BasketResponse:
    command = AttachDiscountToBasket(basket_id=basket_id, discount_id=discount_id)
    process_exclusively(command)
    return BasketResponse.from_basket(get_basket(basket_id))


@basket_router.post("/{basket_id}/shipping/{country}", response_model=BasketResponse)
async def attach_basket_shipping(basket_id: str, country: str) -> BasketResponse:
    command = AttachShippingDestination(basket_id=basket_id, country=country)
    process_exclusively(command)
    return BasketResponse.from_basket(get_basket(basket_id))


@basket_router.get("/{basket_id}/total", response_model=BasketTotalResponse)
async def basket_total(basket_id: str) -> BasketTotalResponse:
    return BasketTotalResponse(basket_id=basket_id, total=get_total(basket_id), vat_included=True)


@basket_router.get("/{basket_id}/total-without-vat", response_model=BasketTotalResponse)
async def basket_total_without_vat(basket_id: str) -> BasketTotalResponse:
    return BasketTotalResponse(basket_id=basket_id, total=get_total_without_vat(basket_id), vat_included=False)


# ---------------------------------------------------------------------------
# Catalog Routers
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["catalog"])
discount_router = APIRouter(prefix="/discounts", tags=["catalog"])
shipping_router = APIRouter(prefix="/shipping-rates", tags=["catalog"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product).list_products()
    return [ProductResponse(id=str(p.id), name=p.name, price=to_decimal(p.price)) for p in products]


@discount_router.get("", response_model=list[DiscountResponse])
async def list_discounts() -> list[DiscountResponse]:
    discounts = current_domain.repository_for(Discount).list_discounts()
    return [DiscountResponse(id=str(d.id), name=d.name, percentage=to_decimal(d.percentage)) for d in discounts]


@shipping_router.get("", response_model=list[ShippingRateResponse])
async def list_shipping_rates() -> list[ShippingRateResponse]:
    rates = current_domain.repository_for(ShippingRate).list_shipping_rates()
    return [ShippingRateResponse(country=str(r.country), price=to_decimal(r.price)) for r in rates]

"""Pydantic request/response schemas for the Shopping API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands and aggregates.
"""

from decimal import Decimal

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Basket Request Schemas
# ---------------------------------------------------------------------------
class AddBasketItemRequest(BaseModel):
    product_id: str
    quantity: int  # Validated by the domain so a batch reports every bad item
    discount_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "11111111-1111-1111-1111-111111111111",
                    "quantity": 2,
                    "discount_id": None,
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Basket Response Schemas
# ---------------------------------------------------------------------------
class BasketItemResponse(BaseModel):
    product_id: str
    quantity: int
    discount_id: str | None = None


class BasketResponse(BaseModel):
    id: str
    items: list[BasketItemResponse]
    discount_id: str | None = None
    shipping_destination: str | None = None

    @classmethod
    def from_basket(cls, basket) -> "BasketResponse":
        return cls(
            id=str(basket.id),
            items=[
                BasketItemResponse(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    discount_id=str(item.discount_id) if item.discount_id else None,
                )
                for item in basket.items
            ],
            discount_id=str(basket.discount_id) if basket.discount_id else None,
            shipping_destination=basket.shipping_destination,
        )


class BasketTotalResponse(BaseModel):
    basket_id: str
    total: Decimal
    vat_included: bool


# ---------------------------------------------------------------------------
# Catalog Response Schemas
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    id: str
    name: str
    price: Decimal


class DiscountResponse(BaseModel):
    id: str
    name: str
    percentage: Decimal


class ShippingRateResponse(BaseModel):
    country: str
    price: Decimal

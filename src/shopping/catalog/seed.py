"""Default catalog loaded into the in-memory store at startup."""

from protean.utils.globals import current_domain

from shopping.catalog.discount import Discount
from shopping.catalog.product import Product
from shopping.catalog.shipping import ShippingRate
from shopping.domain import logger

APPLE_ID = "11111111-1111-1111-1111-111111111111"
BANANA_ID = "22222222-2222-2222-2222-222222222222"
ORANGE_ID = "33333333-3333-3333-3333-333333333333"

DEFAULT_PRODUCTS = [
    {"id": APPLE_ID, "name": "Apple", "price": 0.50},
    {"id": BANANA_ID, "name": "Banana", "price": 0.30},
    {"id": ORANGE_ID, "name": "Orange", "price": 0.60},
]

DEFAULT_DISCOUNTS = [
    {"id": "1", "name": "5% Off", "percentage": 5.0},
    {"id": "10PERCENT", "name": "10% Off", "percentage": 10.0},
]

DEFAULT_SHIPPING_RATES = [
    {"country": "UK", "price": 3.0},
    {"country": "FR", "price": 5.0},
    {"country": "US", "price": 7.0},
]


def seed_catalog(products=None, discounts=None, shipping_rates=None):
    """Persist catalog records, replacing any existing record with the same id.

    Omitted arguments fall back to the default catalog. Must run inside a
    domain context.
    """
    products = DEFAULT_PRODUCTS if products is None else products
    discounts = DEFAULT_DISCOUNTS if discounts is None else discounts
    shipping_rates = DEFAULT_SHIPPING_RATES if shipping_rates is None else shipping_rates

    product_repo = current_domain.repository_for(Product)
    for data in products:
        product_repo.add(Product(**data))

    discount_repo = current_domain.repository_for(Discount)
    for data in discounts:
        discount_repo.add(Discount(**data))

    shipping_repo = current_domain.repository_for(ShippingRate)
    for data in shipping_rates:
        shipping_repo.add(ShippingRate(**data))

    logger.info(
        "Catalog seeded",
        products=len(products),
        discounts=len(discounts),
        shipping_rates=len(shipping_rates),
    )

"""Basket reads: basket lookup and totals with or without VAT."""

from protean.utils.globals import current_domain

from shopping.basket.pricing import BasketPricing
from shopping.basket.store import basket_store
from shopping.catalog.discount import Discount
from shopping.catalog.product import Product
from shopping.catalog.shipping import ShippingRate
from shopping.errors import MissingShippingDestination
from shopping.utils.config import vat_rate as configured_vat_rate


def get_basket(basket_id):
    return basket_store.get_basket(str(basket_id))


def basket_pricing() -> BasketPricing:
    """Pricing engine wired to the current domain's catalog repositories."""
    return BasketPricing(
        products=current_domain.repository_for(Product),
        discounts=current_domain.repository_for(Discount),
        shipping_rates=current_domain.repository_for(ShippingRate),
    )


def _priceable_basket(basket_id):
    basket = get_basket(basket_id)
    if not basket.shipping_destination:
        raise MissingShippingDestination()
    return basket


def get_total(basket_id, vat_rate=None):
    """Basket total including VAT. ``vat_rate`` defaults to the configured rate."""
    basket = _priceable_basket(basket_id)
    rate = configured_vat_rate() if vat_rate is None else vat_rate
    return basket_pricing().calculate_total_with_vat(basket, rate)


def get_total_without_vat(basket_id):
    basket = _priceable_basket(basket_id)
    return basket_pricing().calculate_subtotal(basket)

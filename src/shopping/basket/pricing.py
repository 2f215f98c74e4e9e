"""Basket pricing: subtotal and VAT total for a basket snapshot.

Pricing rules:

- An item with its own (resolvable) discount is priced as
  ``price * quantity`` less that discount, never going below zero.
- All other items are summed, and the basket-wide discount, if any, applies
  to that sum only. Individual discounts therefore always take precedence
  over the basket discount for a given item.
- Shipping for the basket's destination is added last; VAT applies to the
  whole subtotal including shipping.

The engine trusts its caller: every product referenced by the basket must
exist. Dangling discount ids and unknown shipping destinations are ignored.
All arithmetic is done in ``Decimal``.
"""

from decimal import Decimal

from shopping.utils.config import DEFAULT_VAT_RATE

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Convert a stored amount to Decimal through its string form (0.1 stays 0.1)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def apply_percentage_discount(amount: Decimal, percentage) -> Decimal:
    """Reduce ``amount`` by ``percentage`` percent, clamped at zero."""
    discount = amount * to_decimal(percentage) / HUNDRED
    return amount - min(amount, discount)


class BasketPricing:
    """Prices baskets against catalog lookups.

    Args:
        products: provides ``get_products_by_ids(ids) -> {id: product}``.
        discounts: provides ``get_discounts_by_ids(ids) -> {id: discount}``.
        shipping_rates: provides ``get_shipping_rate(country) -> rate | None``.
    """

    def __init__(self, products, discounts, shipping_rates):
        self.products = products
        self.discounts = discounts
        self.shipping_rates = shipping_rates

    def calculate_subtotal(self, basket) -> Decimal:
        items = list(basket.items)
        if not items:
            return ZERO

        products = self.products.get_products_by_ids({str(item.product_id) for item in items})

        discount_ids = {str(item.discount_id) for item in items if item.discount_id}
        if basket.discount_id:
            discount_ids.add(str(basket.discount_id))
        discounts = self.discounts.get_discounts_by_ids(discount_ids) if discount_ids else {}

        discounted_total = ZERO
        undiscounted_total = ZERO

        for item in items:
            item_total = to_decimal(products[str(item.product_id)].price) * item.quantity

            discount = discounts.get(str(item.discount_id)) if item.discount_id else None
            if discount is not None:
                discounted_total += apply_percentage_discount(item_total, discount.percentage)
            else:
                undiscounted_total += item_total

        basket_discount = discounts.get(str(basket.discount_id)) if basket.discount_id else None
        if basket_discount is not None:
            undiscounted_total = apply_percentage_discount(undiscounted_total, basket_discount.percentage)

        return discounted_total + undiscounted_total + self.shipping_cost(basket)

    def shipping_cost(self, basket) -> Decimal:
        if not basket.shipping_destination:
            return ZERO

        rate = self.shipping_rates.get_shipping_rate(basket.shipping_destination)
        return to_decimal(rate.price) if rate is not None else ZERO

    def calculate_total_with_vat(self, basket, vat_rate=DEFAULT_VAT_RATE) -> Decimal:
        return self.calculate_subtotal(basket) * (1 + to_decimal(vat_rate))

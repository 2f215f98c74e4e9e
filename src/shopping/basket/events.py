"""Domain events for the Basket aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from shopping.domain import shopping


@shopping.event(part_of="Basket")
class BasketCreated:
    """A new, empty basket was opened."""

    __version__ = "v1"

    basket_id = Identifier(required=True)
    created_at = DateTime(required=True)


@shopping.event(part_of="Basket")
class BasketItemAdded:
    """A product was added to the basket, or its quantity was increased."""

    __version__ = "v1"

    basket_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # quantity added, not the running total
    discount_id = Identifier()


@shopping.event(part_of="Basket")
class BasketItemRemoved:
    """A product's line item was removed from the basket."""

    __version__ = "v1"

    basket_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopping.event(part_of="Basket")
class BasketDiscountApplied:
    """A basket-wide discount was attached."""

    __version__ = "v1"

    basket_id = Identifier(required=True)
    discount_id = Identifier(required=True)


@shopping.event(part_of="Basket")
class BasketShippingDestinationSet:
    """The basket's shipping destination was set or changed."""

    __version__ = "v1"

    basket_id = Identifier(required=True)
    country = String(required=True, max_length=50)

"""Basket aggregate: line items, basket-wide discount and shipping destination.

A basket holds at most one line item per product. Adding a product that is
already present merges quantities into the existing line item. Prices are not
stored on the basket; they are resolved from the catalog at pricing time.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from shopping.basket.events import (
    BasketCreated,
    BasketDiscountApplied,
    BasketItemAdded,
    BasketItemRemoved,
    BasketShippingDestinationSet,
)
from shopping.domain import shopping
from shopping.errors import ProductNotInBasket


@shopping.entity(part_of="Basket")
class BasketItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    discount_id = Identifier()  # Individual discount; excludes the item from the basket discount


@shopping.aggregate
class Basket:
    items = HasMany(BasketItem)
    discount_id = Identifier()
    shipping_destination = String(max_length=50)  # Country code
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        basket = cls(created_at=now, updated_at=now)
        basket.raise_(BasketCreated(basket_id=str(basket.id), created_at=now))
        return basket

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product_id, quantity, discount_id=None):
        """Add a line item, or increase the quantity of the product's existing one.

        A merged line item keeps the discount it was first added with.
        Quantities are validated by the caller.
        """
        line = self.item_for(product_id)
        if line:
            line.quantity += quantity
        else:
            line = BasketItem(
                product_id=product_id,
                quantity=quantity,
                discount_id=discount_id,
            )
            self.add_items(line)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            BasketItemAdded(
                basket_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                discount_id=str(line.discount_id) if line.discount_id else None,
            )
        )

    def remove_item(self, product_id):
        item = self.item_for(product_id)
        if item is None:
            raise ProductNotInBasket(str(product_id))

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            BasketItemRemoved(
                basket_id=str(self.id),
                product_id=str(product_id),
            )
        )

    # -------------------------------------------------------------------
    # Discount and shipping
    # -------------------------------------------------------------------
    def apply_discount(self, discount_id):
        """Attach a basket-wide discount, replacing any previous one."""
        self.discount_id = discount_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            BasketDiscountApplied(
                basket_id=str(self.id),
                discount_id=str(discount_id),
            )
        )

    def ship_to(self, country):
        self.shipping_destination = country
        self.updated_at = datetime.now(UTC)

        self.raise_(
            BasketShippingDestinationSet(
                basket_id=str(self.id),
                country=country,
            )
        )

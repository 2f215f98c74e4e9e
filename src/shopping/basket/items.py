"""Basket item management: commands and handler.

Adding items is all-or-nothing: the whole batch is validated first, every
failing item is reported in one ``BasketItemsRejected`` error, and nothing is
merged unless every item passed.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket
from shopping.basket.store import basket_store
from shopping.catalog.discount import Discount
from shopping.catalog.product import Product
from shopping.domain import logger, shopping
from shopping.errors import BasketItemsRejected, InvalidItem, InvalidQuantity, NoItemsProvided, NotFound


@shopping.command(part_of="Basket")
class AddItemsToBasket:
    basket_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, discount_id}


@shopping.command(part_of="Basket")
class RemoveItemFromBasket:
    basket_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _parse_items(raw):
    items = json.loads(raw) if isinstance(raw, str) else raw
    return list(items or [])


def _quantity(value):
    """Whole-number quantity, or None when ``value`` is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_item(item):
    """Canonical form of an item that passed ``validate_item``."""
    discount_id = item.get("discount_id")
    return {
        "product_id": str(item["product_id"]),
        "quantity": _quantity(item.get("quantity")),
        "discount_id": str(discount_id) if discount_id else None,
    }


def validate_item(item, position=1):
    """Return the first problem with a candidate item, or None if it can be added.

    Checks run in order: shape, quantity, product existence, discount existence.
    ``position`` is the 1-based place of the item in its batch.
    """
    if not isinstance(item, dict) or not item.get("product_id"):
        return InvalidItem(position)

    product_id = str(item["product_id"])
    quantity = _quantity(item.get("quantity"))
    if quantity is None or quantity <= 0:
        return InvalidQuantity(product_id)

    if current_domain.repository_for(Product).get_product(product_id) is None:
        return NotFound(NotFound.PRODUCT, product_id)

    discount_id = item.get("discount_id")
    if discount_id and current_domain.repository_for(Discount).get_discount(str(discount_id)) is None:
        return NotFound.item_discount(str(discount_id))

    return None


@shopping.command_handler(part_of=Basket)
class ManageBasketItemsHandler:
    @handle(AddItemsToBasket)
    def add_items(self, command):
        basket_id = str(command.basket_id)
        basket_store.get_basket(basket_id)

        items = _parse_items(command.items)
        if not items:
            raise NoItemsProvided()

        errors = [
            error
            for error in (validate_item(item, position) for position, item in enumerate(items, start=1))
            if error is not None
        ]
        if errors:
            logger.info(
                "Basket items rejected",
                basket_id=basket_id,
                errors=[error.kind for error in errors],
            )
            raise BasketItemsRejected(errors)

        basket_store.add_items(basket_id, [normalize_item(item) for item in items])
        logger.info("Basket items added", basket_id=basket_id, item_count=len(items))

    @handle(RemoveItemFromBasket)
    def remove_item(self, command):
        basket_id = str(command.basket_id)
        basket_store.remove_item(basket_id, str(command.product_id))
        logger.info("Basket item removed", basket_id=basket_id, product_id=str(command.product_id))

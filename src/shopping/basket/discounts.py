"""Basket-wide discount: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket
from shopping.basket.store import basket_store
from shopping.catalog.discount import Discount
from shopping.domain import logger, shopping
from shopping.errors import NotFound


@shopping.command(part_of="Basket")
class AttachDiscountToBasket:
    """Apply a catalog discount to every basket item without its own discount."""

    basket_id = Identifier(required=True)
    discount_id = Identifier(required=True)


@shopping.command_handler(part_of=Basket)
class AttachDiscountHandler:
    @handle(AttachDiscountToBasket)
    def attach_discount(self, command):
        basket_id = str(command.basket_id)
        discount_id = str(command.discount_id)

        # Basket existence is reported before the discount lookup
        basket_store.get_basket(basket_id)

        if current_domain.repository_for(Discount).get_discount(discount_id) is None:
            raise NotFound(NotFound.DISCOUNT, discount_id)

        basket_store.attach_discount(basket_id, discount_id)
        logger.info("Basket discount attached", basket_id=basket_id, discount_id=discount_id)

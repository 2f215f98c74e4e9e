"""Basket creation: command and handler."""

from protean import handle

from shopping.basket.basket import Basket
from shopping.basket.store import basket_store
from shopping.domain import logger, shopping


@shopping.command(part_of="Basket")
class CreateBasket:
    """Open a new, empty basket."""


@shopping.command_handler(part_of=Basket)
class ManageBasketHandler:
    @handle(CreateBasket)
    def create_basket(self, command):
        basket = basket_store.create_basket()
        logger.info("Basket created", basket_id=str(basket.id))
        return str(basket.id)

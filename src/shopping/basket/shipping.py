"""Basket shipping destination: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket
from shopping.basket.store import basket_store
from shopping.catalog.shipping import ShippingRate
from shopping.domain import logger, shopping
from shopping.errors import NotFound


@shopping.command(part_of="Basket")
class AttachShippingDestination:
    """Ship the basket to a country with a known shipping rate."""

    basket_id = Identifier(required=True)
    country = String(required=True, max_length=50)


@shopping.command_handler(part_of=Basket)
class AttachShippingHandler:
    @handle(AttachShippingDestination)
    def attach_shipping(self, command):
        basket_id = str(command.basket_id)

        basket_store.get_basket(basket_id)

        if current_domain.repository_for(ShippingRate).get_shipping_rate(command.country) is None:
            raise NotFound(NotFound.SHIPPING_RATE, command.country)

        basket_store.attach_shipping(basket_id, command.country)
        logger.info("Basket shipping destination set", basket_id=basket_id, country=command.country)

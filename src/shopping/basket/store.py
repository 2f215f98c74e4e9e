"""Basket store: persistence of baskets with per-basket serialization.

Every read and write of a basket runs under that basket's lock, so concurrent
additions of the same product cannot produce duplicate line items or lose a
quantity update, and readers never see a half-written item list. Locks are
re-entrant: a command handler can call store operations while the dispatcher
already holds the lock for the same basket.
"""

import threading
from contextlib import contextmanager

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from shopping.basket.basket import Basket
from shopping.domain import logger
from shopping.errors import NotFound


class BasketStore:
    def __init__(self):
        self._locks = {}
        self._registry_lock = threading.Lock()

    def lock_for(self, basket_id) -> threading.RLock:
        with self._registry_lock:
            return self._locks.setdefault(str(basket_id), threading.RLock())

    @contextmanager
    def exclusive(self, basket_id):
        with self.lock_for(basket_id):
            yield

    @property
    def repository(self):
        return current_domain.repository_for(Basket)

    def _load(self, basket_id):
        try:
            return self.repository.get(basket_id)
        except ObjectNotFoundError as exc:
            raise NotFound(NotFound.BASKET, str(basket_id)) from exc

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def create_basket(self):
        basket = Basket.create()
        self.repository.add(basket)
        return basket

    def get_basket(self, basket_id):
        """Load a fresh copy of the basket. Changes to it are not persisted."""
        with self.exclusive(basket_id):
            return self._load(basket_id)

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def add_items(self, basket_id, items):
        """Merge a batch of items into the basket with a single write.

        Args:
            items: Iterable of dicts with product_id, quantity and optional discount_id.
        """
        with self.exclusive(basket_id):
            basket = self._load(basket_id)
            for item in items:
                basket.add_item(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    discount_id=item.get("discount_id"),
                )
            self.repository.add(basket)
            return basket

    def add_item(self, basket_id, product_id, quantity, discount_id=None):
        return self.add_items(
            basket_id,
            [{"product_id": product_id, "quantity": quantity, "discount_id": discount_id}],
        )

    def remove_item(self, basket_id, product_id):
        with self.exclusive(basket_id):
            basket = self._load(basket_id)
            basket.remove_item(product_id)
            self.repository.add(basket)
            return basket

    def attach_discount(self, basket_id, discount_id):
        """Set the basket-wide discount. Existence of the discount is not checked here."""
        with self.exclusive(basket_id):
            basket = self._load(basket_id)
            basket.apply_discount(discount_id)
            self.repository.add(basket)
            return basket

    def attach_shipping(self, basket_id, country):
        with self.exclusive(basket_id):
            basket = self._load(basket_id)
            basket.ship_to(country)
            self.repository.add(basket)
            return basket


basket_store = BasketStore()


def process_exclusively(command):
    """Process a basket command while holding the basket's lock.

    The lock spans the handler and its unit-of-work commit, so the next command
    for the same basket always loads the committed state.
    """
    with basket_store.exclusive(command.basket_id):
        logger.debug("Processing basket command", command=type(command).__name__, basket_id=str(command.basket_id))
        return current_domain.process(command, asynchronous=False)

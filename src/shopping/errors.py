"""Error kinds raised by basket operations.

Each error carries a stable ``kind`` plus the data needed to report it, so
adapters can map errors to their own transport without parsing messages.
"""


class ShoppingError(Exception):
    kind = "ShoppingError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class NotFound(ShoppingError):
    """A referenced basket, product, discount or shipping rate does not exist."""

    kind = "NotFound"

    BASKET = "Basket"
    PRODUCT = "Product"
    DISCOUNT = "Discount"
    SHIPPING_RATE = "ShippingRate"

    _MESSAGES = {
        BASKET: "Basket not found.",
        PRODUCT: "Product {key} not found.",
        DISCOUNT: "Discount not found {key}",
        SHIPPING_RATE: "Shipping not supported for {key}",
    }

    def __init__(self, entity: str, key: str, template: str | None = None):
        self.entity = entity
        self.key = key
        if template is None:
            template = self._MESSAGES.get(entity, entity + " {key} not found.")
        super().__init__(template.format(key=key))

    @classmethod
    def item_discount(cls, discount_id: str) -> "NotFound":
        """Unknown discount on a line item, worded apart from the basket-wide case."""
        return cls(cls.DISCOUNT, discount_id, template="Discount {key} not found.")

    def to_dict(self) -> dict:
        return {**super().to_dict(), "entity": self.entity, "key": self.key}


class InvalidQuantity(ShoppingError):
    kind = "InvalidQuantity"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Quantity must be greater than 0 for product {product_id}.")

    def to_dict(self) -> dict:
        return {**super().to_dict(), "product_id": self.product_id}


class InvalidItem(ShoppingError):
    """A batch entry that is not an item at all, e.g. one without a product id."""

    kind = "InvalidItem"

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Item {position} must name a product.")

    def to_dict(self) -> dict:
        return {**super().to_dict(), "position": self.position}


class MissingShippingDestination(ShoppingError):
    kind = "MissingShippingDestination"

    def __init__(self):
        super().__init__("Add a shipping destination before calculating total.")


class ProductNotInBasket(ShoppingError):
    kind = "ProductNotInBasket"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found in basket")

    def to_dict(self) -> dict:
        return {**super().to_dict(), "product_id": self.product_id}


class NoItemsProvided(ShoppingError):
    kind = "NoItemsProvided"

    def __init__(self):
        super().__init__("No items provided.")


class BasketItemsRejected(ShoppingError):
    """One or more items of an add-items batch failed validation.

    The batch is all-or-nothing: when this is raised, none of the items were
    applied. ``errors`` holds every individual failure in batch order.
    """

    kind = "BasketItemsRejected"

    def __init__(self, errors: list[ShoppingError]):
        self.errors = list(errors)
        super().__init__(" ".join(error.message for error in self.errors))

    def to_dict(self) -> dict:
        return {**super().to_dict(), "errors": [error.to_dict() for error in self.errors]}

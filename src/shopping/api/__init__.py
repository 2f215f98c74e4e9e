"""Shopping domain API package."""

from shopping.api.errors import register_error_handlers
from shopping.api.routes import basket_router, discount_router, product_router, shipping_router

__all__ = [
    "basket_router",
    "discount_router",
    "product_router",
    "shipping_router",
    "register_error_handlers",
]

"""Shopping bounded context: baskets, catalog lookups and basket pricing.

Baskets are standard (non event-sourced) aggregates. Catalog aggregates
(products, discounts, shipping rates) are read-only lookups for the basket
workflow.
"""

from protean.domain import Domain

from shopping.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
shopping = Domain(name="shopping")

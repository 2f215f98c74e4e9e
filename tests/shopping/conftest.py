import pytest


@pytest.fixture(scope="session")
def _shopping_domain():
    """Initialize the shopping domain once per session."""
    from shopping.domain import shopping

    shopping.init()
    return shopping


@pytest.fixture(autouse=True)
def run_around_tests(_shopping_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _shopping_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def catalog():
    """Seed the default catalog.

    Apple 0.50, Banana 0.30, Orange 0.60; discounts "1" (5%) and "10PERCENT";
    shipping to UK (3), FR (5) and US (7).
    """
    from shopping.catalog.seed import seed_catalog

    seed_catalog()

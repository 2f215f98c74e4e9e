"""Shopping basket FastAPI application.

Processes basket commands synchronously via HTTP. Every request under a
shopping route runs inside the shopping domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shopping.catalog.seed import seed_catalog
from shopping.domain import shopping
from shopping.utils.logging import add_context, clear_context

shopping.init()

with shopping.domain_context():
    seed_catalog()

_DOMAIN_PREFIXES = ("/baskets", "/products", "/discounts", "/shipping-rates")

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Shopping Basket API",
    description="Baskets, catalog lookups and basket pricing",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the shopping domain context for each domain request."""
    if not request.url.path.startswith(_DOMAIN_PREFIXES):
        # Health check, docs, etc.
        return await call_next(request)

    add_context(path=request.url.path, method=request.method)
    try:
        with shopping.domain_context():
            return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from shopping.api import (  # noqa: E402
    basket_router,
    discount_router,
    product_router,
    register_error_handlers,
    shipping_router,
)

app.include_router(basket_router)
app.include_router(product_router)
app.include_router(discount_router)
app.include_router(shipping_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": shopping.name}})

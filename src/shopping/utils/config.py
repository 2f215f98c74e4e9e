"""Runtime settings read from the environment."""

import os
from decimal import Decimal, InvalidOperation

DEFAULT_VAT_RATE = Decimal("0.20")


def vat_rate() -> Decimal:
    """VAT multiplier applied to basket totals (0.20 means 20%)."""
    raw = os.getenv("VAT_RATE")
    if not raw:
        return DEFAULT_VAT_RATE

    try:
        rate = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"VAT_RATE must be a decimal number, got {raw!r}") from exc

    if rate < 0:
        raise ValueError(f"VAT_RATE must not be negative, got {raw!r}")
    return rate

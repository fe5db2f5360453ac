"""Mandatory-field policy for legacy records."""

from __future__ import annotations

import math


def accept_price(price_candidate: float | None) -> bool:
    """Return whether a record with this price candidate may be kept.

    Args:
        price_candidate: Output of price identification.

    Returns:
        True only for finite, strictly positive prices.
    """
    if price_candidate is None or isinstance(price_candidate, bool):
        return False
    if not isinstance(price_candidate, (int, float)):
        return False
    return math.isfinite(price_candidate) and price_candidate > 0

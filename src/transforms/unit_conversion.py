"""Millimeter to SI meter conversion transform.

Legacy dimensions are stored in millimeters. Converted measurements
keep the source value and unit alongside the normalized value.
"""

from __future__ import annotations

import math

from core.constants import MILLIMETERS_PER_METER
from core.types import NormalizedMeasurement


def to_meters(raw_millimeters: object) -> NormalizedMeasurement | None:
    """Convert a raw millimeter value into a normalized measurement.

    Args:
        raw_millimeters: Raw legacy value, numeric or numeric string.

    Returns:
        Measurement in meters, or None when the value is missing,
        not numeric, or not finite.
    """
    source_value = coerce_number(raw_millimeters)
    if source_value is None:
        return None
    return NormalizedMeasurement(
        value=source_value / MILLIMETERS_PER_METER,
        source_value=source_value,
    )


def coerce_number(raw_value: object) -> float | None:
    """Coerce a legacy value into a finite float.

    Args:
        raw_value: Raw legacy value.

    Returns:
        Finite float, or None when coercion is not possible.
    """
    if raw_value is None or isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, (int, float)):
        try:
            numeric_value = float(raw_value)
        except OverflowError:
            return None
    elif isinstance(raw_value, str):
        numeric_value = _parse_numeric_string(raw_value)
        if numeric_value is None:
            return None
    else:
        return None
    if not math.isfinite(numeric_value):
        return None
    return numeric_value


def _parse_numeric_string(raw_value: str) -> float | None:
    stripped = raw_value.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        return float(stripped)
    except ValueError:
        return None

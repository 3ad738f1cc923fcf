"""Tolerant readers for provider payloads."""

import math


def value_at(values: list, index: int) -> float | None:
    """Numeric value at index, None when missing, null, non-numeric or NaN."""
    if index < 0:
        return None
    try:
        value = float(values[index])
    except (IndexError, KeyError, TypeError, ValueError, OverflowError):
        return None
    return None if math.isnan(value) else value

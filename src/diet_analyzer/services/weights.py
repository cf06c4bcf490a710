"""Lenient numeric parsing for model-supplied weights and nutrient values."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
_KILOGRAM_MARKERS = ("kg", "千克", "公斤")
# Floats at or above 2**52 have no fractional digits left to round.
_EXACT_FLOAT_LIMIT = 2.0**52


def parse_number(value: object) -> float:
    """Return the first number found in the value, or 0.0.

    Numbers pass through unchanged, strings such as ``"约 12.5g"`` yield
    ``12.5``. Anything else, including booleans and ``None``, yields 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
        return _finite_or_zero(number)
    if isinstance(value, str):
        match = _NUMBER_PATTERN.search(value)
        if match:
            return _finite_or_zero(float(match.group()))
    return 0.0


def parse_weight(value: object) -> float:
    """Convert a weight estimate into grams; never raises."""
    grams = parse_number(value)
    if isinstance(value, str):
        lowered = value.lower()
        if any(marker in lowered for marker in _KILOGRAM_MARKERS):
            return _finite_or_zero(grams * 1000)
    return grams


def round_half_up(value: float, digits: int = 1) -> float:
    """Round halves away from zero, e.g. 0.45 -> 0.5."""
    if abs(value) >= _EXACT_FLOAT_LIMIT:
        return value
    # Float noise such as 0.44999999999999996 is cleared before rounding.
    cleaned = Decimal(str(round(value, 9)))
    quantum = Decimal(1).scaleb(-digits)
    return float(cleaned.quantize(quantum, rounding=ROUND_HALF_UP))


def _finite_or_zero(number: float) -> float:
    return number if math.isfinite(number) else 0.0

"""Plausibility bounds for weather fields."""

import math
from typing import Any


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not math.isnan(value)
    )


def is_valid_temperature(value: Any) -> bool:
    """Celsius strictly between -100 and 100."""
    return _is_number(value) and -100 < value < 100


def is_valid_humidity(value: Any) -> bool:
    return _is_number(value) and 0 <= value <= 100


def is_valid_wind_speed(value: Any) -> bool:
    """km/h in [0, 500)."""
    return _is_number(value) and 0 <= value < 500


def is_valid_location(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0

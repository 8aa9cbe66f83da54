"""Common types and helpers shared across models."""

import math
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class WindSpeedUnit(StrEnum):
    KMH = "km/h"
    MPH = "mph"
    MPS = "m/s"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def as_number(value: Any) -> float | int | None:
    """Coerce a loosely-typed value to a finite number, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None

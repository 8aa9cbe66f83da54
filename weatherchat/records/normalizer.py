"""Normalize loosely-typed weather input into a FormattedWeatherRecord."""

import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from weatherchat.models.common import utc_now
from weatherchat.models.weather import (
    UNKNOWN_CONDITION,
    UNKNOWN_LOCATION,
    FormattedWeatherRecord,
    RawWeatherInput,
)
from weatherchat.records.units import to_celsius, to_kmh
from weatherchat.records.validators import (
    is_valid_humidity,
    is_valid_location,
    is_valid_temperature,
    is_valid_wind_speed,
)

logger = logging.getLogger(__name__)


def normalize(
    raw: RawWeatherInput | Mapping[str, Any] | None,
    now: datetime | None = None,
) -> FormattedWeatherRecord:
    """Build the canonical record, applying defaults and unit conversion.

    Temperatures end up in Celsius and wind speeds in km/h. Optional fields
    are copied only when present and non-zero. Never raises: unusable input
    yields a defaulted record with ``is_valid=False``.
    """
    if isinstance(raw, Mapping):
        raw = RawWeatherInput.from_mapping(raw)
    elif not isinstance(raw, RawWeatherInput):
        raw = RawWeatherInput()
    if now is None:
        now = utc_now()

    t_unit = raw.temperature_unit
    w_unit = raw.wind_speed_unit

    temperature = _finite(to_celsius(raw.temperature, t_unit)) if raw.temperature is not None else None
    feels_like = _finite(to_celsius(raw.feels_like, t_unit)) if raw.feels_like is not None else None
    dew_point = _finite(to_celsius(raw.dew_point, t_unit)) if raw.dew_point else None
    wind_speed = _finite(to_kmh(raw.wind_speed, w_unit)) if raw.wind_speed is not None else None
    gusts = _finite(to_kmh(raw.wind_gust, w_unit)) if raw.wind_gust else None

    location = raw.location.strip() if raw.location else ""
    condition = raw.condition.strip() if raw.condition else ""

    is_valid = (
        is_valid_location(location)
        and is_valid_temperature(temperature)
        and (raw.humidity is None or is_valid_humidity(raw.humidity))
        and (wind_speed is None or is_valid_wind_speed(wind_speed))
    )
    if not is_valid:
        logger.debug(
            "Weather record failed validation: location=%r temperature=%r "
            "humidity=%r wind_speed=%r",
            location, temperature, raw.humidity, wind_speed,
        )

    temperature = temperature if temperature is not None else 0
    return FormattedWeatherRecord(
        location=location or UNKNOWN_LOCATION,
        temperature=temperature,
        feels_like=feels_like if feels_like is not None else temperature,
        condition=condition or UNKNOWN_CONDITION,
        humidity=raw.humidity if raw.humidity is not None else 0,
        wind_speed=wind_speed if wind_speed is not None else 0,
        is_valid=is_valid,
        gusts=gusts or None,
        pressure=raw.pressure or None,
        visibility=raw.visibility or None,
        uv_index=raw.uv_index or None,
        dew_point=dew_point or None,
        time=now.isoformat(),
        sunrise=raw.sunrise or None,
        sunset=raw.sunset or None,
        forecast=raw.forecast or None,
    )


def _finite(value: float) -> float | None:
    # Conversions can overflow huge inputs to inf
    return value if math.isfinite(value) else None

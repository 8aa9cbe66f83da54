"""Weather record models exchanged between extraction, cache and rendering."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from weatherchat.models.common import TemperatureUnit, WindSpeedUnit, as_number

UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_CONDITION = "Unknown conditions"


@dataclass(frozen=True)
class ForecastDay:
    day: str
    condition: str
    high: float
    low: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "condition": self.condition,
            "high": self.high,
            "low": self.low,
        }


@dataclass(frozen=True)
class RawWeatherInput:
    """Loosely-typed weather facts as recovered from a reply.

    Every field is optional. Use ``from_mapping`` for untrusted payloads.
    """

    location: str | None = None
    temperature: float | None = None
    feels_like: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    condition: str | None = None
    pressure: float | None = None
    visibility: float | None = None
    uv_index: float | None = None
    dew_point: float | None = None
    sunrise: str | None = None
    sunset: str | None = None
    forecast: tuple[ForecastDay, ...] | None = None
    temperature_unit: TemperatureUnit | None = None
    wind_speed_unit: WindSpeedUnit | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawWeatherInput":
        """Build from an upstream JSON object. Unusable values become None."""
        if not isinstance(data, Mapping):
            return cls()

        def pick(*keys: str) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return None

        return cls(
            location=_as_text(pick("location", "city", "name")),
            temperature=as_number(pick("temperature", "temp")),
            feels_like=as_number(pick("feelsLike", "feels_like")),
            humidity=as_number(pick("humidity")),
            wind_speed=as_number(pick("windSpeed", "wind_speed")),
            wind_gust=as_number(pick("windGust", "gusts", "wind_gust")),
            condition=_as_text(pick("conditions", "condition")),
            pressure=as_number(pick("pressure")),
            visibility=as_number(pick("visibility")),
            uv_index=as_number(pick("uvIndex", "uv_index")),
            dew_point=as_number(pick("dewPoint", "dew_point")),
            sunrise=_as_text(pick("sunrise")),
            sunset=_as_text(pick("sunset")),
            forecast=_parse_forecast(pick("forecast")),
            temperature_unit=parse_temperature_unit(
                pick("temperatureUnit", "temperature_unit")
            ),
            wind_speed_unit=parse_wind_unit(pick("windSpeedUnit", "wind_speed_unit")),
        )

    def populated_fields(self) -> list[str]:
        """Names of the weather fields that carry a value (units excluded)."""
        return [
            name
            for name in self.__dataclass_fields__
            if name not in ("temperature_unit", "wind_speed_unit")
            and getattr(self, name) is not None
        ]


@dataclass(frozen=True)
class FormattedWeatherRecord:
    location: str
    temperature: float
    feels_like: float
    condition: str
    humidity: float
    wind_speed: float
    is_valid: bool
    gusts: float | None = None
    pressure: float | None = None
    visibility: float | None = None
    uv_index: float | None = None
    dew_point: float | None = None
    time: str | None = None
    sunrise: str | None = None
    sunset: str | None = None
    forecast: tuple[ForecastDay, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Rendering contract: camelCase keys, absent optionals omitted."""
        data: dict[str, Any] = {
            "location": self.location,
            "temperature": self.temperature,
            "feelsLike": self.feels_like,
            "condition": self.condition,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "isValid": self.is_valid,
        }
        optional = {
            "gusts": self.gusts,
            "pressure": self.pressure,
            "visibility": self.visibility,
            "uvIndex": self.uv_index,
            "dewPoint": self.dew_point,
            "time": self.time,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
        }
        for key, value in optional.items():
            if value is not None:
                data[key] = value
        if self.forecast is not None:
            data["forecast"] = [day.to_dict() for day in self.forecast]
        return data


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _parse_forecast(value: Any) -> tuple[ForecastDay, ...] | None:
    if not isinstance(value, list):
        return None
    days: list[ForecastDay] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        high = as_number(item.get("high"))
        low = as_number(item.get("low"))
        day = _as_text(item.get("day"))
        if day is None or high is None or low is None:
            continue
        condition = _as_text(item.get("condition")) or UNKNOWN_CONDITION
        days.append(ForecastDay(day=day, condition=condition, high=high, low=low))
    return tuple(days) or None


def parse_temperature_unit(value: Any) -> TemperatureUnit | None:
    if not isinstance(value, str):
        return None
    text = value.strip().lstrip("°").upper()
    if text in ("F", "FAHRENHEIT"):
        return TemperatureUnit.FAHRENHEIT
    if text in ("C", "CELSIUS"):
        return TemperatureUnit.CELSIUS
    return None


def parse_wind_unit(value: Any) -> WindSpeedUnit | None:
    if not isinstance(value, str):
        return None
    text = value.strip().lower().replace(" ", "")
    if text == "mph":
        return WindSpeedUnit.MPH
    if text in ("m/s", "mps"):
        return WindSpeedUnit.MPS
    if text in ("km/h", "kmh", "kph"):
        return WindSpeedUnit.KMH
    return None

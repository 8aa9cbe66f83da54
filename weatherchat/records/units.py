"""Temperature and wind speed conversions and display formatting."""

from weatherchat.models.common import TemperatureUnit, WindSpeedUnit

KMH_PER_MPH = 1.60934
MPH_PER_KMH = 0.621371
KMH_PER_MPS = 3.6


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def kmh_to_mph(kmh: float) -> float:
    return kmh * MPH_PER_KMH


def mph_to_kmh(mph: float) -> float:
    return mph * KMH_PER_MPH


def mps_to_kmh(mps: float) -> float:
    return mps * KMH_PER_MPS


def to_celsius(value: float, unit: TemperatureUnit | None) -> float:
    """Express a temperature in Celsius. Unknown units are taken as Celsius."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return round(fahrenheit_to_celsius(value), 1)
    return value


def to_kmh(value: float, unit: WindSpeedUnit | None) -> float:
    """Express a wind speed in km/h. Unknown units are taken as km/h."""
    if unit == WindSpeedUnit.MPH:
        return round(mph_to_kmh(value), 1)
    if unit == WindSpeedUnit.MPS:
        return round(mps_to_kmh(value), 1)
    return value


def _round_half_up(value: float) -> int:
    # Math.round semantics: halves go towards +infinity
    return int(value // 1 + (1 if value % 1 >= 0.5 else 0))


def format_temperature(
    celsius: float, unit: TemperatureUnit = TemperatureUnit.CELSIUS
) -> str:
    if unit == TemperatureUnit.FAHRENHEIT:
        return f"{_round_half_up(celsius_to_fahrenheit(celsius))}°F"
    return f"{_round_half_up(celsius)}°C"


def format_wind_speed(kmh: float, unit: str = "kmh") -> str:
    if unit == "mph":
        return f"{_round_half_up(kmh_to_mph(kmh))} mph"
    return f"{_round_half_up(kmh)} km/h"

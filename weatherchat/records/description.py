"""Human-readable weather descriptions."""

from weatherchat.models.common import TemperatureUnit
from weatherchat.models.weather import FormattedWeatherRecord
from weatherchat.records.units import format_temperature, format_wind_speed

UNAVAILABLE_MESSAGE = "Weather information is currently unavailable."


def generate_weather_description(
    record: FormattedWeatherRecord,
    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS,
    wind_speed_unit: str = "kmh",
) -> str:
    """One sentence summary of a record.

    The feels-like clause is omitted when it equals the temperature, and
    gusts are only mentioned when stronger than the sustained wind.
    """
    if not record.is_valid:
        return UNAVAILABLE_MESSAGE

    temp = format_temperature(record.temperature, temperature_unit)
    parts = [f"The current temperature in {record.location} is {temp}"]

    if record.feels_like != record.temperature:
        feels = format_temperature(record.feels_like, temperature_unit)
        parts.append(f"but it feels like {feels}")

    parts.append(f"with {record.condition.lower()}")

    if record.humidity > 0:
        if record.humidity > 70:
            label = "high humidity of"
        elif record.humidity < 30:
            label = "low humidity of"
        else:
            label = "humidity at"
        parts.append(f"{label} {record.humidity:g}%")

    if record.wind_speed > 0:
        parts.append(
            f"The wind is blowing at {format_wind_speed(record.wind_speed, wind_speed_unit)}"
        )
        if record.gusts and record.gusts > record.wind_speed:
            parts.append(
                f"with gusts up to {format_wind_speed(record.gusts, wind_speed_unit)}"
            )

    return ", ".join(parts) + "."

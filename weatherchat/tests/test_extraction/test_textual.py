"""Tests for sentence-based weather field extraction."""

from weatherchat.extraction.textual import (
    CONDITION_PATTERNS,
    FIELD_PATTERNS,
    extract_fields,
    match_condition,
    split_segments,
)
from weatherchat.models.common import TemperatureUnit, WindSpeedUnit

LONDON = (
    "The current weather in London is 18°C with cloudy conditions. "
    "The humidity is at 70% and the wind is blowing at 12 km/h."
)


class TestPriorityTables:
    def test_field_order(self):
        assert [p.field for p in FIELD_PATTERNS] == [
            "location", "location", "location",
            "temperature", "temperature", "temperature",
            "feels_like", "humidity", "wind_speed", "wind_gust",
            "pressure", "visibility",
        ]

    def test_condition_order(self):
        assert [label for label, _ in CONDITION_PATTERNS] == [
            "Light Rain Showers", "Rain", "Cloudy", "Sunny",
            "Snow", "Thunderstorm", "Foggy", "Overcast",
        ]


class TestSplitSegments:
    def test_splits_on_period_and_newline(self):
        assert split_segments("One. Two\nThree. ") == ["One", "Two", "Three"]

    def test_keeps_decimal_numbers(self):
        assert split_segments("It is 18.5°C. Calm") == ["It is 18.5°C", "Calm"]


class TestExtractFields:
    def test_london_sentence(self):
        raw = extract_fields(LONDON)
        assert raw is not None
        assert raw.location == "London"
        assert raw.temperature == 18
        assert raw.temperature_unit == TemperatureUnit.CELSIUS
        assert raw.condition == "Cloudy"
        assert raw.humidity == 70
        assert raw.wind_speed == 12
        assert raw.wind_speed_unit == WindSpeedUnit.KMH

    def test_first_match_wins_across_segments(self):
        raw = extract_fields(
            "Temperature will reach 10°C. It will be 20°C later. Humidity is 50%."
        )
        assert raw is not None
        assert raw.temperature == 10
        assert raw.humidity == 50

    def test_temperature_keyword_beats_bare_reading(self):
        raw = extract_fields(
            "It is 5°C now and the temperature is 12°C. Humidity is 40%."
        )
        assert raw is not None
        assert raw.temperature == 12

    def test_is_n_degrees(self):
        raw = extract_fields("The temperature in Oslo is 3 degrees. Expect snow.")
        assert raw is not None
        assert raw.location == "Oslo"
        assert raw.temperature == 3
        assert raw.temperature_unit is None
        assert raw.condition == "Snow"

    def test_fahrenheit_unit_captured(self):
        raw = extract_fields("The temperature in Denver is 68°F. Wind at 10 mph.")
        assert raw is not None
        assert raw.temperature == 68
        assert raw.temperature_unit == TemperatureUnit.FAHRENHEIT
        assert raw.wind_speed == 10
        assert raw.wind_speed_unit == WindSpeedUnit.MPH

    def test_decimal_temperature(self):
        raw = extract_fields("The temperature in Madrid is 18.5°C. Humidity is 30%.")
        assert raw is not None
        assert raw.temperature == 18.5

    def test_leading_the_stripped_from_place(self):
        raw = extract_fields("Weather for the Bahamas: 28°C")
        assert raw is not None
        assert raw.location == "Bahamas"
        assert raw.temperature == 28

    def test_secondary_fields(self):
        raw = extract_fields(
            "Winds of 15 km/h with gusts up to 30 km/h. Pressure is 1012 hPa. "
            "Visibility is 10 km. Feels like 12°C."
        )
        assert raw is not None
        assert raw.wind_speed == 15
        assert raw.wind_gust == 30
        assert raw.pressure == 1012
        assert raw.visibility == 10
        assert raw.feels_like == 12

    def test_single_field_is_not_enough(self):
        assert extract_fields("It will be 25°C.") is None

    def test_no_weather(self):
        assert extract_fields("Hello! How can I help you today?") is None

    def test_empty(self):
        assert extract_fields("") is None


class TestMatchCondition:
    def test_showers_before_rain(self):
        assert match_condition("Light rain showers later") == "Light Rain Showers"

    def test_rain_before_cloudy(self):
        assert match_condition("Heavy rain, mostly cloudy") == "Rain"

    def test_cloudy_before_sunny(self):
        assert match_condition("Sunny spells but partly cloudy") == "Cloudy"

    def test_clear_is_sunny(self):
        assert match_condition("Clear skies tonight") == "Sunny"

    def test_storm_before_fog(self):
        assert match_condition("Thunderstorms with fog") == "Thunderstorm"

    def test_overcast(self):
        assert match_condition("Overcast all day") == "Overcast"

    def test_no_condition(self):
        assert match_condition("Nothing to report") is None

    def test_word_boundaries(self):
        assert match_condition("Take the train to Ukraine") is None

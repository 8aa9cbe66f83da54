"""Tests for unit conversions and display formatting."""

import pytest

from weatherchat.models.common import TemperatureUnit, WindSpeedUnit
from weatherchat.records.units import (
    celsius_to_fahrenheit,
    fahrenheit_to_celsius,
    format_temperature,
    format_wind_speed,
    kmh_to_mph,
    mph_to_kmh,
    mps_to_kmh,
    to_celsius,
    to_kmh,
)


class TestTemperatureConversion:
    def test_celsius_to_fahrenheit(self):
        assert celsius_to_fahrenheit(0) == pytest.approx(32)
        assert celsius_to_fahrenheit(100) == pytest.approx(212)
        assert celsius_to_fahrenheit(-40) == pytest.approx(-40)
        assert celsius_to_fahrenheit(21) == pytest.approx(69.8)

    def test_fahrenheit_to_celsius(self):
        assert fahrenheit_to_celsius(32) == pytest.approx(0)
        assert fahrenheit_to_celsius(212) == pytest.approx(100)
        assert fahrenheit_to_celsius(70) == pytest.approx(21.11, abs=0.01)

    def test_to_celsius_rounds_fahrenheit(self):
        assert to_celsius(70, TemperatureUnit.FAHRENHEIT) == 21.1

    def test_to_celsius_passthrough(self):
        assert to_celsius(18, TemperatureUnit.CELSIUS) == 18
        assert to_celsius(18, None) == 18


class TestWindConversion:
    def test_kmh_to_mph(self):
        assert kmh_to_mph(0) == pytest.approx(0)
        assert kmh_to_mph(100) == pytest.approx(62.1371)

    def test_mph_to_kmh(self):
        assert mph_to_kmh(10) == pytest.approx(16.09, abs=0.01)

    def test_mps_to_kmh(self):
        assert mps_to_kmh(5) == pytest.approx(18)

    def test_to_kmh(self):
        assert to_kmh(10, WindSpeedUnit.MPH) == 16.1
        assert to_kmh(5, WindSpeedUnit.MPS) == 18.0
        assert to_kmh(12, WindSpeedUnit.KMH) == 12
        assert to_kmh(12, None) == 12


class TestFormatting:
    def test_format_celsius(self):
        assert format_temperature(21.6) == "22°C"

    def test_format_fahrenheit(self):
        assert format_temperature(21, TemperatureUnit.FAHRENHEIT) == "70°F"

    def test_half_rounds_up(self):
        assert format_temperature(2.5) == "3°C"
        assert format_temperature(-2.5) == "-2°C"

    def test_format_wind_kmh(self):
        assert format_wind_speed(12.4) == "12 km/h"

    def test_format_wind_mph(self):
        assert format_wind_speed(100, "mph") == "62 mph"

"""Recover weather fields from natural-language sentences."""

import re
from dataclasses import dataclass
from typing import Any

from weatherchat.models.weather import (
    RawWeatherInput,
    parse_temperature_unit,
    parse_wind_unit,
)

_NUM = r"(-?\d+(?:\.\d+)?)"
_UNSIGNED = r"(\d+(?:\.\d+)?)"
_TEMP_UNIT = r"°?\s*([cf])(?:elsius|ahrenheit)?\b"
_SPEED_UNIT = r"(km/h|mph|m/s)"

# A period followed by a digit is a decimal point, not a sentence end
_SEGMENT_SPLIT_RE = re.compile(r"\n|\.(?!\d)")
_LEADING_THE_RE = re.compile(r"^the\s+", re.IGNORECASE)

# Captures that are sentence openers rather than places
_NOT_A_PLACE = frozenset({"the", "current", "today", "tomorrow", "it", "this"})

MIN_FIELDS = 2


@dataclass(frozen=True)
class FieldPattern:
    field: str
    pattern: re.Pattern[str]
    unit_field: str | None = None


def _p(regex: str) -> re.Pattern[str]:
    return re.compile(regex, re.IGNORECASE)


# Evaluated top to bottom for every segment; the first pattern that matches
# populates its field and later patterns for that field are skipped.
FIELD_PATTERNS: tuple[FieldPattern, ...] = (
    FieldPattern(
        "location",
        _p(
            r"\b(?:weather in|in|for)\s+([a-z\s,]+?)"
            r"(?:\s+is\b|\s*:|,|\s+the\b|\s+today\b|\s+currently\b)"
        ),
    ),
    FieldPattern(
        "location",
        _p(r"^([a-z\s,]+?)\s+(?:weather|temperature|conditions|forecast)\b"),
    ),
    FieldPattern("location", _p(r"current weather (?:in|for)\s+([a-z\s,]+)")),
    FieldPattern(
        "temperature",
        _p(rf"(?:temperature|temp).*?{_NUM}\s*{_TEMP_UNIT}"),
        "temperature_unit",
    ),
    FieldPattern(
        "temperature",
        _p(rf"{_NUM}\s*°\s*([cf])(?:elsius|ahrenheit)?\b"),
        "temperature_unit",
    ),
    FieldPattern(
        "temperature",
        _p(rf"\bis\s+{_NUM}\s*degrees\b(?:\s+(celsius|fahrenheit)\b)?"),
        "temperature_unit",
    ),
    FieldPattern(
        "feels_like",
        _p(rf"feels?\s+like\s+{_NUM}\s*{_TEMP_UNIT}"),
        "temperature_unit",
    ),
    FieldPattern("humidity", _p(rf"humidity.*?{_UNSIGNED}\s*%")),
    FieldPattern(
        "wind_speed", _p(rf"wind.*?{_UNSIGNED}\s*{_SPEED_UNIT}"), "wind_speed_unit"
    ),
    FieldPattern(
        "wind_gust", _p(rf"gusts?.*?{_UNSIGNED}\s*{_SPEED_UNIT}"), "wind_speed_unit"
    ),
    FieldPattern("pressure", _p(rf"pressure.*?{_UNSIGNED}\s*(?:hpa|mbar|mb)\b")),
    FieldPattern("visibility", _p(rf"visibility.*?{_UNSIGNED}\s*(?:km|miles?)\b")),
)

# First category to match wins; the label is fixed regardless of wording.
CONDITION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Light Rain Showers", _p(r"\b(?:(?:slight|light|heavy)\s+)?rain\s*showers?\b")),
    ("Rain", _p(r"\b(?:heavy\s+)?rain")),
    ("Cloudy", _p(r"\b(?:(?:partly|mostly)\s+)?cloudy\b")),
    ("Sunny", _p(r"\b(?:clear|sunny)\b")),
    ("Snow", _p(r"\bsnow")),
    ("Thunderstorm", _p(r"\b(?:thunder)?storm")),
    ("Foggy", _p(r"\bfog")),
    ("Overcast", _p(r"\bovercast\b")),
)


def split_segments(text: str) -> list[str]:
    """Sentence-like segments split on '.' and newline, blanks removed."""
    return [s.strip() for s in _SEGMENT_SPLIT_RE.split(text) if s.strip()]


def _place(match: re.Match[str]) -> str | None:
    place = _LEADING_THE_RE.sub("", match.group(1).strip()).strip(" ,")
    if not place or place.lower() in _NOT_A_PLACE:
        return None
    return place


def _value(rule: FieldPattern, match: re.Match[str]) -> Any:
    if rule.field == "location":
        return _place(match)
    return float(match.group(1))


def _unit(rule: FieldPattern, match: re.Match[str]) -> Any:
    if rule.unit_field is None or match.lastindex is None or match.lastindex < 2:
        return None
    token = match.group(2)
    if token is None:
        return None
    if rule.unit_field == "temperature_unit":
        return parse_temperature_unit(token)
    return parse_wind_unit(token)


def match_condition(segment: str) -> str | None:
    for label, pattern in CONDITION_PATTERNS:
        if pattern.search(segment):
            return label
    return None


def extract_fields(text: str) -> RawWeatherInput | None:
    """Scan sentences for weather facts; first match per field wins.

    Returns None unless at least two fields were found, so a lone number
    in passing is not taken as a weather report.
    """
    found: dict[str, Any] = {}
    for segment in split_segments(text):
        for rule in FIELD_PATTERNS:
            if rule.field in found:
                continue
            match = rule.pattern.search(segment)
            if match is None:
                continue
            value = _value(rule, match)
            if value is None:
                continue
            found[rule.field] = value
            unit = _unit(rule, match)
            if unit is not None and rule.unit_field not in found:
                found[rule.unit_field] = unit

        if "condition" not in found:
            condition = match_condition(segment)
            if condition is not None:
                found["condition"] = condition

    raw = RawWeatherInput(**found)
    if len(raw.populated_fields()) < MIN_FIELDS:
        return None
    return raw

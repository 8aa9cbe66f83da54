"""Events emitted while reading an agent stream."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from weatherchat.models.weather import FormattedWeatherRecord


class StreamStatus(StrEnum):
    BUFFERING = "buffering"
    DONE = "done"
    ERRORED = "errored"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ContentDelta:
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content}


@dataclass(frozen=True)
class StreamResult:
    content: str
    weather_data: FormattedWeatherRecord | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "weatherData": (
                self.weather_data.to_dict() if self.weather_data is not None else None
            ),
        }

"""Chat pipeline: wires the agent client, parser and cache together."""

import logging
from collections.abc import Iterator

from weatherchat.cache.weather_cache import WeatherCache
from weatherchat.config.schema import ChatConfig
from weatherchat.errors import WeatherChatError
from weatherchat.extraction.parser import WeatherRecordParser
from weatherchat.ingest.agent_client import AgentClient, StreamEvent
from weatherchat.models.stream import StreamResult
from weatherchat.models.weather import FormattedWeatherRecord
from weatherchat.records.description import generate_weather_description

logger = logging.getLogger(__name__)

LOCATION_PROMPT = "What is the current weather in {location}?"
COORDS_PROMPT = "What is the current weather at latitude {lat}, longitude {lon}?"


class ChatPipeline:
    """Owns the shared cache; everything else is per request."""

    def __init__(
        self,
        config: ChatConfig | None = None,
        cache: WeatherCache | None = None,
        client: AgentClient | None = None,
    ):
        self.config = config or ChatConfig()
        if cache is None:
            cache = WeatherCache(default_ttl_seconds=self.config.cache.ttl_minutes * 60)
        self.cache = cache
        self.parser = WeatherRecordParser()
        self.client = client or AgentClient(self.config.agent, self.parser)

    def stream(
        self, messages: list[dict[str, str]], thread_id: str | int | None = None
    ) -> Iterator[StreamEvent]:
        """Relay stream events, caching the record once the stream completes."""
        for event in self.client.stream_chat(messages, thread_id):
            if isinstance(event, StreamResult):
                self._remember(event.weather_data)
            yield event

    def ask(self, message: str, thread_id: str | int | None = None) -> StreamResult:
        """Run one exchange to completion and return the terminal result."""
        result: StreamResult | None = None
        messages = [{"role": "user", "content": message.strip()}]
        for event in self.stream(messages, thread_id):
            if isinstance(event, StreamResult):
                result = event
        if result is None:
            raise WeatherChatError("Agent stream ended without a result")
        return result

    def weather_for(
        self, location: str, thread_id: str | int | None = None
    ) -> FormattedWeatherRecord | None:
        """Current weather for a place: the cached record, else ask the agent.

        Raises TransportError when the agent cannot be reached.
        """
        location = location.strip()
        if not location:
            return None
        cached = self.lookup(location)
        if cached is not None:
            logger.debug("Cache hit for %s", location)
            return cached

        record = self.ask(LOCATION_PROMPT.format(location=location), thread_id).weather_data
        if record is None or not record.is_valid:
            return None
        # The agent may name the place differently from the request
        self.cache.set(location, record)
        return record

    def weather_at(
        self, lat: float, lon: float, thread_id: str | int | None = None
    ) -> FormattedWeatherRecord | None:
        """Coordinate counterpart of ``weather_for``.

        Raises ValueError for coordinates that cannot be keyed.
        """
        cached = self.lookup_coords(lat, lon)
        if cached is not None:
            logger.debug("Cache hit for (%s, %s)", lat, lon)
            return cached

        prompt = COORDS_PROMPT.format(lat=lat, lon=lon)
        record = self.ask(prompt, thread_id).weather_data
        if record is None or not record.is_valid:
            return None
        self.cache.set_by_coords(lat, lon, record)
        return record

    def parse(self, text: str) -> FormattedWeatherRecord | None:
        record = self.parser.parse(text)
        self._remember(record)
        return record

    def lookup(self, location: str) -> FormattedWeatherRecord | None:
        if not location.strip():
            return None
        return self.cache.get(location)

    def lookup_coords(self, lat: float, lon: float) -> FormattedWeatherRecord | None:
        return self.cache.get_by_coords(lat, lon)

    def clear(self) -> None:
        self.cache.clear()

    def describe(self, record: FormattedWeatherRecord) -> str:
        display = self.config.display
        return generate_weather_description(
            record, display.temperature_unit, display.wind_speed_unit.value
        )

    def _remember(self, record: FormattedWeatherRecord | None) -> None:
        # Invalid records are shown as unavailable and never cached
        if record is None or not record.is_valid:
            return
        self.cache.set(record.location, record)
        logger.info("Cached weather for %s", record.location)

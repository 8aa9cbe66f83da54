"""Shared test fixtures."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from weatherchat.cache.weather_cache import WeatherCache
from weatherchat.config.schema import AgentConfig, ChatConfig
from weatherchat.extraction.parser import WeatherRecordParser
from weatherchat.models.weather import FormattedWeatherRecord

FIXED_NOW = datetime(2026, 2, 10, 12, 0, 0, tzinfo=UTC)
AGENT_URL = "https://test-agent.example.com/api/agents/weatherAgent/stream"


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> WeatherCache:
    return WeatherCache(default_ttl_seconds=15 * 60, clock=clock)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def parser() -> WeatherRecordParser:
    return WeatherRecordParser(clock=lambda: FIXED_NOW)


@pytest.fixture
def sample_record() -> FormattedWeatherRecord:
    return FormattedWeatherRecord(
        location="Test City",
        temperature=22,
        feels_like=24,
        condition="Sunny",
        humidity=50,
        wind_speed=10,
        is_valid=True,
        gusts=15,
        time=FIXED_NOW.isoformat(),
    )


@pytest.fixture
def agent_config() -> AgentConfig:
    return AgentConfig(url=AGENT_URL, request_retries=1, retry_base_delay=0.01)


@pytest.fixture
def chat_config(agent_config: AgentConfig) -> ChatConfig:
    return ChatConfig(agent=agent_config)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "agent": {"url": AGENT_URL, "max_steps": 3},
        "cache": {"ttl_minutes": 20},
        "display": {"temperature_unit": "F", "wind_speed_unit": "mph"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"

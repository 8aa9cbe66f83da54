"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from weatherchat.config.defaults import (
    DEFAULT_AGENT_HEADERS,
    DEFAULT_AGENT_ID,
    DEFAULT_AGENT_URL,
    DEFAULT_CACHE_TTL_MINUTES,
)
from weatherchat.models.common import TemperatureUnit


class WindDisplayUnit(StrEnum):
    KMH = "kmh"
    MPH = "mph"


class AgentConfig(BaseModel):
    model_config = {"extra": "forbid"}

    url: str = DEFAULT_AGENT_URL
    run_id: str = DEFAULT_AGENT_ID
    resource_id: str = DEFAULT_AGENT_ID
    thread_id: str | int = 2
    max_retries: int = Field(default=2, ge=0)  # forwarded to the agent
    max_steps: int = Field(default=5, ge=1)
    temperature: float = Field(default=0.5, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, gt=0.0, le=1.0)
    timeout_seconds: float = Field(default=60.0, gt=0.0)
    request_retries: int = Field(default=2, ge=0)  # our own 429/503 retries
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    headers: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_AGENT_HEADERS))


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ttl_minutes: float = Field(default=DEFAULT_CACHE_TTL_MINUTES, gt=0.0)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    wind_speed_unit: WindDisplayUnit = WindDisplayUnit.KMH


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class ChatConfig(BaseModel):
    model_config = {"extra": "forbid"}

    agent: AgentConfig = AgentConfig()
    cache: CacheConfig = CacheConfig()
    display: DisplayConfig = DisplayConfig()
    server: ServerConfig = ServerConfig()

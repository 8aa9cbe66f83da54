"""Tests for config loading and dotted-key lookup."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from weatherchat.config.loader import config_hash, get_config_value, load_config
from weatherchat.config.schema import ChatConfig, WindDisplayUnit
from weatherchat.models.common import TemperatureUnit

REPO_CONFIG = Path(__file__).resolve().parents[3] / "ops" / "configs" / "default.yaml"


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.agent.max_steps == 3
        assert config.cache.ttl_minutes == 20
        assert config.display.temperature_unit == TemperatureUnit.FAHRENHEIT
        assert config.display.wind_speed_unit == WindDisplayUnit.MPH

    def test_unset_sections_keep_defaults(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.agent.run_id == "weatherAgent"
        assert config.server.port == 8777

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ChatConfig()

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "nope.yaml") == ChatConfig()

    def test_none_uses_defaults(self):
        assert load_config(None).cache.ttl_minutes == 15

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"cache": {"ttl": 5}}, f)
        with pytest.raises(ValidationError):
            load_config(path)

    def test_shipped_defaults(self):
        config = load_config(REPO_CONFIG)
        assert config.cache.ttl_minutes == 15
        assert config.agent.url.endswith("/api/agents/weatherAgent/stream")


class TestConfigHash:
    def test_deterministic(self):
        assert config_hash(ChatConfig()) == config_hash(ChatConfig())

    def test_different_config_different_hash(self):
        other = ChatConfig(cache={"ttl_minutes": 30})
        assert config_hash(ChatConfig()) != config_hash(other)


class TestGetConfigValue:
    def test_dotted_key(self):
        assert get_config_value(ChatConfig(), "agent.max_steps") == 5

    def test_top_level(self):
        val = get_config_value(ChatConfig(), "server")
        assert val.host == "127.0.0.1"

    def test_header_lookup(self):
        val = get_config_value(ChatConfig(), "agent.headers.Content-Type")
        assert val == "application/json"

    def test_invalid_key(self):
        with pytest.raises(KeyError):
            get_config_value(ChatConfig(), "nonexistent.key")

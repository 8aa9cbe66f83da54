"""YAML config loader with dotted-key lookup."""

import hashlib
import logging
from pathlib import Path
from typing import Any

import yaml

from weatherchat.config.schema import ChatConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None = None) -> ChatConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults.
    """
    if path is None:
        return ChatConfig()
    path = Path(path)
    if not path.exists():
        logger.info("Config %s not found, using defaults", path)
        return ChatConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ChatConfig(**raw)


def config_hash(config: ChatConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: ChatConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.ttl_minutes'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj

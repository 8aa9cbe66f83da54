"""Weather record parser: structured block first, then sentence extraction."""

import json
import logging
from collections.abc import Callable
from datetime import datetime

from weatherchat.extraction.block import extract_block
from weatherchat.extraction.cleaner import clean
from weatherchat.extraction.textual import extract_fields
from weatherchat.models.common import utc_now
from weatherchat.models.weather import FormattedWeatherRecord
from weatherchat.records.normalizer import normalize

logger = logging.getLogger(__name__)


class WeatherRecordParser:
    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    def parse(self, raw_text: str) -> FormattedWeatherRecord | None:
        """Recover a weather record from an agent reply, or None.

        A JSON object embedded in the reply takes precedence. A block that
        fails to decode is not an error: the sentences are tried instead.
        """
        if not raw_text:
            return None
        cleaned = clean(raw_text)

        block = extract_block(cleaned)
        if block is not None:
            try:
                data = json.loads(block)
            except json.JSONDecodeError as e:
                logger.debug("Ignoring malformed structured block: %s", e)
            else:
                if isinstance(data, dict):
                    return normalize(data, now=self.clock())

        raw = extract_fields(cleaned)
        if raw is None:
            return None
        return normalize(raw, now=self.clock())

"""Incremental reader for the weather agent's streamed reply.

Two framings are understood, possibly mixed within one response:

* event-stream lines: ``data: {"content": "..."}``
* indexed frames: ``0:"text"`` for content and ``a:{...}`` for a structured
  payload (usually a tool result carrying the weather data).

Chunks may split lines anywhere, including inside a multi-byte character,
so the reader keeps the trailing partial line until a newline arrives.
"""

import codecs
import json
import logging
import re
from typing import Any

from weatherchat.errors import StreamStateError, TransportError
from weatherchat.extraction.cleaner import clean
from weatherchat.extraction.parser import WeatherRecordParser
from weatherchat.models.stream import ContentDelta, StreamResult, StreamStatus
from weatherchat.models.weather import RawWeatherInput
from weatherchat.records.normalizer import normalize

logger = logging.getLogger(__name__)

_CONTENT_FRAME_RE = re.compile(r'^(\d{1,3}):(".*")\s*$')
_PAYLOAD_FRAME_RE = re.compile(r"^([A-Za-z]):(\{.*)$")
_EVENT_PREFIX = "data:"
_EVENT_DONE = "[DONE]"


class StreamFrameReader:
    """Reassembles lines from chunks and classifies each complete line.

    Driven by ``feed`` for every chunk, then exactly one of ``finish``,
    ``error`` or ``cancel``. The reader is single-use and not thread-safe;
    run one per response.
    """

    def __init__(self, parser: WeatherRecordParser | None = None):
        self.parser = parser or WeatherRecordParser()
        self.status = StreamStatus.BUFFERING
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self._fragments: list[str] = []
        self._candidate: dict[str, Any] | None = None

    @property
    def content(self) -> str:
        """Content accumulated so far, space-joined."""
        return " ".join(self._fragments)

    @property
    def candidate(self) -> dict[str, Any] | None:
        return self._candidate

    def feed(self, chunk: bytes | str) -> list[ContentDelta]:
        """Consume one chunk; return content deltas for lines it completed."""
        self._require_buffering("feed")
        text = self._decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
        self._pending += text
        lines = self._pending.split("\n")
        self._pending = lines.pop()
        return self._process(lines)

    def flush(self) -> list[ContentDelta]:
        """Classify whatever is left in the buffer as a final line."""
        self._require_buffering("flush")
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return self._process(tail.split("\n"))

    def finish(self) -> StreamResult:
        """End the stream and build the terminal result.

        The record comes from the last structured payload seen; without
        one, the accumulated text is parsed instead.
        """
        self.flush()
        content = self.content
        if self._candidate is not None:
            record = normalize(self._candidate, now=self.parser.clock())
        else:
            record = self.parser.parse(content)
        self.status = StreamStatus.DONE
        self._discard()
        logger.debug(
            "Stream finished: %d chars, weather=%s",
            len(content), record.location if record else None,
        )
        return StreamResult(content=content, weather_data=record)

    def error(self, exc: BaseException) -> TransportError:
        """Mark the stream failed and discard its state.

        Returns the TransportError for the caller to raise.
        """
        self._require_buffering("error")
        self.status = StreamStatus.ERRORED
        self._discard()
        if isinstance(exc, TransportError):
            return exc
        err = TransportError(f"Stream failed: {exc}")
        err.__cause__ = exc
        return err

    def cancel(self) -> None:
        """Drop accumulated content without emitting a result."""
        if self.status != StreamStatus.BUFFERING:
            return
        self.status = StreamStatus.CANCELLED
        self._discard()

    def _require_buffering(self, action: str) -> None:
        if self.status != StreamStatus.BUFFERING:
            raise StreamStateError(f"Cannot {action} a stream that is {self.status}")

    def _discard(self) -> None:
        self._pending = ""
        self._fragments = []
        self._candidate = None

    def _process(self, lines: list[str]) -> list[ContentDelta]:
        deltas: list[ContentDelta] = []
        for line in lines:
            fragment = self._classify(line.rstrip("\r"))
            if fragment:
                self._fragments.append(fragment)
                deltas.append(ContentDelta(fragment))
        return deltas

    def _classify(self, line: str) -> str | None:
        """Return the content carried by a line, recording payloads aside."""
        if not line.strip():
            return None

        m = _CONTENT_FRAME_RE.match(line)
        if m is not None:
            return _unwrap_content(m.group(2))

        m = _PAYLOAD_FRAME_RE.match(line)
        if m is not None:
            self._record_payload(m.group(1), m.group(2))
            return None

        if line.startswith(_EVENT_PREFIX):
            return _event_content(line)

        return clean(line) or None

    def _record_payload(self, kind: str, body: str) -> None:
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            logger.warning("Dropping undecodable %s: frame: %s", kind, e)
            return
        if isinstance(data, dict) and isinstance(data.get("result"), dict):
            data = data["result"]
        if not isinstance(data, dict):
            logger.debug("Ignoring non-object %s: frame", kind)
            return
        if not RawWeatherInput.from_mapping(data).populated_fields():
            logger.debug("Ignoring %s: frame without weather fields", kind)
            return
        self._candidate = data


def _unwrap_content(literal: str) -> str | None:
    try:
        text = json.loads(literal)
    except json.JSONDecodeError as e:
        logger.warning("Dropping undecodable content frame: %s", e)
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text.strip()


def _event_content(line: str) -> str | None:
    payload = line[len(_EVENT_PREFIX):].strip()
    if not payload or payload == _EVENT_DONE:
        return None
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError:
        return clean(line) or None

    content: Any = None
    if isinstance(parsed, str):
        content = parsed
    elif isinstance(parsed, dict):
        choices = parsed.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            delta = choices[0].get("delta")
            if isinstance(delta, dict):
                content = delta.get("content")
        if not content:
            content = parsed.get("content") or parsed.get("text")
    if not isinstance(content, str):
        return None
    return clean(content) or None

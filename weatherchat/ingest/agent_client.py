"""Weather agent streaming client with retry and rate limit handling."""

import asyncio
import logging
import time
from contextlib import aclosing, closing
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx

from weatherchat.config.schema import AgentConfig
from weatherchat.errors import TransportError
from weatherchat.extraction.parser import WeatherRecordParser
from weatherchat.ingest.stream_reader import StreamFrameReader
from weatherchat.models.stream import ContentDelta, StreamResult, StreamStatus

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 503)

StreamEvent = ContentDelta | StreamResult


class AgentClient:
    def __init__(
        self,
        config: AgentConfig | None = None,
        parser: WeatherRecordParser | None = None,
    ):
        self.config = config or AgentConfig()
        self.parser = parser or WeatherRecordParser()

    def build_request_body(
        self, messages: list[dict[str, str]], thread_id: str | int | None = None
    ) -> dict[str, Any]:
        cfg = self.config
        return {
            "messages": messages,
            "runId": cfg.run_id,
            "maxRetries": cfg.max_retries,
            "maxSteps": cfg.max_steps,
            "temperature": cfg.temperature,
            "topP": cfg.top_p,
            "runtimeContext": {},
            "threadId": thread_id if thread_id is not None else cfg.thread_id,
            "resourceId": cfg.resource_id,
        }

    def _retry_delay(self, attempt: int) -> float:
        return self.config.retry_base_delay * (2**attempt)

    def iter_chunks(
        self, messages: list[dict[str, str]], thread_id: str | int | None = None
    ) -> Iterator[bytes]:
        """POST the conversation and yield raw response chunks.

        Retries on 503/429 and connection errors before any bytes have been
        received. Once streaming has begun, failures raise TransportError.
        """
        url = self.config.url
        body = self.build_request_body(messages, thread_id)
        retries = self.config.request_retries
        started = False

        for attempt in range(retries + 1):
            try:
                with httpx.stream(
                    "POST", url, json=body,
                    headers=self.config.headers,
                    timeout=self.config.timeout_seconds,
                ) as resp:
                    if resp.status_code in RETRY_STATUSES and attempt < retries:
                        delay = self._retry_delay(attempt)
                        logger.warning(
                            "Agent %s returned %d, retrying in %.1fs (attempt %d/%d)",
                            url, resp.status_code, delay, attempt + 1, retries,
                        )
                        time.sleep(delay)
                        continue
                    _check_status(resp)
                    started = True
                    yield from resp.iter_bytes()
                    return
            except httpx.RequestError as e:
                if not started and attempt < retries:
                    delay = self._retry_delay(attempt)
                    logger.warning("Agent request error, retrying in %.1fs: %s", delay, e)
                    time.sleep(delay)
                    continue
                logger.error("Agent stream failed for %s: %s", url, e)
                raise TransportError(f"Request failed: {e}") from e

    def stream_chat(
        self, messages: list[dict[str, str]], thread_id: str | int | None = None
    ) -> Iterator[StreamEvent]:
        """Yield content deltas as they arrive, then one StreamResult.

        Closing the generator early cancels the reader without a result.
        """
        reader = StreamFrameReader(self.parser)
        try:
            try:
                with closing(self.iter_chunks(messages, thread_id)) as chunks:
                    for chunk in chunks:
                        yield from reader.feed(chunk)
            except TransportError as e:
                raise reader.error(e)
            yield from reader.flush()
            yield reader.finish()
        finally:
            if reader.status == StreamStatus.BUFFERING:
                reader.cancel()

    async def aiter_chunks(
        self, messages: list[dict[str, str]], thread_id: str | int | None = None
    ) -> AsyncIterator[bytes]:
        """Async counterpart of ``iter_chunks``."""
        url = self.config.url
        body = self.build_request_body(messages, thread_id)
        retries = self.config.request_retries
        started = False

        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            for attempt in range(retries + 1):
                try:
                    async with client.stream(
                        "POST", url, json=body, headers=self.config.headers
                    ) as resp:
                        if resp.status_code in RETRY_STATUSES and attempt < retries:
                            delay = self._retry_delay(attempt)
                            logger.warning(
                                "Agent %s returned %d, retrying in %.1fs (attempt %d/%d)",
                                url, resp.status_code, delay, attempt + 1, retries,
                            )
                            await asyncio.sleep(delay)
                            continue
                        await _acheck_status(resp)
                        started = True
                        async for chunk in resp.aiter_bytes():
                            yield chunk
                        return
                except httpx.RequestError as e:
                    if not started and attempt < retries:
                        delay = self._retry_delay(attempt)
                        logger.warning(
                            "Agent request error, retrying in %.1fs: %s", delay, e
                        )
                        await asyncio.sleep(delay)
                        continue
                    logger.error("Agent stream failed for %s: %s", url, e)
                    raise TransportError(f"Request failed: {e}") from e

    async def astream_chat(
        self, messages: list[dict[str, str]], thread_id: str | int | None = None
    ) -> AsyncIterator[StreamEvent]:
        """Async counterpart of ``stream_chat``."""
        reader = StreamFrameReader(self.parser)
        try:
            try:
                async with aclosing(self.aiter_chunks(messages, thread_id)) as chunks:
                    async for chunk in chunks:
                        for delta in reader.feed(chunk):
                            yield delta
            except TransportError as e:
                raise reader.error(e)
            for delta in reader.flush():
                yield delta
            yield reader.finish()
        finally:
            if reader.status == StreamStatus.BUFFERING:
                reader.cancel()


def _check_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    body = resp.read().decode(errors="replace")
    logger.error("Agent API %d: %s", resp.status_code, body[:200])
    raise TransportError(
        f"Weather agent responded with status: {resp.status_code}", resp.status_code
    )


async def _acheck_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    body = (await resp.aread()).decode(errors="replace")
    logger.error("Agent API %d: %s", resp.status_code, body[:200])
    raise TransportError(
        f"Weather agent responded with status: {resp.status_code}", resp.status_code
    )

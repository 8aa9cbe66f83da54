"""Weather chat API: FastAPI backend relaying the agent stream as SSE."""

import json
import logging
from collections.abc import Iterator
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel

from weatherchat.errors import TransportError
from weatherchat.models.common import utc_now_iso
from weatherchat.pipeline.chat_pipeline import ChatPipeline

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    role: str = "user"
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage]
    threadId: str | int | None = None


def _sse(data: dict[str, Any]) -> str:
    return f"data: {json.dumps(data)}\n\n"


def create_app(pipeline: ChatPipeline | None = None) -> FastAPI:
    if pipeline is None:
        pipeline = ChatPipeline()

    app = FastAPI(title="Weather Chat", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Chat endpoints ──────────────────────────────────────────────

    @app.post("/api/weather-chat")
    def weather_chat(request: ChatRequest):
        """Stream the agent reply as `data: {...}` events."""
        messages = [m.model_dump() for m in request.messages if m.content.strip()]
        if not messages:
            raise HTTPException(400, "At least one non-empty message is required")

        events = pipeline.stream(messages, request.threadId)
        try:
            first = next(events)
        except TransportError as e:
            logger.error("Weather chat API error: %s", e)
            return JSONResponse(
                {"error": "Failed to process weather request"}, status_code=502
            )

        def body() -> Iterator[str]:
            yield _sse(first.to_dict())
            try:
                for event in events:
                    yield _sse(event.to_dict())
            except TransportError as e:
                logger.error("Streaming error: %s", e)
                yield _sse({"error": "Stream interrupted"})

        return StreamingResponse(
            body(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @app.post("/api/weather-chat/clear")
    def clear_chat():
        """Drop all cached weather records."""
        pipeline.clear()
        return {"success": True}

    # ── Data endpoints ──────────────────────────────────────────────

    @app.get("/api/weather")
    def get_weather(
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ):
        """Current weather by location name or coordinates, cache first."""
        try:
            if location and location.strip():
                record = pipeline.weather_for(location)
            elif lat is not None and lon is not None:
                record = pipeline.weather_at(lat, lon)
            else:
                raise HTTPException(400, "Provide location or lat and lon")
        except ValueError as e:
            raise HTTPException(400, str(e)) from e
        except TransportError as e:
            logger.error("Weather lookup failed: %s", e)
            return JSONResponse(
                {"error": "Failed to process weather request"}, status_code=502
            )
        if record is None:
            raise HTTPException(404, "No weather data found")
        return record.to_dict()

    @app.get("/api/health")
    def health():
        return {
            "status": "ok",
            "cached_entries": len(pipeline.cache),
            "timestamp": utc_now_iso(),
        }

    return app

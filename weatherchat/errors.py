"""Exception types raised by the chat pipeline."""


class WeatherChatError(Exception):
    """Base class for weatherchat errors."""


class TransportError(WeatherChatError):
    """Raised when the upstream agent stream fails or returns an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class StreamStateError(WeatherChatError):
    """Raised when a stream reader is driven after it has stopped."""

"""In-memory weather cache keyed by location name or rounded coordinates."""

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from weatherchat.config.defaults import DEFAULT_CACHE_TTL_MINUTES
from weatherchat.models.weather import FormattedWeatherRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = DEFAULT_CACHE_TTL_MINUTES * 60
DEFAULT_COORD_DECIMALS = 2


@dataclass(frozen=True)
class CacheEntry:
    record: FormattedWeatherRecord
    created_at: float
    expires_at: float


def location_key(location: str) -> str:
    return location.strip().lower()


def _to_fixed(value: float, decimals: int) -> str:
    # Same digits as JS Number.prototype.toFixed: the exact binary value
    # rounded with ties away from zero, and "-0.00" for small negatives.
    if value == 0:
        value = 0.0
    step = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # Room for a three-digit integer part at any precision
        ctx.prec = max(ctx.prec, decimals + 4)
        return str(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def coords_key(
    lat: float, lon: float, decimals: int = DEFAULT_COORD_DECIMALS
) -> str:
    """Quantize a coordinate pair; two decimals is ~1.1 km at the equator."""
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"Coordinates must be finite, got ({lat}, {lon})")
    if abs(lat) > 90 or abs(lon) > 180:
        raise ValueError(f"Coordinates out of range, got ({lat}, {lon})")
    return f"{_to_fixed(lat, decimals)},{_to_fixed(lon, decimals)}"


class WeatherCache:
    """TTL cache with two independent key spaces.

    Entries expire lazily: an expired entry is removed by the read that
    finds it, never by a background timer. Writes to the same key are
    last-write-wins. Safe to share between threads.
    """

    def __init__(
        self,
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        coord_decimals: int = DEFAULT_COORD_DECIMALS,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self.coord_decimals = coord_decimals
        self.clock = clock
        self._lock = threading.Lock()
        self._by_location: dict[str, CacheEntry] = {}
        self._by_coords: dict[str, CacheEntry] = {}

    def set(
        self,
        location: str,
        record: FormattedWeatherRecord,
        ttl_seconds: float | None = None,
    ) -> None:
        self._put(self._by_location, location_key(location), record, ttl_seconds)

    def get(self, location: str) -> FormattedWeatherRecord | None:
        return self._read(self._by_location, location_key(location))

    def set_by_coords(
        self,
        lat: float,
        lon: float,
        record: FormattedWeatherRecord,
        ttl_seconds: float | None = None,
    ) -> None:
        key = coords_key(lat, lon, self.coord_decimals)
        self._put(self._by_coords, key, record, ttl_seconds)

    def get_by_coords(self, lat: float, lon: float) -> FormattedWeatherRecord | None:
        key = coords_key(lat, lon, self.coord_decimals)
        return self._read(self._by_coords, key)

    def clear(self) -> None:
        with self._lock:
            self._by_location.clear()
            self._by_coords.clear()
        logger.info("Weather cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_location) + len(self._by_coords)

    def _put(
        self,
        space: dict[str, CacheEntry],
        key: str,
        record: FormattedWeatherRecord,
        ttl_seconds: float | None,
    ) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self.clock()
        entry = CacheEntry(record=record, created_at=now, expires_at=now + ttl)
        with self._lock:
            space[key] = entry

    def _read(
        self, space: dict[str, CacheEntry], key: str
    ) -> FormattedWeatherRecord | None:
        with self._lock:
            entry = space.get(key)
            if entry is None:
                return None
            if self.clock() > entry.expires_at:
                del space[key]
                logger.debug("Cache entry %r expired", key)
                return None
            return entry.record

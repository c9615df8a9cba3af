"""In-memory TTL cache for slowly changing catalog reads.

One instance is created per application and handed to the services that need
it. It is only touched from the event loop, so it carries no locks.
"""
import asyncio
import time
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from nutricatalog.core.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 3600
DEFAULT_SWEEP_INTERVAL_SECONDS = 600

_MISSING = object()


@dataclass
class CacheEntry(Generic[T]):
    value: T
    expires_at: float


class TTLCache:
    def __init__(self, default_ttl_seconds: float = DEFAULT_TTL_SECONDS) -> None:
        self._entries: Dict[str, CacheEntry[Any]] = {}
        self.default_ttl_seconds = default_ttl_seconds

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        ttl = ttl_seconds if ttl_seconds else self.default_ttl_seconds
        self._entries[key] = CacheEntry(value=value, expires_at=time.monotonic() + ttl)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for key, or default. An expired entry is removed on read."""
        entry = self._entries.get(key)
        if entry is None:
            return default
        if time.monotonic() > entry.expires_at:
            del self._entries[key]
            return default
        return entry.value

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """Remove every entry already expired at call time; returns how many were removed."""
        now = time.monotonic()
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    async def run_cleanup_loop(self, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS) -> None:
        """Sweep expired entries forever; meant to run as a background task until cancelled."""
        while True:
            await asyncio.sleep(interval_seconds)
            removed = self.cleanup()
            if removed:
                logger.debug(f"Cache sweep removed {removed} expired entries, {self.size()} left")

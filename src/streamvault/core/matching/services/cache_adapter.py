"""Response cache for complete pipeline results.

This module provides a protocol-based abstraction for the stream response
cache so the engine can be given any backend, and an in-memory
implementation with a fixed time-to-live.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from streamvault.core.matching.models import RankedStream
from streamvault.shared.constants import Cache

logger = logging.getLogger(__name__)


class ResponseCacheProtocol(Protocol):
    """Protocol for response cache implementations.

    Example:
        >>> cache: ResponseCacheProtocol = InMemoryResponseCache()
        >>> cache.set("tt0133093:v2:...", streams)
        >>> cache.get("tt0133093:v2:...")
    """

    def get(self, key: str) -> list[RankedStream] | None:
        """Return the cached payload, or None if absent or expired."""

    def set(self, key: str, streams: Sequence[RankedStream]) -> None:
        """Store a payload under ``key``."""

    def evict(self, key: str) -> None:
        """Remove ``key`` if present."""


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the clock reading it was stored at."""

    key: str
    payload: tuple[RankedStream, ...]
    created_at: float


class InMemoryResponseCache:
    """Process-local response cache with lazy expiry.

    Entries older than ``ttl_seconds`` are treated as absent and removed
    when they are next looked up; nothing sweeps the cache in the
    background.

    Attributes:
        ttl_seconds: Entry lifetime
        clock: Monotonic time source (injectable for tests)
        MAX_KEY_LENGTH: Longer keys are stored under their SHA-256 digest

    Example:
        >>> cache = InMemoryResponseCache(ttl_seconds=1800)
        >>> cache.set("key", streams)
        >>> cache.get("key") == streams
        True
    """

    MAX_KEY_LENGTH = 256

    def __init__(
        self,
        ttl_seconds: float = Cache.TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            msg = f"ttl_seconds must be > 0, got {ttl_seconds}"
            raise ValueError(msg)
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> list[RankedStream] | None:
        stored_key = self._validate_key(key)
        with self._lock:
            entry = self._entries.get(stored_key)
            if entry is None:
                logger.debug("Cache miss: key=%s", key[:50])
                return None
            age = self.clock() - entry.created_at
            if age >= self.ttl_seconds:
                del self._entries[stored_key]
                logger.debug("Cache entry expired after %.0fs: key=%s", age, key[:50])
                return None

        logger.debug("Cache hit: key=%s (%d streams)", key[:50], len(entry.payload))
        return list(entry.payload)

    def set(self, key: str, streams: Sequence[RankedStream]) -> None:
        stored_key = self._validate_key(key)
        entry = CacheEntry(key=key, payload=tuple(streams), created_at=self.clock())
        with self._lock:
            self._entries[stored_key] = entry
        logger.debug("Cache set: key=%s (%d streams)", key[:50], len(entry.payload))

    def evict(self, key: str) -> None:
        with self._lock:
            self._entries.pop(self._validate_key(key), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _validate_key(self, key: str) -> str:
        """Hash keys longer than MAX_KEY_LENGTH, keeping them unique."""
        if len(key) > self.MAX_KEY_LENGTH:
            return hashlib.sha256(key.encode("utf-8")).hexdigest()
        return key

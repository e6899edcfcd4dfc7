"""Thread-safe accumulator for search results.

The orchestrator may run several variant searches at once. Every search
hands its hits to one ResultAccumulator, which owns the running count of
unique content hashes and answers whether the global cap has been reached.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from streamvault.core.matching.models import SearchHit

logger = logging.getLogger(__name__)


class ResultAccumulator:
    """Collects search hits in arrival order and tracks unique hashes.

    Hits are kept including duplicates; deduplication happens in the
    candidate filter so that the first occurrence (in variant order) wins.

    Attributes:
        cap: Number of unique hashes after which searching stops

    Example:
        >>> accumulator = ResultAccumulator(cap=500)
        >>> accumulator.add(hits)
        12
        >>> accumulator.cap_reached
        False
    """

    def __init__(self, cap: int) -> None:
        if cap <= 0:
            msg = f"cap must be > 0, got {cap}"
            raise ValueError(msg)
        self.cap = cap
        self._hits: list[SearchHit] = []
        self._hashes: set[str] = set()
        self._lock = threading.Lock()

    def add(self, hits: Iterable[SearchHit]) -> int:
        """Append hits and return how many new unique hashes they brought."""
        new_unique = 0
        with self._lock:
            for hit in hits:
                self._hits.append(hit)
                if hit.content_hash not in self._hashes:
                    self._hashes.add(hit.content_hash)
                    new_unique += 1
            total = len(self._hashes)

        if new_unique:
            logger.debug("Accumulated %d new unique results (total: %d)", new_unique, total)
        return new_unique

    @property
    def unique_count(self) -> int:
        with self._lock:
            return len(self._hashes)

    @property
    def cap_reached(self) -> bool:
        with self._lock:
            return len(self._hashes) >= self.cap

    @property
    def hits(self) -> list[SearchHit]:
        """Snapshot of all accumulated hits in arrival order."""
        with self._lock:
            return list(self._hits)

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

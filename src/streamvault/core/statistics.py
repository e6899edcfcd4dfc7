"""
Statistics Collection Module

This module provides counters and timings for the stream pipeline: how many
searches were issued, how many candidates were rejected, deduplicated or
matched, and how the response cache performed.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class PipelineMetrics:
    """Container for pipeline metrics."""

    # Search metrics
    searches_issued: int = 0
    searches_failed: int = 0
    search_time: float = 0.0

    # Candidate metrics
    raw_candidates: int = 0
    rejected_candidates: int = 0
    duplicate_candidates: int = 0
    unmatched_candidates: int = 0
    streams_returned: int = 0

    # Cache metrics
    cache_hits: int = 0
    cache_misses: int = 0

    # Filter fallbacks (stage name -> count)
    filter_fallbacks: dict[str, int] = field(default_factory=dict)

    @property
    def cache_hit_ratio(self) -> float:
        total = self.cache_hits + self.cache_misses
        return self.cache_hits / total if total > 0 else 0.0


class StatisticsCollector:
    """Central aggregator for pipeline metrics.

    Safe to share between concurrently running searches.
    """

    def __init__(self) -> None:
        """Initialize the statistics collector."""
        self.metrics = PipelineMetrics()
        self.session_start = datetime.now(timezone.utc)
        self._timings: dict[str, list[float]] = {}
        self._lock = threading.Lock()

        logger.debug("StatisticsCollector initialized")

    def record_timing(self, operation: str, duration: float) -> None:
        """Record the duration of one run of an operation.

        Args:
            operation: Name of the operation being timed
            duration: Elapsed time in seconds
        """
        with self._lock:
            self._timings.setdefault(operation, []).append(duration)

        logger.debug("Operation %s took %.3fs", operation, duration)

    def record_search(self, *, success: bool, result_count: int = 0, duration: float = 0.0) -> None:
        """Record one upstream search call."""
        with self._lock:
            self.metrics.searches_issued += 1
            self.metrics.search_time += duration
            if success:
                self.metrics.raw_candidates += result_count
            else:
                self.metrics.searches_failed += 1

    def record_rejected(self, count: int = 1) -> None:
        with self._lock:
            self.metrics.rejected_candidates += count

    def record_duplicates(self, count: int = 1) -> None:
        with self._lock:
            self.metrics.duplicate_candidates += count

    def record_unmatched(self, count: int = 1) -> None:
        with self._lock:
            self.metrics.unmatched_candidates += count

    def record_streams_returned(self, count: int) -> None:
        with self._lock:
            self.metrics.streams_returned += count

    def record_cache_hit(self) -> None:
        with self._lock:
            self.metrics.cache_hits += 1

    def record_cache_miss(self) -> None:
        with self._lock:
            self.metrics.cache_misses += 1

    def record_filter_fallback(self, stage: str) -> None:
        with self._lock:
            fallbacks = self.metrics.filter_fallbacks
            fallbacks[stage] = fallbacks.get(stage, 0) + 1

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of all collected statistics.

        Returns:
            Dictionary with metrics, derived ratios and average timings
        """
        with self._lock:
            summary = asdict(self.metrics)
            summary["cache_hit_ratio"] = self.metrics.cache_hit_ratio
            summary["average_timings"] = {
                name: sum(values) / len(values) for name, values in self._timings.items() if values
            }
        summary["session_start"] = self.session_start.isoformat()
        return summary

    def reset(self) -> None:
        """Reset all statistics."""
        with self._lock:
            self.metrics = PipelineMetrics()
            self._timings.clear()
        self.session_start = datetime.now(timezone.utc)
        logger.debug("Statistics reset")


# Global statistics collector instance
_global_collector: StatisticsCollector | None = None


def get_statistics_collector() -> StatisticsCollector:
    """Get the process-wide statistics collector used by default engines."""
    global _global_collector  # noqa: PLW0603
    if _global_collector is None:
        _global_collector = StatisticsCollector()
    return _global_collector

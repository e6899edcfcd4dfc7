"""Post-ranking filters with an empty-result fallback.

Three stages run in fixed order on the ranked list: the quality allow-list,
the maximum file size and the per-quality cap. A stage that would remove
every stream is skipped (a warning is logged); the other stages still apply.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from streamvault.config.models.preferences import StreamPreferences
from streamvault.core.matching.models import RankedStream
from streamvault.core.matching.quality import (
    matches_quality_selection,
    quality_category,
    size_in_gb,
)
from streamvault.core.statistics import StatisticsCollector
from streamvault.shared.constants import QualityCategory
from streamvault.shared.logging import log_filter_fallback

logger = logging.getLogger(__name__)

StageFn = Callable[[list[RankedStream]], list[RankedStream]]


class StreamPostFilterService:
    """Apply the user's quality, size and per-quality limits.

    Attributes:
        statistics: Collector that counts skipped (fallback) stages
    """

    def __init__(self, statistics: StatisticsCollector | None = None) -> None:
        self.statistics = statistics

    def apply(
        self,
        streams: Sequence[RankedStream],
        preferences: StreamPreferences,
    ) -> list[RankedStream]:
        """Run every configured stage in order."""
        result = list(streams)

        if preferences.quality_filter_active:
            allowed = preferences.show_qualities
            result = self._run_stage(
                "quality", result, lambda items: self.filter_by_quality(items, allowed)
            )

        if preferences.max_file_size > 0:
            ceiling = preferences.max_file_size
            result = self._run_stage(
                "max_size", result, lambda items: self.filter_by_max_size(items, ceiling)
            )

        if preferences.max_results_per_quality > 0:
            cap = preferences.max_results_per_quality
            result = self._run_stage(
                "per_quality_cap", result, lambda items: self.cap_per_quality(items, cap)
            )

        return result

    def _run_stage(self, stage: str, streams: list[RankedStream], fn: StageFn) -> list[RankedStream]:
        if not streams:
            return streams

        filtered = fn(streams)
        if not filtered:
            log_filter_fallback(logger, stage, len(streams))
            if self.statistics is not None:
                self.statistics.record_filter_fallback(stage)
            return streams

        logger.debug("Filter stage '%s': %d -> %d streams", stage, len(streams), len(filtered))
        return filtered

    @staticmethod
    def filter_by_quality(
        streams: Sequence[RankedStream],
        allowed: frozenset[str],
    ) -> list[RankedStream]:
        """Keep streams whose quality label matches a selected quality."""
        return [s for s in streams if matches_quality_selection(s.quality, allowed)]

    @staticmethod
    def filter_by_max_size(
        streams: Sequence[RankedStream],
        max_size_gb: float,
    ) -> list[RankedStream]:
        """Drop streams larger than ``max_size_gb``; unknown sizes are kept."""
        kept = []
        for stream in streams:
            raw_size = stream.source.raw_size_bytes if stream.source else None
            size = size_in_gb(stream.size_label, raw_size)
            if size is None or size <= max_size_gb:
                kept.append(stream)
        return kept

    @staticmethod
    def cap_per_quality(streams: Sequence[RankedStream], cap: int) -> list[RankedStream]:
        """Keep at most ``cap`` streams per quality category.

        The result is grouped by category, best first; each group keeps its
        rank order.
        """
        buckets: dict[str, list[RankedStream]] = {
            category: [] for category in QualityCategory.ORDER
        }
        for stream in streams:
            buckets[quality_category(stream.quality)].append(stream)
        return [
            stream for category in QualityCategory.ORDER for stream in buckets[category][:cap]
        ]

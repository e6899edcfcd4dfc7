"""Stream ranking service.

This module provides the StreamRankingService class that orders mapped
streams by the user's sort policy. Every policy is a stable sort, so streams
with equal keys keep their upstream order and ranking an already ranked list
changes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from streamvault.config.models.preferences import SortPolicy
from streamvault.core.matching.models import RankedStream
from streamvault.core.matching.quality import quality_score, size_sort_key

logger = logging.getLogger(__name__)

SortKey = Callable[[RankedStream], Any]


def _negated_size(stream: RankedStream) -> tuple[int, float]:
    unit_rank, value = size_sort_key(stream.size_label)
    return (-unit_rank, -value)


def _negated_timestamp(stream: RankedStream) -> tuple[int, float]:
    # streams without an upload date sort after dated ones
    timestamp = stream.upload_timestamp
    if timestamp is None:
        return (1, 0.0)
    return (0, -timestamp.timestamp())


class StreamRankingService:
    """Order streams by quality, preferred language, size and date.

    Policies and their tie-break chains (earlier wins):
        quality_first: quality, language, size
        size_first: size, quality, language
        date_first: upload date, quality, language, size
        language_first: preferred-language group first, each group by
            quality, size
        relevance_first: quality, language (upstream order otherwise kept)

    Example:
        >>> service = StreamRankingService()
        >>> ranked = service.rank(streams, SortPolicy.SIZE_FIRST, "eng")
    """

    def rank(
        self,
        streams: Sequence[RankedStream],
        policy: SortPolicy,
        preferred_language: str | None = None,
    ) -> list[RankedStream]:
        """Return a new list ordered by ``policy``."""
        if policy is SortPolicy.LANGUAGE_FIRST:
            ranked = self._rank_language_first(streams, preferred_language)
        else:
            ranked = sorted(streams, key=self._sort_key(policy, preferred_language))

        logger.debug("Ranked %d streams by %s", len(ranked), policy.value)
        return ranked

    @staticmethod
    def _sort_key(policy: SortPolicy, preferred_language: str | None) -> SortKey:
        def quality(stream: RankedStream) -> int:
            return -quality_score(stream.quality)

        def language(stream: RankedStream) -> int:
            return 0 if stream.has_language(preferred_language) else 1

        if policy is SortPolicy.SIZE_FIRST:
            return lambda s: (_negated_size(s), quality(s), language(s))
        if policy is SortPolicy.DATE_FIRST:
            return lambda s: (_negated_timestamp(s), quality(s), language(s), _negated_size(s))
        if policy is SortPolicy.RELEVANCE_FIRST:
            return lambda s: (quality(s), language(s))
        return lambda s: (quality(s), language(s), _negated_size(s))

    @staticmethod
    def _rank_language_first(
        streams: Sequence[RankedStream],
        preferred_language: str | None,
    ) -> list[RankedStream]:
        preferred = [s for s in streams if s.has_language(preferred_language)]
        others = [s for s in streams if not s.has_language(preferred_language)]

        def by_quality_and_size(stream: RankedStream) -> tuple[int, tuple[int, float]]:
            return (-quality_score(stream.quality), _negated_size(stream))

        if preferred_language:
            logger.debug(
                "Language-first split for '%s': %d preferred, %d other",
                preferred_language,
                len(preferred),
                len(others),
            )
        return sorted(preferred, key=by_quality_and_size) + sorted(others, key=by_quality_and_size)

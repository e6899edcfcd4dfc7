"""Candidate filtering service for the stream pipeline.

This module provides the CandidateFilterService class that rejects raw
search records which cannot be played (samples, protected or flagged files,
non-video media) and removes duplicate records by content hash.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from streamvault.core.matching.models import SearchHit
from streamvault.core.statistics import StatisticsCollector
from streamvault.shared.constants import MEBIBYTE, MediaTypes, SearchLimits
from streamvault.shared.models.search import RawCandidate

logger = logging.getLogger(__name__)

_SECONDS_DURATION = re.compile(r"^\d+s")
_SHORT_DURATION = re.compile(r"^[0-5]m")


class CandidateFilterService:
    """Service for rejecting unplayable candidates and deduplicating hits.

    This service encapsulates:
    1. Quality gates on raw records (duration, flags, media type, size)
    2. Hash-based deduplication where the first occurrence wins
    3. Immutable list operations (input not modified)

    Attributes:
        statistics: Statistics collector for rejected/duplicate counters
        min_file_size_bytes: Files below this raw size count as samples

    Example:
        >>> service = CandidateFilterService(StatisticsCollector())
        >>> accepted = service.accept(outcome.hits)
    """

    def __init__(
        self,
        statistics: StatisticsCollector,
        min_file_size_bytes: int = SearchLimits.MIN_FILE_SIZE_BYTES,
    ) -> None:
        self.statistics = statistics
        self.min_file_size_bytes = min_file_size_bytes

    def rejection_reason(self, candidate: RawCandidate) -> str | None:
        """Return why a candidate is unplayable, or None if it is acceptable.

        Args:
            candidate: Raw search record

        Returns:
            Human-readable reason, None when the candidate passes every gate
        """
        duration = candidate.duration_label
        if _SECONDS_DURATION.match(duration) or _SHORT_DURATION.match(duration):
            return f"duration too short ({duration})"
        if candidate.is_password_protected:
            return "password protected"
        if candidate.is_flagged_malicious:
            return "flagged as malicious"
        if candidate.media_type.upper() != MediaTypes.VIDEO:
            return f"not a video file (type: {candidate.media_type or 'unknown'})"
        if candidate.raw_size_bytes and candidate.raw_size_bytes < self.min_file_size_bytes:
            return f"file too small ({round(candidate.raw_size_bytes / MEBIBYTE)}MB)"
        return None

    def is_bad_candidate(self, candidate: RawCandidate) -> bool:
        reason = self.rejection_reason(candidate)
        if reason is not None:
            logger.debug("Rejected '%s': %s", candidate.display_title, reason)
            return True
        return False

    def accept(self, hits: Iterable[SearchHit]) -> list[SearchHit]:
        """Drop bad candidates, then duplicates (first occurrence wins).

        A rejected record does not claim its hash, so a later playable
        record with the same hash is still accepted.
        """
        hits = list(hits)
        playable = [hit for hit in hits if not self.is_bad_candidate(hit.candidate)]
        accepted = self.deduplicate(playable)
        rejected = len(hits) - len(playable)
        duplicates = len(playable) - len(accepted)

        if rejected:
            self.statistics.record_rejected(rejected)
        if duplicates:
            self.statistics.record_duplicates(duplicates)

        logger.debug(
            "Accepted %d candidates (%d rejected, %d duplicates)",
            len(accepted),
            rejected,
            duplicates,
        )
        return accepted

    @staticmethod
    def deduplicate(hits: Iterable[SearchHit]) -> list[SearchHit]:
        """Keep the first hit per content hash, preserving order."""
        seen: set[str] = set()
        unique: list[SearchHit] = []
        for hit in hits:
            if hit.content_hash not in seen:
                seen.add(hit.content_hash)
                unique.append(hit)
        return unique

"""Stream pipeline service layer.

This module contains service classes that encapsulate the individual
stages of the stream pipeline, one responsibility per service.
"""

from __future__ import annotations

from .accumulator import ResultAccumulator
from .cache_adapter import CacheEntry, InMemoryResponseCache, ResponseCacheProtocol
from .filter_service import CandidateFilterService
from .post_filter_service import StreamPostFilterService
from .ranking_service import StreamRankingService
from .search_service import SearchOrchestrator, SearchOutcome, sort_options_for
from .stream_mapper import StreamMapper, authentication_error_stream

__all__ = [
    "CacheEntry",
    "CandidateFilterService",
    "InMemoryResponseCache",
    "ResponseCacheProtocol",
    "ResultAccumulator",
    "SearchOrchestrator",
    "SearchOutcome",
    "StreamMapper",
    "StreamPostFilterService",
    "StreamRankingService",
    "authentication_error_stream",
    "sort_options_for",
]

"""Stream matching pipeline for StreamVault.

This module provides title matching, variant generation and the
StreamSearchEngine that runs the whole discovery, ranking and filtering
pipeline for a content id.
"""

from .engine import StreamSearchEngine, build_response, cache_max_age
from .models import ContentKind, MediaQuery, RankedStream, SearchHit, StreamRequest
from .title_matcher import TitleMatcher, matches_title
from .variants import TitleVariantGenerator, build_search_query

__all__ = [
    "ContentKind",
    "MediaQuery",
    "RankedStream",
    "SearchHit",
    "StreamRequest",
    "StreamSearchEngine",
    "TitleMatcher",
    "TitleVariantGenerator",
    "build_response",
    "build_search_query",
    "cache_max_age",
    "matches_title",
]

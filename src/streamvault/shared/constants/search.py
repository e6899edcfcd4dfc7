"""
Upstream Search Constants

Limits and sort hints for the full-text content search service.
"""

from typing import ClassVar

from .system import MEBIBYTE


class SearchLimits:
    """Result budget and per-call limits."""

    MAX_RESULTS_PER_QUERY = 50
    TOTAL_MAX_RESULTS = 500
    DEFAULT_MAX_CONCURRENCY = 1
    MIN_FILE_SIZE_BYTES = 20 * MEBIBYTE  # smaller files are samples or broken


class SortField:
    """Sort field names understood by the search service."""

    SIZE = "dsize"
    DATE = "dtime"
    RELEVANCE = "relevance"

    DESCENDING = "-"


class CandidateFields:
    """Positional keys of a raw search record."""

    HASH = "0"
    EXTENSION_ALT = "2"
    SIZE_LABEL = "4"
    UPLOAD_DATE = "5"
    TITLE = "10"
    EXTENSION = "11"
    DURATION = "14"


class MediaTypes:
    """Media type values reported for raw records."""

    VIDEO = "VIDEO"


class Languages:
    """Audio language codes selectable as the preferred language."""

    SUPPORTED: ClassVar[tuple[str, ...]] = (
        "eng",
        "ger",
        "spa",
        "fre",
        "ita",
        "jpn",
        "por",
        "rus",
        "kor",
        "chi",
    )

"""Quality and size helpers shared by the mapper, ranking and filters.

Quality labels are the second line of a stream's display name ("1080p",
"4K/2160p", "WEB-DL", ...). Ranking turns them into an integer score, the
per-quality cap groups them into categories, and the allow-list filter
checks them against the user's selected qualities.
"""

from __future__ import annotations

import logging
import re

from streamvault.core.parser.release_parser import parse_release
from streamvault.shared.constants import (
    GIBIBYTE,
    QualityCategory,
    QualityLabels,
    QualityOptions,
    QualityScore,
    SizeUnits,
)

logger = logging.getLogger(__name__)

_TITLE_PATTERNS = tuple(
    (re.compile(pattern, re.IGNORECASE), label) for pattern, label in QualityLabels.TITLE_PATTERNS
)
_RESOLUTION_HINT = re.compile(r"^\s*(\d{3,5})\s*[x×]\s*(\d{3,5})\s*$", re.IGNORECASE)
_SIZE_LABEL = re.compile(r"([\d][\d,]*(?:\.\d+)?)\s*([KMGT]B)", re.IGNORECASE)

_UHD = re.compile(r"4k|2160p|uhd|ultra hd", re.IGNORECASE)
_FULL_HD = re.compile(r"1080p", re.IGNORECASE)
_HD = re.compile(r"720p", re.IGNORECASE)
_SD = re.compile(r"480p|\bsd\b", re.IGNORECASE)

_ALIAS_PATTERNS = {
    quality: re.compile("|".join(rf"\b{re.escape(alias)}\b" for alias in aliases), re.IGNORECASE)
    for quality, aliases in QualityOptions.LABEL_ALIASES.items()
}


def _label_for_resolution(resolution: str) -> str:
    return "4K/2160p" if resolution.lower() in {"2160p", "4k"} else resolution


def _convert_resolution_hint(hint: str) -> str:
    """Turn a ``WIDTHxHEIGHT`` hint into a tier label, else return it unchanged."""
    match = _RESOLUTION_HINT.match(hint)
    if not match:
        return hint.strip()

    width, height = int(match.group(1)), int(match.group(2))
    tolerance = QualityLabels.TIER_TOLERANCE
    for tier_width, tier_height, label in QualityLabels.RESOLUTION_TIERS:
        if width >= tier_width * tolerance or height >= tier_height * tolerance:
            return label
    return f"{height}p"


def detect_quality(title: str, full_resolution: str | None = None) -> str | None:
    """Resolve the quality label for a candidate.

    Sources, first hit wins:
    1. resolution parsed from the release name
    2. title patterns (resolution, then source/codec hints)
    3. the candidate's full-resolution hint

    Examples:
        >>> detect_quality("Movie.2019.1080p.BluRay.x264")
        '1080p'
        >>> detect_quality("Movie 2019", "1920x800")
        '1080p'
        >>> detect_quality("Movie 2019") is None
        True
    """
    parsed = parse_release(title)
    if parsed.resolution:
        return _label_for_resolution(parsed.resolution)

    for pattern, label in _TITLE_PATTERNS:
        if pattern.search(title):
            return label

    if full_resolution and full_resolution.strip():
        return _convert_resolution_hint(full_resolution)
    return None


def quality_score(label: str | None) -> int:
    """Integer rank of a quality label (4 = UHD ... 0 = unknown)."""
    if not label:
        return QualityScore.UNKNOWN
    if _UHD.search(label):
        return QualityScore.UHD
    if _FULL_HD.search(label):
        return QualityScore.FULL_HD
    if _HD.search(label):
        return QualityScore.HD
    if _SD.search(label):
        return QualityScore.SD
    return QualityScore.UNKNOWN


_CATEGORY_BY_SCORE = {
    QualityScore.UHD: QualityCategory.UHD,
    QualityScore.FULL_HD: QualityCategory.FULL_HD,
    QualityScore.HD: QualityCategory.HD,
    QualityScore.SD: QualityCategory.SD,
}


def quality_category(label: str | None) -> str:
    """Bucket name used by the per-quality cap."""
    return _CATEGORY_BY_SCORE.get(quality_score(label), QualityCategory.OTHER)


def matches_quality_selection(label: str | None, allowed: frozenset[str]) -> bool:
    """Whether a quality label is accepted by any selected quality option."""
    if not label:
        return False
    return any(
        _ALIAS_PATTERNS[quality].search(label) for quality in allowed if quality in _ALIAS_PATTERNS
    )


def parse_size(label: str | None) -> tuple[float, str] | None:
    """Parse ``"1.2 GB"`` into ``(1.2, "GB")``; commas are thousands separators."""
    if not label:
        return None
    match = _SIZE_LABEL.search(label)
    if not match:
        return None
    try:
        value = float(match.group(1).replace(",", ""))
    except ValueError:
        return None
    return value, match.group(2).upper()


def size_sort_key(label: str | None) -> tuple[int, float]:
    """Comparable size key: larger unit first, then larger value.

    Unparseable labels sort below every parsed size.

    Example:
        >>> sorted(["800 MB", "2.0 GB", "1.2 GB"], key=size_sort_key, reverse=True)
        ['2.0 GB', '1.2 GB', '800 MB']
    """
    parsed = parse_size(label)
    if parsed is None:
        return (-1, 0.0)
    value, unit = parsed
    return (SizeUnits.RANK[unit], value)


def size_in_gb(label: str | None, raw_size_bytes: int | None = None) -> float | None:
    """Size in GB from the label, falling back to the raw byte count."""
    parsed = parse_size(label)
    if parsed is not None:
        value, unit = parsed
        return value * SizeUnits.IN_GB[unit]
    if raw_size_bytes:
        return raw_size_bytes / GIBIBYTE
    return None

"""Guessit-based release name parser.

This module wraps the guessit library, which extracts the clean title, year
and resolution from scene-style release names such as
``The.Matrix.1999.1080p.BluRay.x264``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from guessit import guessit

logger = logging.getLogger(__name__)

_PARSE_CACHE_SIZE = 4096


@dataclass(frozen=True)
class ParsedRelease:
    """Fields extracted from a release name.

    Attributes:
        title: Clean title without year/quality tokens (None if not found)
        year: Release year
        resolution: Screen size token such as ``1080p`` or ``2160p``
    """

    title: str | None = None
    year: int | None = None
    resolution: str | None = None


def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _as_title(value: Any) -> str | None:
    if isinstance(value, list):
        value = " ".join(str(part) for part in value)
    return str(value) if value else None


@lru_cache(maxsize=_PARSE_CACHE_SIZE)
def parse_release(name: str) -> ParsedRelease:
    """Parse a release name.

    Results are memoized because every candidate is parsed once per title
    variant during matching.

    Examples:
        >>> parse_release("The Matrix 1999")
        ParsedRelease(title='The Matrix', year=1999, resolution=None)
    """
    if not name or not name.strip():
        return ParsedRelease()

    try:
        guess = guessit(name)
    except Exception:  # pylint: disable=broad-exception-caught
        # guessit raises its own exception types on pathological input
        logger.exception("guessit failed to parse release name '%s'", name)
        return ParsedRelease()

    year = _first(guess.get("year"))
    resolution = _first(guess.get("screen_size"))
    return ParsedRelease(
        title=_as_title(guess.get("title")),
        year=int(year) if year is not None else None,
        resolution=str(resolution) if resolution else None,
    )

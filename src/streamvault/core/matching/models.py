"""Stream Pipeline Domain Models.

This module defines immutable domain models for the stream pipeline's
internal data structures. These models use frozen dataclasses for
immutability; external records are validated pydantic models from
``streamvault.shared.models``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from streamvault.shared.errors import DomainError, ErrorCode, ErrorContext
from streamvault.shared.models.metadata import MediaMetadata
from streamvault.shared.models.search import DownloadLocation, RawCandidate

_IMDB_ID_PATTERN = re.compile(r"^tt\d+$")


class ContentKind(str, Enum):
    """Kind of content a request is for."""

    MOVIE = "movie"
    SERIES = "series"
    OTHER = "other"

    @classmethod
    def from_value(cls, value: str | ContentKind) -> ContentKind:
        if isinstance(value, ContentKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class StreamRequest:
    """A parsed stream request id.

    Attributes:
        content_id: Bare content identifier, e.g. ``tt0903747``
        kind: Requested content kind
        season: Season number for series requests
        episode: Episode number for series requests

    Example:
        >>> StreamRequest.parse("tt0903747:1:5", "series")
        StreamRequest(content_id='tt0903747', kind=<ContentKind.SERIES: 'series'>, season=1, episode=5)
    """

    content_id: str
    kind: ContentKind
    season: int | None = None
    episode: int | None = None

    @classmethod
    def parse(cls, raw_id: str, kind: str | ContentKind) -> StreamRequest:
        """Parse ``tt123`` / ``tt123:S:E`` request ids.

        Raises:
            DomainError: If the id is not an IMDb-style id
        """
        content_kind = ContentKind.from_value(kind)
        parts = (raw_id or "").strip().split(":")
        content_id = parts[0]

        if not _IMDB_ID_PATTERN.match(content_id):
            raise DomainError(
                ErrorCode.INVALID_CONTENT_ID,
                f"Unsupported content id: {raw_id!r}",
                ErrorContext(operation="parse_request", content_id=raw_id or ""),
            )

        season = episode = None
        if content_kind is ContentKind.SERIES and len(parts) >= 3:
            try:
                season, episode = int(parts[1]), int(parts[2])
            except ValueError as e:
                raise DomainError(
                    ErrorCode.INVALID_CONTENT_ID,
                    f"Invalid season/episode in content id: {raw_id!r}",
                    ErrorContext(operation="parse_request", content_id=raw_id),
                    original_error=e,
                ) from e

        return cls(content_id=content_id, kind=content_kind, season=season, episode=episode)


@dataclass(frozen=True)
class MediaQuery:
    """Normalized media query resolved from upstream metadata.

    Attributes:
        canonical_title: Primary title (search variant 0)
        year: Release year
        season: Season number (series only)
        episode: Episode number (series only)
        content_kind: movie, series or other

    Raises:
        ValueError: If the title is blank or season/episode are negative
    """

    canonical_title: str
    year: int | None = None
    season: int | None = None
    episode: int | None = None
    content_kind: ContentKind = ContentKind.MOVIE

    def __post_init__(self) -> None:
        if not self.canonical_title or not self.canonical_title.strip():
            raise ValueError("Title cannot be empty or whitespace")
        for name in ("season", "episode"):
            value = getattr(self, name)
            if value is not None and value < 0:
                msg = f"{name} must be >= 0, got {value}"
                raise ValueError(msg)

    @classmethod
    def from_metadata(
        cls,
        metadata: MediaMetadata,
        kind: ContentKind,
        request: StreamRequest | None = None,
    ) -> MediaQuery:
        """Build a query; season/episode from the request id win over metadata."""
        season = request.season if request and request.season is not None else metadata.season
        episode = request.episode if request and request.episode is not None else metadata.episode
        return cls(
            canonical_title=metadata.name,
            year=metadata.year,
            season=season if kind is ContentKind.SERIES else None,
            episode=episode if kind is ContentKind.SERIES else None,
            content_kind=kind,
        )


@dataclass(frozen=True)
class SearchHit:
    """A raw candidate together with where its file can be downloaded."""

    candidate: RawCandidate
    location: DownloadLocation

    @property
    def content_hash(self) -> str:
        return self.candidate.content_hash


@dataclass(frozen=True)
class RankedStream:
    """One playable stream in the pipeline output.

    ``source`` keeps a typed reference to the raw candidate so ranking
    and filtering read size, date and languages without parsing the
    description text. It is ``None`` only for the authentication sentinel.
    """

    name: str
    description: str
    url: str | None
    quality: str | None = None
    behavior_hints: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
    source: RawCandidate | None = field(default=None, repr=False)

    @property
    def content_hash(self) -> str | None:
        return self.source.content_hash if self.source else None

    @property
    def size_label(self) -> str:
        return self.source.size_label if self.source else ""

    @property
    def upload_timestamp(self) -> datetime | None:
        return self.source.upload_timestamp if self.source else None

    def has_language(self, language: str | None) -> bool:
        return self.source is not None and self.source.has_language(language)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the transport's stream object shape."""
        data: dict[str, Any] = {"name": self.name, "description": self.description}
        if self.url is not None:
            data["url"] = self.url
        if self.behavior_hints:
            data["behaviorHints"] = dict(self.behavior_hints)
        return data

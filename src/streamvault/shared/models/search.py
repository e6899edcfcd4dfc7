"""Upstream content search models.

Pydantic models for the records returned by the full-text search service.
Validation happens here, at the external boundary, so the pipeline only
ever sees typed candidates.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from streamvault.shared.constants import CandidateFields

logger = logging.getLogger(__name__)


def _parse_upload_timestamp(value: Any) -> datetime | None:
    """Parse an upload date given as epoch seconds or an ISO date string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) or (isinstance(value, str) and value.isdigit()):
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace(" ", "T", 1))
        except ValueError:
            logger.debug("Unparseable upload date: %r", value)
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


class RawCandidate(BaseModel):
    """One file record returned by the search service.

    Field aliases follow the positional keys of the upstream payload
    (see CandidateFields).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    content_hash: str = Field(alias=CandidateFields.HASH)
    display_title: str = Field(default="", alias=CandidateFields.TITLE)
    extension: str = Field(default="", alias=CandidateFields.EXTENSION)
    extension_alt: str = Field(default="", alias=CandidateFields.EXTENSION_ALT)
    duration_label: str = Field(default="", alias=CandidateFields.DURATION)
    size_label: str = Field(default="", alias=CandidateFields.SIZE_LABEL)
    upload_timestamp: datetime | None = Field(default=None, alias=CandidateFields.UPLOAD_DATE)
    raw_size_bytes: int | None = Field(default=None, alias="rawSize")
    full_resolution: str | None = Field(default=None, alias="fullres")
    audio_languages: tuple[str, ...] = Field(default=(), alias="alangs")
    is_password_protected: bool = Field(default=False, alias="passwd")
    is_flagged_malicious: bool = Field(default=False, alias="virus")
    media_type: str = Field(default="", alias="type")

    @field_validator(
        "display_title",
        "extension",
        "extension_alt",
        "duration_label",
        "size_label",
        "media_type",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("upload_timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime | None:
        return _parse_upload_timestamp(value)

    @field_validator("raw_size_bytes", mode="before")
    @classmethod
    def _parse_raw_size(cls, value: Any) -> int | None:
        if value in (None, ""):
            return None
        return int(float(value))

    @field_validator("audio_languages", mode="before")
    @classmethod
    def _parse_languages(cls, value: Any) -> tuple[str, ...]:
        if not value:
            return ()
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return tuple(str(v) for v in value)

    @field_validator("is_password_protected", "is_flagged_malicious", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @property
    def file_extension(self) -> str:
        """Extension including the leading dot, e.g. ``.mkv``."""
        return self.extension or self.extension_alt

    @property
    def filename(self) -> str:
        return f"{self.display_title}{self.file_extension}"

    def has_language(self, language: str | None) -> bool:
        """Whether the preferred audio language is present."""
        return bool(language) and language in self.audio_languages


class DownloadLocation(BaseModel):
    """Where files of one search response can be fetched from."""

    model_config = ConfigDict(frozen=True)

    down_url: str = ""
    dl_farm: str = ""
    dl_port: str = ""

    def stream_url(self, candidate: RawCandidate, username: str, password: str) -> str:
        """Build the authenticated playback URL for a candidate.

        Credentials are injected into the base URL, then the
        ``/{farm}/{port}/{hash}{ext}/{title}{ext}`` path is appended.
        """
        userinfo = f"{quote(username, safe='')}:{quote(password, safe='')}@"
        base = self.down_url.replace("https://", f"https://{userinfo}", 1)
        ext = candidate.file_extension
        return (
            f"{base}/{self.dl_farm}/{self.dl_port}/"
            f"{candidate.content_hash}{ext}/{quote(candidate.display_title)}{ext}"
        )


class SearchResponse(BaseModel):
    """A single search call's response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    down_url: str = Field(default="", alias="downURL")
    dl_farm: str = Field(default="", alias="dlFarm")
    dl_port: str = Field(default="", alias="dlPort")
    data: list[RawCandidate] = Field(default_factory=list)

    @field_validator("dl_farm", "dl_port", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("data", mode="before")
    @classmethod
    def _drop_records_without_hash(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            kept = [
                record
                for record in value
                if isinstance(record, RawCandidate)
                or (isinstance(record, dict) and record.get(CandidateFields.HASH))
            ]
            if len(kept) != len(value):
                logger.debug("Dropped %d records without a content hash", len(value) - len(kept))
            return kept
        return value

    @property
    def location(self) -> DownloadLocation:
        return DownloadLocation(
            down_url=self.down_url,
            dl_farm=self.dl_farm,
            dl_port=self.dl_port,
        )


class SearchSortOptions(BaseModel):
    """Sort hints forwarded to the search service with every query."""

    model_config = ConfigDict(frozen=True)

    sort1: str
    sort1_direction: str = "-"
    sort2: str
    sort2_direction: str = "-"
    sort3: str = "dtime"
    sort3_direction: str = "-"

    def describe(self) -> str:
        return (
            f"{self.sort1} ({self.sort1_direction}), "
            f"{self.sort2} ({self.sort2_direction}), "
            f"{self.sort3} ({self.sort3_direction})"
        )

"""Metadata provider response model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaMetadata(BaseModel):
    """Title information resolved for a content id.

    Attributes:
        name: Canonical title used as search variant 0
        original_name: Title in the original language, if known
        alternative_names: Provider-supplied alternate titles
        year: Release year (first air year for series)
        season: Requested season (series only)
        episode: Requested episode (series only)
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    original_name: str | None = Field(default=None, alias="originalName")
    alternative_names: tuple[str, ...] = Field(default=(), alias="alternativeNames")
    year: int | None = None
    season: int | None = None
    episode: int | None = None

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Metadata name cannot be empty")
        return value

    @field_validator("alternative_names", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return () if value is None else value

"""Per-request user preferences.

The calling transport layer hands over the user's addon configuration as a
flat mapping of strings (checkbox values like ``"on"``, blank numeric
fields, comma separated quality lists). This model normalizes it once so the
pipeline only sees typed values.
"""

from __future__ import annotations

import hashlib
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from streamvault.shared.constants import Languages, QualityOptions

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"on", "true", "1", "yes"})


class SortPolicy(str, Enum):
    """User-selectable ranking policy."""

    QUALITY_FIRST = "quality_first"
    LANGUAGE_FIRST = "language_first"
    SIZE_FIRST = "size_first"
    DATE_FIRST = "date_first"
    RELEVANCE_FIRST = "relevance_first"


class StreamPreferences(BaseModel):
    """Settings that shape one stream request's output.

    Security: password is hidden from repr; use ``cache_params()`` rather
    than dumping the model when building cache keys or log context.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    username: str = ""
    password: str = Field(default="", repr=False)
    strict_title_matching: bool = False
    preferred_language: str = ""
    sorting_preference: SortPolicy = SortPolicy.QUALITY_FIRST
    show_qualities: frozenset[str] = Field(default=QualityOptions.ALL)
    max_results_per_quality: int = Field(default=0, ge=0)
    max_file_size: float = Field(
        default=0.0,
        ge=0.0,
        description="Maximum file size in GB (0 = no limit)",
    )
    custom_titles: str = ""

    @field_validator("username", "password", "preferred_language", "custom_titles", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("preferred_language")
    @classmethod
    def _normalize_language(cls, value: str) -> str:
        language = value.strip().lower()
        if language and language not in Languages.SUPPORTED:
            logger.debug("Unsupported preferred language %r, ignoring", value)
            return ""
        return language

    @field_validator("strict_title_matching", mode="before")
    @classmethod
    def _parse_checkbox(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return bool(value)

    @field_validator("sorting_preference", mode="before")
    @classmethod
    def _parse_sort_policy(cls, value: Any) -> SortPolicy:
        if isinstance(value, SortPolicy):
            return value
        try:
            return SortPolicy(str(value).strip().lower())
        except ValueError:
            logger.debug("Unknown sorting preference %r, using quality_first", value)
            return SortPolicy.QUALITY_FIRST

    @field_validator("show_qualities", mode="before")
    @classmethod
    def _parse_qualities(cls, value: Any) -> frozenset[str]:
        if value is None or value == "":
            return QualityOptions.ALL
        items = value.split(",") if isinstance(value, str) else value
        selected = frozenset(
            item.strip().lower() for item in items if item.strip().lower() in QualityOptions.ALL
        )
        return selected or QualityOptions.ALL

    @field_validator("max_results_per_quality", "max_file_size", mode="before")
    @classmethod
    def _blank_means_unlimited(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def quality_filter_active(self) -> bool:
        """Whether the allow-list differs from the full default set."""
        return self.show_qualities != QualityOptions.ALL

    def cache_params(self) -> dict[str, Any]:
        """Every setting that affects the pipeline output, for cache keys."""
        return {
            "strict": self.strict_title_matching,
            "lang": self.preferred_language,
            "sort": self.sorting_preference.value,
            "q": sorted(self.show_qualities),
            "cap": self.max_results_per_quality,
            "max": self.max_file_size,
            "titles": self._custom_titles_digest(),
        }

    def __repr__(self) -> str:
        masked = "****" if self.password else "[empty]"
        return (
            f"StreamPreferences(username={self.username!r}, password={masked}, "
            f"strict_title_matching={self.strict_title_matching}, "
            f"preferred_language={self.preferred_language!r}, "
            f"sorting_preference={self.sorting_preference.value})"
        )

    def _custom_titles_digest(self) -> str | None:
        text = self.custom_titles.strip()
        if not text:
            return None
        return hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]

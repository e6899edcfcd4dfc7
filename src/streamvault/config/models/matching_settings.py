"""Title matching configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from streamvault.shared.constants import MatchingThresholds


class MatchingSettings(BaseModel):
    """Title matcher and variant generator configuration."""

    loose_word_ratio: float = Field(
        default=MatchingThresholds.LOOSE_WORD_RATIO,
        gt=0.0,
        le=1.0,
        description="Share of significant query words required in loose mode",
    )
    transliterate_umlauts: bool = Field(
        default=False,
        description="Expand German umlauts (ä -> ae) before comparing titles",
    )
    custom_titles_path: str | None = Field(
        default=None,
        description="JSON custom title dictionary; the bundled one is used when unset",
    )

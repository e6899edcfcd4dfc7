"""Map accepted search hits to output streams."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from streamvault.core.matching.models import RankedStream, SearchHit
from streamvault.core.matching.quality import detect_quality
from streamvault.shared.constants import Application

logger = logging.getLogger(__name__)

AUTH_ERROR_DESCRIPTION = (
    "Authentication Failed: Invalid username or password\n"
    "Check your credentials & reconfigure addon"
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def authentication_error_stream(product_label: str = Application.PRODUCT_LABEL) -> RankedStream:
    """The single stream returned when the account cannot be used."""
    return RankedStream(
        name=f"{product_label} Auth Error",
        description=AUTH_ERROR_DESCRIPTION,
        url=None,
    )


class StreamMapper:
    """Build display name, description and playback URL for a hit.

    The description always has four lines::

        {title}{ext}
        🕛 {duration}
        📦 {size}[ · {age}d]
        🌐 {languages}[ ⭐]

    Args:
        product_label: First line of every display name
        clock: Returns the current UTC time (used for the upload age)
    """

    def __init__(
        self,
        product_label: str = Application.PRODUCT_LABEL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.product_label = product_label
        self.clock = clock

    def map(
        self,
        hit: SearchHit,
        username: str,
        password: str,
        preferred_language: str | None = None,
    ) -> RankedStream:
        candidate = hit.candidate
        quality = detect_quality(candidate.display_title, candidate.full_resolution)
        name = f"{self.product_label}\n{quality}" if quality else self.product_label

        description = "\n".join(
            [
                candidate.filename,
                f"🕛 {candidate.duration_label or 'unknown duration'}",
                f"📦 {candidate.size_label or 'unknown size'}{self._age_annotation(hit)}",
                self._language_line(hit, preferred_language),
            ]
        )

        return RankedStream(
            name=name,
            description=description,
            url=hit.location.stream_url(candidate, username, password),
            quality=quality,
            behavior_hints={"notWebReady": True, "filename": candidate.filename},
            source=candidate,
        )

    def map_all(
        self,
        hits: list[SearchHit],
        username: str,
        password: str,
        preferred_language: str | None = None,
    ) -> list[RankedStream]:
        return [self.map(hit, username, password, preferred_language) for hit in hits]

    def _age_annotation(self, hit: SearchHit) -> str:
        uploaded = hit.candidate.upload_timestamp
        if uploaded is None:
            return ""
        days = max(0, (self.clock() - uploaded).days)
        return f" · {days}d"

    @staticmethod
    def _language_line(hit: SearchHit, preferred_language: str | None) -> str:
        languages = hit.candidate.audio_languages
        if not languages:
            return "🌐 Unknown"
        marker = " ⭐" if hit.candidate.has_language(preferred_language) else ""
        return f"🌐 {', '.join(languages)}{marker}"

"""
Title Matching Constants

Thresholds and patterns used by the title matcher and variant generator.
"""

from typing import ClassVar


class MatchingThresholds:
    """Loose-mode matching thresholds."""

    LOOSE_WORD_RATIO = 0.7  # share of significant query words that must appear
    MIN_SIGNIFICANT_WORD_LENGTH = 3  # shorter words are ignored
    MIN_PARTIAL_ALIAS_LENGTH = 4  # keys/aliases this short never partial-match


class TitlePatterns:
    """Regular expressions shared by matcher and sanitizer."""

    SEASON_EPISODE = r"s(\d+)e(\d+)"
    RELEASE_YEAR = r"^(?:19|20)\d{2}$"
    FOUR_DIGITS = r"^\d{4}$"
    RESOLUTION = r"^(?:\d{3,4}p|4k|uhd)$"


class Transliteration:
    """Optional locale transliteration tables."""

    GERMAN_UMLAUTS: ClassVar[dict[str, str]] = {
        "ä": "ae",
        "ö": "oe",
        "ü": "ue",
        "Ä": "Ae",
        "Ö": "Oe",
        "Ü": "Ue",
        "ß": "ss",
    }

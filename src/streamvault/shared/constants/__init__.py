"""
StreamVault Constants Module

Centralized constants grouped by domain. All magic values used by the
pipeline are defined here.
"""

from .cache import Cache
from .matching import MatchingThresholds, TitlePatterns, Transliteration
from .quality import QualityCategory, QualityLabels, QualityOptions, QualityScore, SizeUnits
from .search import CandidateFields, Languages, MediaTypes, SearchLimits, SortField
from .system import (
    BASE_DAY,
    BASE_MINUTE,
    BASE_SECOND,
    GIBIBYTE,
    MEBIBYTE,
    Application,
    Logging,
)

__all__ = [
    "BASE_DAY",
    "BASE_MINUTE",
    "BASE_SECOND",
    "GIBIBYTE",
    "MEBIBYTE",
    "Application",
    "Cache",
    "CandidateFields",
    "Languages",
    "Logging",
    "MatchingThresholds",
    "MediaTypes",
    "QualityCategory",
    "QualityLabels",
    "QualityOptions",
    "QualityScore",
    "SearchLimits",
    "SizeUnits",
    "SortField",
    "TitlePatterns",
    "Transliteration",
]

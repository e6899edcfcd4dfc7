"""Configuration models for StreamVault.

Domain models are split by concern; ``Settings`` composes them.
"""

from .app_settings import AppSettings, LoggingSettings
from .cache_settings import CacheSettings
from .matching_settings import MatchingSettings
from .preferences import SortPolicy, StreamPreferences
from .search_settings import SearchSettings
from .settings import Settings

__all__ = [
    "AppSettings",
    "CacheSettings",
    "LoggingSettings",
    "MatchingSettings",
    "SearchSettings",
    "Settings",
    "SortPolicy",
    "StreamPreferences",
]

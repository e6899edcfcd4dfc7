"""StreamVault Configuration Module

This module provides unified access to configuration models and settings
management for StreamVault.

- Settings: Main configuration facade (pydantic-settings, TOML + env)
- StreamPreferences: Per-request user configuration
- Loader functions: get_config, load_settings, reload_config, configure_logging
"""

from __future__ import annotations

from .models import (
    AppSettings,
    CacheSettings,
    LoggingSettings,
    MatchingSettings,
    SearchSettings,
    Settings,
    SortPolicy,
    StreamPreferences,
)
from .loader import configure_logging, get_config, load_settings, reload_config

__all__ = [
    "AppSettings",
    "CacheSettings",
    "LoggingSettings",
    "MatchingSettings",
    "SearchSettings",
    "Settings",
    "SortPolicy",
    "StreamPreferences",
    "configure_logging",
    "get_config",
    "load_settings",
    "reload_config",
]

"""StreamVault Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from streamvault.config.models.app_settings import AppSettings, LoggingSettings
from streamvault.config.models.cache_settings import CacheSettings
from streamvault.config.models.matching_settings import MatchingSettings
from streamvault.config.models.search_settings import SearchSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values come from (highest precedence first) constructor arguments,
    ``STREAMVAULT_*`` environment variables with ``__`` as the nesting
    delimiter (e.g. ``STREAMVAULT_SEARCH__MAX_CONCURRENCY=4``), then defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="STREAMVAULT_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration sections %s from %s", sorted(raw_config), file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)

"""Settings loader and singleton manager.

This module handles:
- Configuration file loading from TOML (explicit path, ``STREAMVAULT_CONFIG``
  or the default locations)
- Thread-safe singleton pattern for the Settings instance
- Applying logging settings to the ``streamvault`` logger
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

import toml
from pydantic import ValidationError

from streamvault.config.models.settings import Settings
from streamvault.shared.errors import ApplicationError, ErrorCode, ErrorContext
from streamvault.shared.logging import setup_structured_logger

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STREAMVAULT_CONFIG"
DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/streamvault.toml"),
    Path("streamvault.toml"),
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()
        return self._instance

    def reload_config(self) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings()
        return self._instance

    def reset(self) -> None:
        """Forget the cached instance (used by tests)."""
        with self._lock:
            self._instance = None


def _resolve_config_path(config_path: str | Path | None) -> Path | None:
    if config_path:
        return Path(config_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    for candidate in DEFAULT_CONFIG_PATHS:
        if candidate.exists():
            return candidate
    return None


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. When omitted, the
            ``STREAMVAULT_CONFIG`` variable and the default locations are
            tried before falling back to environment variables only.

    Returns:
        Settings instance loaded from the resolved source

    Raises:
        ApplicationError: If the file is missing, malformed or invalid
    """
    path = _resolve_config_path(config_path)
    if path is None:
        return Settings()

    try:
        settings = Settings.from_toml_file(path)
    except FileNotFoundError as e:
        raise ApplicationError(
            code=ErrorCode.CONFIG_MISSING,
            message=f"Configuration file not found: {path}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path)},
            ),
            original_error=e,
        ) from e
    except (toml.TomlDecodeError, ValidationError, TypeError) as e:
        raise ApplicationError(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=f"Invalid configuration in {path}: {e}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path)},
            ),
            original_error=e,
        ) from e

    logger.info("Configuration loaded from %s", path)
    return settings


def configure_logging(settings: Settings) -> logging.Logger:
    """Apply the logging section of ``settings`` to the package logger."""
    log_settings = settings.logging
    level = "DEBUG" if settings.app.debug else log_settings.level
    return setup_structured_logger(
        level=level,
        log_file=log_settings.file,
        use_rich_console=log_settings.rich_console,
    )


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config()


__all__ = [
    "SettingsLoader",
    "configure_logging",
    "get_config",
    "load_settings",
    "reload_config",
]

"""Tests for settings loading and the global settings singleton."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import pytest

from streamvault.config import Settings, configure_logging, load_settings
from streamvault.config.loader import CONFIG_ENV_VAR, SettingsLoader
from streamvault.shared.errors import ApplicationError, ErrorCode


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "streamvault.toml"
    path.write_text("[search]\nmax_concurrency = 5\n", encoding="utf-8")
    return path


class TestLoadSettings:
    """Resolution order and error mapping."""

    def test_explicit_path(self, config_file: Path) -> None:
        assert load_settings(config_file).search.max_concurrency == 5

    def test_env_path(self, config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert load_settings().search.max_concurrency == 5

    def test_no_file_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_settings() == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ApplicationError) as exc_info:
            load_settings(tmp_path / "missing.toml")
        assert exc_info.value.code == ErrorCode.CONFIG_MISSING

    def test_malformed_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[search\nmax_concurrency = ", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(path)

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR
        assert exc_info.value.context.additional_data == {"config_path": str(path)}

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "invalid.toml"
        path.write_text("[search]\nmax_concurrency = 0\n", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(path)

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR


class TestSettingsLoader:
    """Thread-safe singleton behaviour."""

    def test_instance_is_cached(self, config_file, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        loader = SettingsLoader()

        assert loader.get_config() is loader.get_config()

    def test_reload_replaces_instance(self, config_file, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        loader = SettingsLoader()
        first = loader.get_config()

        config_file.write_text("[search]\nmax_concurrency = 7\n", encoding="utf-8")
        reloaded = loader.reload_config()

        assert reloaded is not first
        assert reloaded.search.max_concurrency == 7
        assert loader.get_config() is reloaded

    def test_concurrent_first_access(self, config_file, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        loader = SettingsLoader()
        results: list[Settings] = []

        def _read() -> None:
            results.append(loader.get_config())

        threads = [threading.Thread(target=_read) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(result) for result in results}) == 1

    def test_reset(self, config_file, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        loader = SettingsLoader()
        first = loader.get_config()

        loader.reset()

        assert loader.get_config() is not first


def test_configure_logging(tmp_path: Path) -> None:
    package_logger = logging.getLogger("streamvault")
    saved = (package_logger.handlers[:], package_logger.level, package_logger.propagate)
    settings = Settings(
        app={"debug": True},
        logging={"file": str(tmp_path / "streamvault.log"), "rich_console": False},
    )

    try:
        configured = configure_logging(settings)

        assert configured is package_logger
        assert configured.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in configured.handlers)
    finally:
        for handler in package_logger.handlers:
            handler.close()
        package_logger.handlers[:] = saved[0]
        package_logger.setLevel(saved[1])
        package_logger.propagate = saved[2]

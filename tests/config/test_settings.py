"""Tests for the Settings facade."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from streamvault.config import CacheSettings, SearchSettings, Settings
from streamvault.shared.constants import Cache, SearchLimits


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.search.max_concurrency == SearchLimits.DEFAULT_MAX_CONCURRENCY
        assert settings.search.total_max_results == SearchLimits.TOTAL_MAX_RESULTS
        assert settings.search.product_label == "StreamVault"
        assert settings.cache.enabled is True
        assert settings.cache.ttl == Cache.TTL
        assert settings.matching.custom_titles_path is None
        assert settings.logging.rich_console is True


class TestValidation:
    """Field and cross-field constraints."""

    def test_total_cap_must_cover_one_query(self) -> None:
        with pytest.raises(ValidationError, match="total_max_results"):
            SearchSettings(max_results_per_query=100, total_max_results=50)

    @pytest.mark.parametrize("concurrency", [0, 17])
    def test_concurrency_bounds(self, concurrency: int) -> None:
        with pytest.raises(ValidationError):
            SearchSettings(max_concurrency=concurrency)

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CacheSettings(ttl=0)

    def test_loose_ratio_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Settings(matching={"loose_word_ratio": 1.5})


class TestEnvironmentOverrides:
    def test_nested_env_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAMVAULT_SEARCH__MAX_CONCURRENCY", "4")
        monkeypatch.setenv("STREAMVAULT_CACHE__ENABLED", "false")

        settings = Settings()

        assert settings.search.max_concurrency == 4
        assert settings.cache.enabled is False

    def test_blank_env_variable_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STREAMVAULT_SEARCH__MAX_CONCURRENCY", "")
        assert Settings().search.max_concurrency == SearchLimits.DEFAULT_MAX_CONCURRENCY


class TestTomlFiles:
    """Reading and writing TOML configuration."""

    def test_from_toml_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "streamvault.toml"
        config_file.write_text(
            """
[search]
max_concurrency = 3
product_label = "Vault"

[cache]
ttl = 600
""",
            encoding="utf-8",
        )

        settings = Settings.from_toml_file(config_file)

        assert settings.search.max_concurrency == 3
        assert settings.search.product_label == "Vault"
        assert settings.cache.ttl == 600

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_toml_file(tmp_path / "missing.toml")

    def test_round_trip(self, tmp_path: Path) -> None:
        original = Settings(search={"max_concurrency": 2}, cache={"ttl": 90})
        config_file = tmp_path / "nested" / "streamvault.toml"

        original.to_toml_file(config_file)
        loaded = Settings.from_toml_file(config_file)

        assert loaded.search.max_concurrency == 2
        assert loaded.cache.ttl == 90

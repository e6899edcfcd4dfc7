"""
Pytest configuration and shared fixtures for StreamVault tests.

This module provides record factories and fake collaborators that can be
used across all test modules in the project.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest
from factories import DOWN_URL, make_record, make_response

from streamvault.config.models.preferences import StreamPreferences
from streamvault.core.aliases import CustomTitleDictionary
from streamvault.core.matching.models import SearchHit
from streamvault.core.statistics import StatisticsCollector
from streamvault.shared.models.metadata import MediaMetadata
from streamvault.shared.models.search import DownloadLocation, RawCandidate

# Keep developer environment overrides out of the tests
for _name in list(os.environ):
    if _name.startswith("STREAMVAULT_"):
        del os.environ[_name]


@pytest.fixture
def record_factory() -> Callable[..., dict[str, Any]]:
    """Factory for raw search records."""
    return make_record


@pytest.fixture
def candidate_factory() -> Callable[..., RawCandidate]:
    """Factory for validated RawCandidate models."""

    def _make(content_hash: str = "abc123", title: str = "The Matrix 1999", **overrides: Any):
        return RawCandidate.model_validate(make_record(content_hash, title, **overrides))

    return _make


@pytest.fixture
def location() -> DownloadLocation:
    return DownloadLocation(down_url=DOWN_URL, dl_farm="auto", dl_port="443")


@pytest.fixture
def hit_factory(candidate_factory, location) -> Callable[..., SearchHit]:
    """Factory for search hits sharing one download location."""

    def _make(content_hash: str = "abc123", title: str = "The Matrix 1999", **overrides: Any):
        return SearchHit(candidate=candidate_factory(content_hash, title, **overrides), location=location)

    return _make


@pytest.fixture
def statistics() -> StatisticsCollector:
    return StatisticsCollector()


@pytest.fixture
def preferences() -> StreamPreferences:
    """Preferences of a user with valid credentials and default settings."""
    return StreamPreferences(username="user", password="secret")


@pytest.fixture
def empty_titles() -> CustomTitleDictionary:
    return CustomTitleDictionary({})


@pytest.fixture
def metadata_provider() -> AsyncMock:
    """Metadata provider resolving every id to The Matrix (1999)."""
    provider = AsyncMock()
    provider.resolve = AsyncMock(return_value=MediaMetadata(name="The Matrix", year=1999))
    return provider


@pytest.fixture
def search_client() -> AsyncMock:
    """Search client returning no results unless configured."""
    client = AsyncMock()
    client.search = AsyncMock(return_value=make_response())
    return client

"""Tests for response cache key building."""

from __future__ import annotations

import pytest

from streamvault.shared.cache_utils import (
    account_digest,
    build_stream_cache_key,
    canonical_params,
)
from streamvault.shared.constants import Cache


class TestCanonicalParams:
    def test_empty(self) -> None:
        assert canonical_params(None) == {}
        assert canonical_params({}) == {}

    def test_normalization(self) -> None:
        assert canonical_params(
            {"Lang": "", "q": ["720p", "4K"], "strict": True, "cap": 0, "titles": None}
        ) == {"lang": "", "q": "4k,720p", "strict": "true", "cap": "0"}


class TestBuildStreamCacheKey:
    """Keys are deterministic and sensitive to every setting."""

    def test_format(self) -> None:
        key = build_stream_cache_key("tt0133093", {"strict": False, "sort": "size_first"})
        assert key == f"tt0133093:{Cache.KEY_VERSION}:sort=size_first:strict=false"

    def test_argument_order_does_not_matter(self) -> None:
        first = build_stream_cache_key("tt1", {"a": 1, "b": 2})
        second = build_stream_cache_key("tt1", {"b": 2, "a": 1})
        assert first == second

    def test_settings_change_key(self) -> None:
        assert build_stream_cache_key("tt1", {"lang": ""}) != build_stream_cache_key(
            "tt1", {"lang": "eng"}
        )

    def test_version_changes_key(self) -> None:
        assert build_stream_cache_key("tt1", version="v3") == "tt1:v3"

    def test_empty_content_id(self) -> None:
        with pytest.raises(ValueError, match="content_id"):
            build_stream_cache_key("")


class TestAccountDigest:
    def test_stable_and_short(self) -> None:
        digest = account_digest("alice")
        assert digest == account_digest("alice")
        assert len(digest) == Cache.ACCOUNT_DIGEST_LENGTH
        assert "alice" not in digest

    def test_accounts_differ(self) -> None:
        assert account_digest("alice") != account_digest("bob")

    def test_password_is_part_of_digest(self) -> None:
        assert account_digest("alice", "RealSecret") != account_digest("alice", "wrong")
        assert account_digest("alice", "RealSecret") != account_digest("alice")

    def test_fields_cannot_be_shifted(self) -> None:
        assert account_digest("ab", "c") != account_digest("a", "bc")

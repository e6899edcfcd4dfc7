"""Tests for SearchOrchestrator."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from factories import make_record, make_response

from streamvault.config.models.preferences import SortPolicy
from streamvault.config.models.search_settings import SearchSettings
from streamvault.core.matching.models import ContentKind, MediaQuery
from streamvault.core.matching.services.search_service import (
    SearchOrchestrator,
    sort_options_for,
)
from streamvault.shared.errors import AuthenticationError, ErrorCode


def _responses(mapping: dict[str, object]):
    """side_effect returning per-query responses (or raising exceptions)."""

    async def _search(query, *, max_results, sort=None):
        result = mapping.get(query, make_response())
        if isinstance(result, BaseException):
            raise result
        return result

    return _search


class TestSortOptions:
    """Test sort hint mapping."""

    @pytest.mark.parametrize(
        ("policy", "expected"),
        [
            (SortPolicy.SIZE_FIRST, ("dsize", "relevance")),
            (SortPolicy.DATE_FIRST, ("dtime", "dsize")),
            (SortPolicy.RELEVANCE_FIRST, ("relevance", "dsize")),
            (SortPolicy.LANGUAGE_FIRST, ("relevance", "dsize")),
            (SortPolicy.QUALITY_FIRST, ("dsize", "relevance")),
        ],
    )
    def test_mapping(self, policy, expected) -> None:
        options = sort_options_for(policy)
        assert (options.sort1, options.sort2) == expected
        assert options.sort3 == "dtime"
        assert {options.sort1_direction, options.sort2_direction, options.sort3_direction} == {"-"}


class TestSearchOrchestrator:
    """Test variant fan-out, early exit and failure handling."""

    @pytest.fixture
    def query(self) -> MediaQuery:
        return MediaQuery("The Matrix", year=1999, content_kind=ContentKind.MOVIE)

    def _orchestrator(self, client, statistics, **settings) -> SearchOrchestrator:
        return SearchOrchestrator(client, SearchSettings(**settings), statistics)

    @pytest.mark.asyncio
    async def test_searches_each_variant_without_year(self, search_client, statistics, query) -> None:
        search_client.search.side_effect = _responses(
            {
                "The Matrix": make_response(make_record("a")),
                "Matrix": make_response(make_record("b")),
            }
        )
        orchestrator = self._orchestrator(search_client, statistics)

        outcome = await orchestrator.run(query, ["The Matrix", "", "Matrix"])

        assert outcome.queries[:2] == ["The Matrix", "Matrix"]
        assert [hit.content_hash for hit in outcome.hits] == ["a", "b"]
        first_call = search_client.search.await_args_list[0]
        assert first_call.kwargs["max_results"] == 50

    @pytest.mark.asyncio
    async def test_second_pass_with_year(self, search_client, statistics, query) -> None:
        search_client.search.side_effect = _responses(
            {"The Matrix 1999": make_response(make_record("y"))}
        )
        orchestrator = self._orchestrator(search_client, statistics)

        outcome = await orchestrator.run(query, ["The Matrix"])

        assert outcome.queries == ["The Matrix", "The Matrix 1999"]
        assert [hit.content_hash for hit in outcome.hits] == ["y"]

    @pytest.mark.asyncio
    async def test_no_second_pass_without_year(self, search_client, statistics) -> None:
        orchestrator = self._orchestrator(search_client, statistics)
        outcome = await orchestrator.run(MediaQuery("Untitled"), ["Untitled"])
        assert outcome.queries == ["Untitled"]
        assert not outcome.has_results

    @pytest.mark.asyncio
    async def test_stops_at_global_cap(self, search_client, statistics, query) -> None:
        search_client.search.side_effect = _responses(
            {
                "A": make_response(make_record("1"), make_record("2")),
                "B": make_response(make_record("3")),
            }
        )
        orchestrator = self._orchestrator(
            search_client, statistics, max_results_per_query=2, total_max_results=2
        )

        outcome = await orchestrator.run(query, ["A", "B", "C"])

        assert outcome.queries == ["A"]
        assert outcome.cap_reached

    @pytest.mark.asyncio
    async def test_failed_variant_is_skipped(self, search_client, statistics, query, caplog) -> None:
        search_client.search.side_effect = _responses(
            {
                "Broken": ConnectionError("boom"),
                "The Matrix": make_response(make_record("a")),
            }
        )
        orchestrator = self._orchestrator(search_client, statistics)

        outcome = await orchestrator.run(query, ["Broken", "The Matrix"])

        assert "Broken" in outcome.failed_queries
        assert [hit.content_hash for hit in outcome.hits] == ["a"]
        assert statistics.metrics.searches_failed >= 1
        assert any(
            getattr(record, "error_code", None) == ErrorCode.SEARCH_CALL_FAILED.value
            for record in caplog.records
        )

    @pytest.mark.asyncio
    async def test_authentication_error_propagates(self, search_client, statistics, query) -> None:
        auth_error = AuthenticationError(ErrorCode.SEARCH_AUTHENTICATION_FAILED, "bad credentials")
        search_client.search.side_effect = _responses({"B": auth_error})
        orchestrator = self._orchestrator(search_client, statistics)

        with pytest.raises(AuthenticationError):
            await orchestrator.run(query, ["A", "B", "C"])

        assert search_client.search.await_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_batches_merge_in_variant_order(self, statistics, query) -> None:
        client = AsyncMock()
        client.search.side_effect = _responses(
            {
                "A": make_response(make_record("a")),
                "B": make_response(make_record("b")),
                "C": make_response(make_record("c")),
            }
        )
        orchestrator = self._orchestrator(client, statistics, max_concurrency=3)

        outcome = await orchestrator.run(query, ["A", "B", "C"])

        assert [hit.content_hash for hit in outcome.hits] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_sort_options_forwarded(self, search_client, statistics, query) -> None:
        orchestrator = self._orchestrator(search_client, statistics)
        sort = sort_options_for(SortPolicy.DATE_FIRST)

        await orchestrator.run(query, ["The Matrix"], sort)

        assert search_client.search.await_args.kwargs["sort"] is sort

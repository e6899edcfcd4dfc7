"""Search orchestration across title variants.

This module provides the SearchOrchestrator class that fans out one upstream
search per title variant, accumulates the raw hits and stops issuing calls
once enough unique candidates have been collected.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from streamvault.config.models.preferences import SortPolicy
from streamvault.config.models.search_settings import SearchSettings
from streamvault.core.matching.models import MediaQuery, SearchHit
from streamvault.core.matching.services.accumulator import ResultAccumulator
from streamvault.core.matching.variants import query_for_variant
from streamvault.core.statistics import StatisticsCollector
from streamvault.shared.constants import SortField
from streamvault.shared.errors import AuthenticationError, StreamVaultError, create_search_call_error
from streamvault.shared.logging import log_operation_error
from streamvault.shared.models.search import SearchSortOptions
from streamvault.shared.protocols.services import ContentSearchClientProtocol

logger = logging.getLogger(__name__)

_DESC = SortField.DESCENDING

_SORT_FIELDS: dict[SortPolicy, tuple[str, str]] = {
    SortPolicy.SIZE_FIRST: (SortField.SIZE, SortField.RELEVANCE),
    SortPolicy.DATE_FIRST: (SortField.DATE, SortField.SIZE),
    SortPolicy.RELEVANCE_FIRST: (SortField.RELEVANCE, SortField.SIZE),
    SortPolicy.LANGUAGE_FIRST: (SortField.RELEVANCE, SortField.SIZE),
    SortPolicy.QUALITY_FIRST: (SortField.SIZE, SortField.RELEVANCE),
}


def sort_options_for(policy: SortPolicy) -> SearchSortOptions:
    """Upstream sort hints for a ranking policy.

    Example:
        >>> sort_options_for(SortPolicy.DATE_FIRST).describe()
        'dtime (-), dsize (-), dtime (-)'
    """
    first, second = _SORT_FIELDS.get(policy, _SORT_FIELDS[SortPolicy.QUALITY_FIRST])
    return SearchSortOptions(
        sort1=first,
        sort1_direction=_DESC,
        sort2=second,
        sort2_direction=_DESC,
        sort3=SortField.DATE,
        sort3_direction=_DESC,
    )


@dataclass
class SearchOutcome:
    """Result of one orchestration run.

    Attributes:
        hits: All hits in variant order (duplicates included)
        queries: Queries actually sent, in order
        failed_queries: Queries whose call raised a recoverable error
        cap_reached: Whether the unique-result cap stopped the run early
    """

    hits: list[SearchHit] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)
    failed_queries: list[str] = field(default_factory=list)
    cap_reached: bool = False

    @property
    def has_results(self) -> bool:
        return bool(self.hits)


class SearchOrchestrator:
    """Issue variant searches and accumulate their results.

    Two passes are made over the variants: first without the release year,
    then, when a year is known and the unique-result cap was not reached,
    with the year appended. Variant searches run in batches of
    ``max_concurrency`` calls; results are always merged in variant order so
    the output does not depend on network timing.

    Failure policy:
        - AuthenticationError propagates immediately
        - any other exception is logged and that variant's results are absent

    Example:
        >>> orchestrator = SearchOrchestrator(client, SearchSettings(), StatisticsCollector())
        >>> outcome = await orchestrator.run(query, ["The Matrix"], sort_options_for(policy))
        >>> len(outcome.hits)
        42
    """

    def __init__(
        self,
        search_client: ContentSearchClientProtocol,
        settings: SearchSettings,
        statistics: StatisticsCollector,
    ) -> None:
        self.search_client = search_client
        self.settings = settings
        self.statistics = statistics

    async def run(
        self,
        query: MediaQuery,
        variants: Sequence[str],
        sort: SearchSortOptions | None = None,
    ) -> SearchOutcome:
        """Search every variant, without then with the year.

        Raises:
            AuthenticationError: If the search service rejects the credentials
        """
        accumulator = ResultAccumulator(self.settings.total_max_results)
        outcome = SearchOutcome()
        titles = [variant for variant in variants if variant and variant.strip()]

        await self._run_pass(query, titles, sort, accumulator, outcome, with_year=False)

        if query.year is not None and not accumulator.cap_reached:
            logger.info(
                "Searching again with year %d (%d unique results so far)",
                query.year,
                accumulator.unique_count,
            )
            await self._run_pass(query, titles, sort, accumulator, outcome, with_year=True)

        outcome.hits = accumulator.hits
        outcome.cap_reached = accumulator.cap_reached
        logger.info(
            "Search finished: %d queries, %d failed, %d hits, %d unique",
            len(outcome.queries),
            len(outcome.failed_queries),
            len(outcome.hits),
            accumulator.unique_count,
        )
        return outcome

    async def _run_pass(
        self,
        query: MediaQuery,
        titles: list[str],
        sort: SearchSortOptions | None,
        accumulator: ResultAccumulator,
        outcome: SearchOutcome,
        *,
        with_year: bool,
    ) -> None:
        batch_size = self.settings.max_concurrency
        for start in range(0, len(titles), batch_size):
            if accumulator.cap_reached:
                logger.info(
                    "Result cap of %d reached, skipping remaining variants",
                    accumulator.cap,
                )
                return

            queries = [
                query_for_variant(query, title, with_year=with_year)
                for title in titles[start : start + batch_size]
            ]
            outcome.queries.extend(queries)
            results = await asyncio.gather(
                *(self._search_one(text, sort) for text in queries),
                return_exceptions=True,
            )

            for text, result in zip(queries, results):
                if isinstance(result, AuthenticationError):
                    raise result
                if isinstance(result, BaseException):
                    if not isinstance(result, Exception):
                        raise result
                    self._record_failure(text, result)
                    outcome.failed_queries.append(text)
                    continue
                if result:
                    accumulator.add(result)

    async def _search_one(self, text: str, sort: SearchSortOptions | None) -> list[SearchHit]:
        started = time.perf_counter()
        logger.debug("Searching for '%s'", text)
        response = await self.search_client.search(
            text,
            max_results=self.settings.max_results_per_query,
            sort=sort,
        )
        duration = time.perf_counter() - started

        location = response.location
        hits = [SearchHit(candidate=candidate, location=location) for candidate in response.data]
        self.statistics.record_search(success=True, result_count=len(hits), duration=duration)
        self.statistics.record_timing("search_call", duration)
        logger.info("Found %d results for '%s'", len(hits), text)
        return hits

    def _record_failure(self, text: str, error: Exception) -> None:
        self.statistics.record_search(success=False)
        if isinstance(error, StreamVaultError):
            search_error = error
        else:
            search_error = create_search_call_error(text, original_error=error)
        log_operation_error(logger, search_error, operation="search")

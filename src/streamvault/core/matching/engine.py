"""Stream search engine: the top-level entry point of the stream pipeline.

This module wires the pipeline stages together:

    request id -> metadata -> title variants -> variant searches
    -> candidate filter/dedup -> title matching -> stream mapping
    -> ranking -> post filters -> response cache

The engine never raises. Every failure resolves to an empty list, or to
the single authentication-error stream when the account is unusable.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

from streamvault.config.models.preferences import StreamPreferences
from streamvault.config.models.settings import Settings
from streamvault.core.aliases import (
    CustomTitleDictionary,
    ProviderAlternates,
    load_custom_titles,
    parse_custom_titles,
)
from streamvault.core.matching.models import (
    ContentKind,
    MediaQuery,
    RankedStream,
    SearchHit,
    StreamRequest,
)
from streamvault.core.matching.services import (
    CandidateFilterService,
    InMemoryResponseCache,
    ResponseCacheProtocol,
    SearchOrchestrator,
    StreamMapper,
    StreamPostFilterService,
    StreamRankingService,
    authentication_error_stream,
    sort_options_for,
)
from streamvault.core.matching.title_matcher import TitleMatcher
from streamvault.core.matching.variants import TitleVariantGenerator, query_for_variant
from streamvault.core.normalization import umlaut_table
from streamvault.core.statistics import StatisticsCollector, get_statistics_collector
from streamvault.shared.cache_utils import account_digest, build_stream_cache_key
from streamvault.shared.constants import Cache
from streamvault.shared.errors import (
    AuthenticationError,
    DomainError,
    ErrorCode,
    ErrorContext,
    create_metadata_error,
)
from streamvault.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)
from streamvault.shared.models.metadata import MediaMetadata
from streamvault.shared.protocols.services import (
    ContentSearchClientProtocol,
    MetadataProviderProtocol,
)

logger = logging.getLogger(__name__)


def cache_max_age(stream_count: int) -> int:
    """Client cache lifetime in seconds, growing with the number of streams."""
    full = Cache.CLIENT_MAX_AGE_FULL_COUNT
    return int(min(stream_count, full) / full * Cache.CLIENT_MAX_AGE)


def build_response(streams: Sequence[RankedStream]) -> dict[str, Any]:
    """Serialize streams into the transport's response body."""
    return {
        "streams": [stream.to_dict() for stream in streams],
        "cacheMaxAge": cache_max_age(len(streams)),
    }


class StreamSearchEngine:
    """Find, match, rank and filter playable streams for a content id.

    Args:
        metadata_provider: Resolves titles for content ids
        search_client: Upstream full-text content search client
        settings: Pipeline settings (defaults when None)
        custom_titles: Process-wide custom title dictionary; loaded from
            ``settings.matching.custom_titles_path`` (or the bundled file)
            when None
        cache: Response cache; an in-memory cache is created when None and
            caching is enabled
        statistics: Optional statistics collector shared by all stages

    Example:
        >>> engine = StreamSearchEngine(provider, client)
        >>> streams = await engine.find_streams("tt0133093", "movie", preferences)
        >>> streams[0].name
        'StreamVault\\n1080p'
    """

    def __init__(
        self,
        metadata_provider: MetadataProviderProtocol,
        search_client: ContentSearchClientProtocol,
        settings: Settings | None = None,
        custom_titles: CustomTitleDictionary | None = None,
        cache: ResponseCacheProtocol | None = None,
        statistics: StatisticsCollector | None = None,
        mapper: StreamMapper | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.statistics = statistics or get_statistics_collector()
        self.metadata_provider = metadata_provider

        if custom_titles is None:
            custom_titles = load_custom_titles(self.settings.matching.custom_titles_path)
        self.custom_titles = custom_titles

        if cache is None and self.settings.cache.enabled:
            cache = InMemoryResponseCache(ttl_seconds=self.settings.cache.ttl)
        self.cache = cache if self.settings.cache.enabled else None

        search_settings = self.settings.search
        self.matcher = TitleMatcher(
            transliteration=umlaut_table(self.settings.matching.transliterate_umlauts),
            loose_word_ratio=self.settings.matching.loose_word_ratio,
        )
        self._orchestrator = SearchOrchestrator(search_client, search_settings, self.statistics)
        self._filter_service = CandidateFilterService(
            self.statistics,
            min_file_size_bytes=search_settings.min_file_size_bytes,
        )
        self._mapper = mapper or StreamMapper(product_label=search_settings.product_label)
        self._ranking_service = StreamRankingService()
        self._post_filter_service = StreamPostFilterService(self.statistics)

    async def find_streams(
        self,
        content_id: str,
        kind: str | ContentKind,
        preferences: StreamPreferences,
    ) -> list[RankedStream]:
        """Run the full pipeline for one request.

        Args:
            content_id: ``tt123`` for movies, ``tt123:S:E`` for series
            kind: ``movie``, ``series`` or another content kind
            preferences: The user's per-request configuration

        Returns:
            Ranked streams; ``[]`` when nothing was found or a fatal error
            occurred; the single auth-error stream when credentials are
            missing or rejected
        """
        started = time.perf_counter()
        try:
            streams = await self._find_streams(content_id, kind, preferences)
        except Exception:  # pylint: disable=broad-exception-caught
            # Last line of defense: the caller never sees an exception
            logger.exception("Stream pipeline failed for %s", content_id)
            return []

        duration = time.perf_counter() - started
        self.statistics.record_timing("find_streams", duration)
        log_operation_success(
            logger,
            "find_streams",
            duration * 1000,
            result_info={"streams": len(streams)},
            context={"content_id": content_id},
        )
        return streams

    async def _find_streams(
        self,
        content_id: str,
        kind: str | ContentKind,
        preferences: StreamPreferences,
    ) -> list[RankedStream]:
        try:
            request = StreamRequest.parse(content_id, kind)
        except DomainError as e:
            logger.debug("Ignoring request: %s", e.message)
            return []

        product_label = self.settings.search.product_label
        if not preferences.has_credentials:
            missing = AuthenticationError(
                ErrorCode.MISSING_CREDENTIALS,
                f"Missing credentials for {request.content_id}",
                ErrorContext(operation="find_streams", content_id=request.content_id),
            )
            log_operation_error(logger, missing, level=logging.WARNING)
            return [authentication_error_stream(product_label)]

        log_operation_start(
            logger,
            "find_streams",
            {"content_id": content_id, "kind": request.kind.value},
        )

        cache_key = self._cache_key(content_id, preferences)
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                self.statistics.record_cache_hit()
                logger.info("Serving %d cached streams for %s", len(cached), content_id)
                return cached
            self.statistics.record_cache_miss()

        metadata = await self._resolve_metadata(request)
        if metadata is None:
            return []

        query = MediaQuery.from_metadata(metadata, request.kind, request)
        variants = self._title_variants(metadata, preferences)
        logger.info("Will search for %d titles: %s", len(variants), ", ".join(variants))

        try:
            outcome = await self._orchestrator.run(
                query,
                variants,
                sort_options_for(preferences.sorting_preference),
            )
        except AuthenticationError as e:
            log_operation_error(logger, e, operation="search")
            return [authentication_error_stream(product_label)]

        if not outcome.has_results:
            logger.info("No search results for %s", content_id)
            return []

        accepted = self._filter_service.accept(outcome.hits)
        matched = self._match(accepted, query, variants, preferences.strict_title_matching)
        streams = self._mapper.map_all(
            matched,
            preferences.username,
            preferences.password,
            preferences.preferred_language or None,
        )
        ranked = self._ranking_service.rank(
            streams,
            preferences.sorting_preference,
            preferences.preferred_language or None,
        )
        result = self._post_filter_service.apply(ranked, preferences)

        self.statistics.record_streams_returned(len(result))
        if self.cache is not None:
            self.cache.set(cache_key, result)
        return result

    def _cache_key(self, content_id: str, preferences: StreamPreferences) -> str:
        params = preferences.cache_params()
        params["acct"] = account_digest(preferences.username, preferences.password)
        return build_stream_cache_key(
            content_id.strip(),
            params,
            version=self.settings.cache.key_version,
        )

    async def _resolve_metadata(self, request: StreamRequest) -> MediaMetadata | None:
        try:
            metadata = await self.metadata_provider.resolve(request.content_id, request.kind.value)
        except Exception as e:  # pylint: disable=broad-exception-caught
            # any provider failure is fatal for this request
            log_operation_error(logger, create_metadata_error(request.content_id, e))
            return None

        if metadata is None:
            log_operation_error(logger, create_metadata_error(request.content_id))
            return None
        return metadata

    def _title_variants(
        self,
        metadata: MediaMetadata,
        preferences: StreamPreferences,
    ) -> list[str]:
        dictionary = self.custom_titles
        if preferences.custom_titles:
            try:
                dictionary = dictionary.merged_with(parse_custom_titles(preferences.custom_titles))
            except DomainError as e:
                log_operation_error(
                    logger,
                    e,
                    additional_context=ErrorContext(operation="parse_custom_titles"),
                    level=logging.WARNING,
                )

        generator = TitleVariantGenerator([dictionary])
        return generator.generate(
            metadata.name,
            extra_sources=[ProviderAlternates.from_metadata(metadata)],
        )

    def _match(
        self,
        hits: list[SearchHit],
        query: MediaQuery,
        variants: list[str],
        strict_preference: bool,
    ) -> list[SearchHit]:
        """Keep hits whose title matches at least one variant's full query.

        Movies are always matched strictly; other kinds follow the user's
        strict-matching preference.
        """
        strict = query.content_kind is ContentKind.MOVIE or strict_preference
        match_queries = [query_for_variant(query, variant, with_year=True) for variant in variants]

        matched = [
            hit
            for hit in hits
            if self.matcher.matches_any(hit.candidate.display_title, match_queries, strict)
        ]
        unmatched = len(hits) - len(matched)
        if unmatched:
            self.statistics.record_unmatched(unmatched)
        logger.debug(
            "Matched %d of %d candidates (strict=%s)",
            len(matched),
            len(hits),
            strict,
        )
        return matched

    def get_statistics(self) -> dict[str, Any]:
        """Pipeline statistics summary."""
        summary = self.statistics.get_summary()
        if isinstance(self.cache, InMemoryResponseCache):
            summary["cached_responses"] = len(self.cache)
        return summary

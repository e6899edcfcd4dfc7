"""Service protocols for dependency inversion.

The pipeline depends on these Protocol interfaces only; concrete metadata
providers and the search HTTP client live outside the core.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from streamvault.shared.models.metadata import MediaMetadata
from streamvault.shared.models.search import SearchResponse, SearchSortOptions


class MetadataProviderProtocol(Protocol):
    """Protocol for metadata resolution providers.

    Implementations raise any exception on failure; the engine wraps it in
    MetadataResolutionError and aborts the run.

    Example:
        >>> provider: MetadataProviderProtocol = CinemetaProvider()
        >>> meta = await provider.resolve("tt0133093", "movie")
        >>> meta.name
        'The Matrix'
    """

    async def resolve(self, content_id: str, content_kind: str) -> MediaMetadata:
        """Resolve title information for a content id.

        Args:
            content_id: Bare content identifier (e.g. ``tt0133093``)
            content_kind: ``movie`` or ``series``

        Returns:
            MediaMetadata with canonical title and optional alternates
        """


class ContentSearchClientProtocol(Protocol):
    """Protocol for the upstream full-text content search client.

    Implementations raise AuthenticationError when credentials are
    rejected and any other exception for recoverable call failures.
    """

    async def search(
        self,
        query: str,
        *,
        max_results: int,
        sort: SearchSortOptions | None = None,
    ) -> SearchResponse:
        """Run one search call.

        Args:
            query: Free-text search query
            max_results: Upper bound on records returned
            sort: Optional upstream sort hints

        Returns:
            SearchResponse, possibly with zero records
        """


class AliasSourceProtocol(Protocol):
    """A source of alternate titles for a canonical title.

    Both the custom title dictionary and provider-supplied alternate names
    implement this interface.
    """

    def exact_aliases(self, title: str) -> Sequence[str]:
        """Aliases registered for exactly this title (case-insensitive)."""

    def partial_aliases(self, title: str) -> Sequence[str]:
        """Titles produced by substituting known names found inside ``title``."""

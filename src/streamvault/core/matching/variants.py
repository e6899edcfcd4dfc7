"""Title variant generation and search query building."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from streamvault.core.matching.models import ContentKind, MediaQuery
from streamvault.shared.protocols.services import AliasSourceProtocol

logger = logging.getLogger(__name__)


def build_search_query(
    kind: ContentKind,
    name: str,
    year: int | None = None,
    season: int | None = None,
    episode: int | None = None,
) -> str:
    """Build a free-text search query.

    Series queries carry ``SxxEyy`` (zero padded); any kind carries the
    year when given.

    Examples:
        >>> build_search_query(ContentKind.SERIES, "Breaking Bad", season=1, episode=5)
        'Breaking Bad S01E05'
        >>> build_search_query(ContentKind.SERIES, "Show", episode=3)
        'Show E03'
        >>> build_search_query(ContentKind.MOVIE, "The Matrix", year=1999)
        'The Matrix 1999'
    """
    query = name
    if kind is ContentKind.SERIES:
        if season:
            query += f" S{season:02d}"
        if episode:
            query += f"{'' if season else ' '}E{episode:02d}"
    if year:
        query += f" {year}"
    return query


def query_for_variant(query: MediaQuery, variant: str, *, with_year: bool) -> str:
    """Search/match query for one title variant of ``query``."""
    return build_search_query(
        query.content_kind,
        variant,
        year=query.year if with_year else None,
        season=query.season,
        episode=query.episode,
    )


class TitleVariantGenerator:
    """Expand a canonical title into the ordered set of titles to search for.

    The output order is:
    1. the canonical title (always present, exactly once)
    2. exact-title aliases of every source, in source order
    3. partial-substitution aliases of sources that had no exact entry

    Duplicates are removed by exact string equality; blank strings are
    dropped. Normalization only happens later, at matching time.
    """

    def __init__(self, sources: Sequence[AliasSourceProtocol] = ()) -> None:
        self.sources = list(sources)

    def generate(
        self,
        canonical_title: str,
        extra_sources: Sequence[AliasSourceProtocol] = (),
    ) -> list[str]:
        """Return the variant list for ``canonical_title``.

        Args:
            canonical_title: Variant 0
            extra_sources: Per-request sources appended after the
                configured ones (e.g. provider alternates)
        """
        variants = [canonical_title]
        seen = {canonical_title}

        def _add(title: str) -> None:
            if title and title.strip() and title not in seen:
                seen.add(title)
                variants.append(title)

        sources = [*self.sources, *extra_sources]
        without_exact: list[AliasSourceProtocol] = []
        for source in sources:
            exact = source.exact_aliases(canonical_title)
            if not exact:
                without_exact.append(source)
            for alias in exact:
                _add(alias)

        for source in without_exact:
            for alias in source.partial_aliases(canonical_title):
                _add(alias)

        logger.debug(
            "Generated %d title variants for '%s': %s",
            len(variants),
            canonical_title,
            variants,
        )
        return variants

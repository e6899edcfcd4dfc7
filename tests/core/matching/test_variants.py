"""Tests for title variant generation and search query building."""

from __future__ import annotations

from streamvault.core.aliases import CustomTitleDictionary, ProviderAlternates
from streamvault.core.matching.models import ContentKind, MediaQuery
from streamvault.core.matching.variants import (
    TitleVariantGenerator,
    build_search_query,
    query_for_variant,
)


class TestBuildSearchQuery:
    """Test search query formatting."""

    def test_movie_with_year(self) -> None:
        assert build_search_query(ContentKind.MOVIE, "The Matrix", year=1999) == "The Matrix 1999"

    def test_movie_ignores_episode_fields(self) -> None:
        assert build_search_query(ContentKind.MOVIE, "Up", season=1, episode=2) == "Up"

    def test_series_zero_pads(self) -> None:
        query = build_search_query(ContentKind.SERIES, "Breaking Bad", 2008, season=1, episode=5)
        assert query == "Breaking Bad S01E05 2008"

    def test_series_episode_only(self) -> None:
        assert build_search_query(ContentKind.SERIES, "Show", episode=3) == "Show E03"

    def test_query_for_variant(self) -> None:
        query = MediaQuery("Breaking Bad", 2008, 1, 1, ContentKind.SERIES)
        assert query_for_variant(query, "Breaking Bad", with_year=False) == "Breaking Bad S01E01"
        assert query_for_variant(query, "Breaking Bad", with_year=True) == (
            "Breaking Bad S01E01 2008"
        )


class TestTitleVariantGenerator:
    """Test variant ordering and deduplication."""

    def test_canonical_title_only(self) -> None:
        assert TitleVariantGenerator().generate("The Matrix") == ["The Matrix"]

    def test_order_exact_then_provider_then_partial(self) -> None:
        dictionary = CustomTitleDictionary(
            {
                "The Lion King": ["Der König der Löwen", "Le Roi Lion"],
                "Lion": ["Löwe"],
            }
        )
        alternates = ProviderAlternates("The Lion King", ["El Rey León", "Le Roi Lion"])

        variants = TitleVariantGenerator([dictionary]).generate(
            "The Lion King", extra_sources=[alternates]
        )

        assert variants == [
            "The Lion King",
            "Der König der Löwen",
            "Le Roi Lion",
            "El Rey León",
        ]

    def test_partial_aliases_used_without_exact_entry(self) -> None:
        dictionary = CustomTitleDictionary({"The Lion King": ["Der König der Löwen"]})
        variants = TitleVariantGenerator([dictionary]).generate("The Lion King 2")
        assert variants == ["The Lion King 2", "Der König der Löwen 2"]

    def test_canonical_title_never_dropped(self) -> None:
        dictionary = CustomTitleDictionary({"Up": ["Up", "Oben"]})
        variants = TitleVariantGenerator([dictionary]).generate("Up")
        assert variants == ["Up", "Oben"]
        assert variants.count("Up") == 1

    def test_deduplication_is_case_sensitive(self) -> None:
        dictionary = CustomTitleDictionary({"Amelie": ["AMELIE", "Amelie", "  "]})
        assert TitleVariantGenerator([dictionary]).generate("Amelie") == ["Amelie", "AMELIE"]

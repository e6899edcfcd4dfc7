"""Title matching for search candidates.

Upstream full-text search returns many files whose titles merely contain
the query words. The matcher decides whether a candidate's display title
really corresponds to a search query.

Two modes exist:

Loose mode
    Season/episode queries require the candidate to contain the same
    ``sXXeYY`` token. Other multi-word queries require at least 70% of the
    significant (3+ character) words to appear; single-word queries require
    every significant word to appear.

Strict mode (movies always, series optionally)
    Rejects supersets of the query. A candidate must start with exactly the
    query's words; extra leading words before a season/episode marker, or a
    parsed release title with extra words, are rejections. For example
    "How The States Got Their Shapes S01E01" never matches
    "The States S01E01".
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping

from streamvault.core.normalization import sanitize_title, title_words
from streamvault.core.parser.release_parser import parse_release
from streamvault.shared.constants import MatchingThresholds, TitlePatterns

logger = logging.getLogger(__name__)

_SE_SEARCH = re.compile(TitlePatterns.SEASON_EPISODE)
_SE_WORD = re.compile(r"^" + TitlePatterns.SEASON_EPISODE)
_RELEASE_YEAR = re.compile(TitlePatterns.RELEASE_YEAR)
_FOUR_DIGITS = re.compile(TitlePatterns.FOUR_DIGITS)
_RESOLUTION = re.compile(TitlePatterns.RESOLUTION)


def _find_season_episode(words: list[str]) -> tuple[int, int, int] | None:
    """Return (word index, season, episode) of the first SxxEyy word."""
    for index, word in enumerate(words):
        match = _SE_WORD.match(word)
        if match:
            return index, int(match.group(1)), int(match.group(2))
    return None


class TitleMatcher:
    """Decide whether a candidate title corresponds to a query.

    Args:
        transliteration: Optional character table applied before sanitizing
        loose_word_ratio: Share of significant words required in loose mode
    """

    def __init__(
        self,
        transliteration: Mapping[str, str] | None = None,
        loose_word_ratio: float = MatchingThresholds.LOOSE_WORD_RATIO,
    ) -> None:
        self.transliteration = transliteration
        self.loose_word_ratio = loose_word_ratio

    def _sanitize(self, text: str) -> str:
        return sanitize_title(text, self.transliteration)

    def matches(self, candidate_title: str, query: str, strict: bool) -> bool:
        """Return True if ``candidate_title`` matches ``query``."""
        sanitized_query = self._sanitize(query)
        sanitized_title = self._sanitize(candidate_title)
        if not sanitized_query:
            return False

        if strict:
            return self._matches_strict(candidate_title, sanitized_title, sanitized_query)
        return self._matches_loose(sanitized_title, sanitized_query)

    def matches_any(self, candidate_title: str, queries: Iterable[str], strict: bool) -> bool:
        """Return True if the candidate matches at least one query."""
        return any(self.matches(candidate_title, query, strict) for query in queries)

    def _matches_loose(self, title: str, query: str) -> bool:
        se_match = _SE_SEARCH.search(query)
        if se_match:
            return se_match.group(0) in title

        words = title_words(query)
        significant = [
            word for word in words if len(word) >= MatchingThresholds.MIN_SIGNIFICANT_WORD_LENGTH
        ]

        if len(words) > 1 and significant:
            matched = sum(1 for word in significant if word in title)
            return matched / len(significant) >= self.loose_word_ratio

        return all(word in title for word in significant)

    def _matches_strict(self, raw_title: str, title: str, query: str) -> bool:
        query_words = title_words(query)
        candidate_words = title_words(title)

        query_se = _find_season_episode(query_words)
        if query_se is not None:
            return self._matches_strict_episode(candidate_words, query_words, query_se)

        query_year: int | None = None
        core_words = query_words
        if len(query_words) >= 2 and _FOUR_DIGITS.match(query_words[-1]):
            query_year = int(query_words[-1])
            core_words = query_words[:-1]

        if candidate_words[: len(core_words)] != core_words:
            return False

        # title followed directly by the year or by release tokens
        rest = candidate_words[len(core_words) :]
        if query_year is not None:
            if rest and rest[0] == str(query_year):
                return True
        elif not rest or _RELEASE_YEAR.match(rest[0]) or _RESOLUTION.match(rest[0]):
            return True

        parsed = parse_release(raw_title)
        if not parsed.title:
            return False

        parsed_words = title_words(self._sanitize(parsed.title))
        if parsed_words == query_words:
            return True

        if query_year is not None and parsed.year is not None:
            year_token = str(query_year)
            without_year = [word for word in parsed_words if word != year_token]
            return without_year == core_words and parsed.year == query_year

        return False

    @staticmethod
    def _matches_strict_episode(
        candidate_words: list[str],
        query_words: list[str],
        query_se: tuple[int, int, int],
    ) -> bool:
        se_index, season, episode = query_se
        main_words = query_words[:se_index]

        candidate_se = _find_season_episode(candidate_words)
        if candidate_se is None:
            return False

        candidate_index, candidate_season, candidate_episode = candidate_se
        if (candidate_season, candidate_episode) != (season, episode):
            return False

        prefix = candidate_words[:candidate_index]
        if prefix == main_words:
            return True

        # a release year between title and marker is allowed
        return (
            len(prefix) == len(main_words) + 1
            and bool(_RELEASE_YEAR.match(prefix[-1]))
            and prefix[:-1] == main_words
        )


_default_matcher = TitleMatcher()


def matches_title(candidate_title: str, query: str, strict: bool) -> bool:
    """Match using the default matcher (no transliteration)."""
    return _default_matcher.matches(candidate_title, query, strict)

"""Title normalization module for StreamVault.

Release names and metadata titles are written with very different
punctuation ("The.Matrix.1999", "The Matrix (1999)", "Am_er-ic.a"). Before
any comparison both sides go through ``sanitize_title`` which produces a
lowercase, space separated token string.

The sanitization rules, applied in order:
1. ``&`` becomes ``and``
2. runs of ``.``, ``-``, ``_``, ``:`` and whitespace collapse to one space
3. brackets and parentheses become spaces
4. everything except ASCII word characters, whitespace and Latin-1
   accented letters (À-ÿ) is removed
5. lowercase and trim

Accented letters are preserved, so "cinéma" and "cinema" stay different
words. An optional transliteration table (e.g. German umlauts) can be
applied first.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from streamvault.shared.constants import Transliteration

logger = logging.getLogger(__name__)

# Compile patterns once at module level
_SEPARATOR_PATTERN = re.compile(r"[.\-_:\s]+")
_BRACKET_PATTERN = re.compile(r"[\[\](){}]")
_DISALLOWED_PATTERN = re.compile(r"[^\w\sÀ-ÿ]", re.ASCII)


def transliterate(title: str, table: Mapping[str, str]) -> str:
    """Replace every character found in ``table`` with its expansion."""
    if not table:
        return title
    return "".join(table.get(char, char) for char in title)


def sanitize_title(title: str, transliteration: Mapping[str, str] | None = None) -> str:
    """Normalize a display title into a comparison-safe token string.

    This function is total: any string (including empty) is accepted.

    Args:
        title: Arbitrary display string
        transliteration: Optional character expansion table applied first

    Returns:
        Normalized token string. Inner double spaces left by removed
        brackets are kept; use ``title_words`` to tokenize.

    Examples:
        >>> sanitize_title("Three Colors: Blue (1993)")
        'three colors blue  1993'
        >>> sanitize_title("WALL·E")
        'walle'
        >>> sanitize_title("Straße", Transliteration.GERMAN_UMLAUTS)
        'strasse'
    """
    if not title:
        return ""

    text = transliterate(title, transliteration) if transliteration else title
    text = text.replace("&", "and")
    text = _SEPARATOR_PATTERN.sub(" ", text)
    text = _BRACKET_PATTERN.sub(" ", text)
    text = _DISALLOWED_PATTERN.sub("", text)
    return text.lower().strip()


def title_words(sanitized: str) -> list[str]:
    """Split a sanitized title into words, ignoring repeated spaces."""
    return sanitized.split()


def umlaut_table(enabled: bool) -> Mapping[str, str] | None:
    """Return the German umlaut table when transliteration is enabled."""
    return Transliteration.GERMAN_UMLAUTS if enabled else None

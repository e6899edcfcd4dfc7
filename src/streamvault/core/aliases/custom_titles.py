"""Custom title dictionary.

Maps a canonical (usually English) title to localized or alternate titles
that releases are commonly published under, e.g. ``"The Lion King"`` ->
``["Der König der Löwen"]``. The bundled dictionary is loaded once at
process start; users may add entries per request.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from importlib import resources
from pathlib import Path
from typing import Any

from streamvault.shared.constants import MatchingThresholds
from streamvault.shared.errors import (
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
)

logger = logging.getLogger(__name__)

BUNDLED_DICTIONARY = "custom_titles.json"

_LINE_ALIAS_SEPARATOR = re.compile(r"[;|]")


class CustomTitleDictionary:
    """Read-only alias source backed by a title -> aliases mapping.

    Example:
        >>> titles = CustomTitleDictionary({"The Lion King": ["Der König der Löwen"]})
        >>> titles.exact_aliases("the lion king")
        ['Der König der Löwen']
        >>> titles.partial_aliases("The Lion King 2")
        ['Der König der Löwen 2']
    """

    def __init__(self, entries: Mapping[str, Sequence[str]] | None = None) -> None:
        self._entries: dict[str, tuple[str, ...]] = {
            key: tuple(values) for key, values in (entries or {}).items()
        }
        self._lower_index = {key.lower(): key for key in self._entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, title: object) -> bool:
        return isinstance(title, str) and title.lower() in self._lower_index

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def items(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        return iter(self._entries.items())

    def exact_aliases(self, title: str) -> list[str]:
        """Aliases registered for ``title``; exact key first, then case-insensitive."""
        if title in self._entries:
            return list(self._entries[title])
        key = self._lower_index.get(title.lower())
        return list(self._entries[key]) if key is not None else []

    def partial_aliases(self, title: str) -> list[str]:
        """Substitute known names found inside ``title``.

        Two directions are tried for every entry:
        - a dictionary key appears in the title: replace it by each alias
        - an alias appears in the title: replace it by its key

        Keys and aliases of 3 characters or fewer never take part, they
        match inside too many unrelated titles.
        """
        min_length = MatchingThresholds.MIN_PARTIAL_ALIAS_LENGTH
        lowered = title.lower()
        results: list[str] = []

        def _add(candidate: str) -> None:
            if candidate != title and candidate not in results:
                results.append(candidate)

        for key, aliases in self._entries.items():
            if len(key) >= min_length and key.lower() in lowered:
                for alias in aliases:
                    _add(_replace_once(title, key, alias))

            for alias in aliases:
                if len(alias) >= min_length and alias.lower() in lowered:
                    _add(_replace_once(title, alias, key))

        if results:
            logger.debug("Found %d partial alias titles for '%s'", len(results), title)
        return results

    def merged_with(self, overrides: Mapping[str, Sequence[str]]) -> CustomTitleDictionary:
        """Return a new dictionary where ``overrides`` win on key collision."""
        if not overrides:
            return self
        combined: dict[str, Sequence[str]] = dict(self._entries)
        for key, values in overrides.items():
            existing = self._lower_index.get(key.lower())
            if existing is not None and existing != key:
                combined.pop(existing, None)
            combined[key] = values
        return CustomTitleDictionary(combined)


def _replace_once(text: str, needle: str, replacement: str) -> str:
    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    return pattern.sub(lambda _match: replacement, text, count=1)


def _validate_entries(raw: Any, source: str) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        raise DomainError(
            ErrorCode.CUSTOM_TITLES_PARSE_FAILED,
            f"Custom titles must be a JSON object, got {type(raw).__name__}",
            ErrorContext(operation="load_custom_titles", additional_data={"source": source}),
        )

    entries: dict[str, list[str]] = {}
    for key, values in raw.items():
        if isinstance(values, str):
            values = [values]
        if not isinstance(values, list):
            logger.warning("Skipping custom title '%s' from %s: aliases must be a list", key, source)
            continue
        aliases = [str(v).strip() for v in values if str(v).strip()]
        if str(key).strip() and aliases:
            entries[str(key).strip()] = aliases
    return entries


def load_custom_titles(path: str | Path | None = None) -> CustomTitleDictionary:
    """Load a custom title dictionary from JSON.

    Args:
        path: JSON file; the bundled dictionary is used when None

    Returns:
        CustomTitleDictionary

    Raises:
        InfrastructureError: If the file cannot be read
        DomainError: If the file is not a valid title mapping
    """
    source = str(path) if path else f"streamvault/data/{BUNDLED_DICTIONARY}"
    try:
        if path is None:
            text = resources.files("streamvault").joinpath("data", BUNDLED_DICTIONARY).read_text(encoding="utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InfrastructureError(
            ErrorCode.FILE_READ_ERROR,
            f"Failed to read custom titles: {source}",
            ErrorContext(operation="load_custom_titles", additional_data={"source": source}),
            original_error=e,
        ) from e

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise DomainError(
            ErrorCode.CUSTOM_TITLES_PARSE_FAILED,
            f"Invalid JSON in custom titles: {source}",
            ErrorContext(operation="load_custom_titles", additional_data={"source": source}),
            original_error=e,
        ) from e

    dictionary = CustomTitleDictionary(_validate_entries(raw, source))
    logger.info("Loaded %d custom titles from %s", len(dictionary), source)
    return dictionary


def parse_custom_titles(text: str) -> dict[str, list[str]]:
    """Parse user-supplied custom titles.

    Two formats are accepted:

    - a JSON object: ``{"The Lion King": ["Der König der Löwen"]}``
    - one entry per line: ``The Lion King = Der König der Löwen; Le Roi Lion``
      (``:`` may be used instead of ``=`` when the title has no colon,
      aliases are separated by ``;`` or ``|``, ``#`` starts a comment)

    Raises:
        DomainError: If JSON input is malformed
    """
    text = (text or "").strip()
    if not text:
        return {}

    if text.startswith("{"):
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise DomainError(
                ErrorCode.CUSTOM_TITLES_PARSE_FAILED,
                "Custom titles JSON is malformed",
                ErrorContext(operation="parse_custom_titles"),
                original_error=e,
            ) from e
        return _validate_entries(raw, "preferences")

    entries: dict[str, list[str]] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        separator = "=" if "=" in line else ":"
        key, _, rest = line.partition(separator)
        aliases = [alias.strip() for alias in _LINE_ALIAS_SEPARATOR.split(rest) if alias.strip()]
        if not key.strip() or not aliases:
            logger.warning("Ignoring malformed custom title line %d", line_number)
            continue
        entries.setdefault(key.strip(), []).extend(aliases)
    return entries

"""Alternate names supplied by metadata providers."""

from __future__ import annotations

from collections.abc import Iterable

from streamvault.shared.models.metadata import MediaMetadata


class ProviderAlternates:
    """Alias source wrapping one resolved title's provider alternates.

    Provider alternates belong to a single canonical title, so exact lookup
    returns them only for that title and partial lookup is empty.
    """

    def __init__(self, canonical_title: str, names: Iterable[str]) -> None:
        self.canonical_title = canonical_title
        self.names = [name for name in names if name and name.strip()]

    @classmethod
    def from_metadata(cls, metadata: MediaMetadata) -> ProviderAlternates:
        names = list(metadata.alternative_names)
        if metadata.original_name:
            names.append(metadata.original_name)
        return cls(metadata.name, names)

    def exact_aliases(self, title: str) -> list[str]:
        if title.lower() != self.canonical_title.lower():
            return []
        return list(self.names)

    def partial_aliases(self, title: str) -> list[str]:
        return []

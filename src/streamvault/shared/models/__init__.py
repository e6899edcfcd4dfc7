"""Shared data models for external collaborator boundaries."""

from .metadata import MediaMetadata
from .search import DownloadLocation, RawCandidate, SearchResponse, SearchSortOptions

__all__ = [
    "DownloadLocation",
    "MediaMetadata",
    "RawCandidate",
    "SearchResponse",
    "SearchSortOptions",
]

"""Protocol interfaces for external collaborators."""

from .services import (
    AliasSourceProtocol,
    ContentSearchClientProtocol,
    MetadataProviderProtocol,
)

__all__ = [
    "AliasSourceProtocol",
    "ContentSearchClientProtocol",
    "MetadataProviderProtocol",
]

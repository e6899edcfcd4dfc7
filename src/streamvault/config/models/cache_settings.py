"""Cache configuration model.

This module contains the response cache configuration: whether caching is
enabled, the entry time-to-live and the key version tag.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from streamvault.shared.constants import Cache


class CacheSettings(BaseModel):
    """Response cache configuration."""

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl: int = Field(
        default=Cache.TTL,
        gt=0,
        description="Cache time-to-live in seconds",
    )
    key_version: str = Field(default=Cache.KEY_VERSION, min_length=1)


__all__ = [
    "CacheSettings",
]

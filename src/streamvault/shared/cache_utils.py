"""Cache key utilities for the stream response cache.

Two requests must share a cache entry only when every setting that can
change the output is identical. The key is therefore built from the content
id, a version tag and all filter/sort settings, plus a short digest of the
account credentials because cached playback URLs embed them.

Example:
    >>> key = build_stream_cache_key(
    ...     "tt0133093",
    ...     {"strict": True, "lang": "eng", "sort": "quality_first"},
    ... )
    >>> key
    'tt0133093:v2:lang=eng:sort=quality_first:strict=true'
"""

from __future__ import annotations

import hashlib
from typing import Any

from streamvault.shared.constants import Cache


def canonical_params(params: dict[str, Any] | None) -> dict[str, str]:
    """Normalize parameters for consistent cache key generation.

    Normalization rules:
        1. Remove None values (empty strings are kept: "no preference"
           is a distinct setting)
        2. Lowercase keys
        3. Render booleans as ``true``/``false`` and sequences as
           sorted comma lists

    Example:
        >>> canonical_params({"Lang": "", "q": ["720p", "4k"], "strict": False})
        {'lang': '', 'q': '4k,720p', 'strict': 'false'}
    """
    if not params:
        return {}

    normalized: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            rendered = "true" if value else "false"
        elif isinstance(value, (list, tuple, set, frozenset)):
            rendered = ",".join(sorted(str(v).lower() for v in value))
        else:
            rendered = str(value)
        normalized[key.lower()] = rendered
    return normalized


def account_digest(username: str, password: str = "") -> str:
    """Short SHA-256 digest of the credentials, exposing neither.

    The same username with another password yields another digest.
    """
    digest = hashlib.sha256(f"{username}\0{password}".encode("utf-8")).hexdigest()
    return digest[: Cache.ACCOUNT_DIGEST_LENGTH]


def build_stream_cache_key(
    content_id: str,
    params: dict[str, Any] | None = None,
    version: str = Cache.KEY_VERSION,
) -> str:
    """Build a deterministic cache key.

    Format: ``{content_id}:{version}:{k1=v1}:{k2=v2}...`` with parameters
    sorted by key so argument order never matters.

    Raises:
        ValueError: If content_id is empty
    """
    if not content_id:
        raise ValueError("content_id cannot be empty")

    parts = [content_id, version]
    normalized = canonical_params(params)
    parts.extend(f"{k}={v}" for k, v in sorted(normalized.items()))
    return ":".join(parts)

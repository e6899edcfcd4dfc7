"""
Cache Configuration Constants

Response cache TTL and key layout used by the stream pipeline.
"""

from .system import BASE_DAY, BASE_MINUTE


class Cache:
    """Response cache constants."""

    TTL = 30 * BASE_MINUTE  # 30 minutes
    KEY_VERSION = "v2"
    ACCOUNT_DIGEST_LENGTH = 12  # hex chars of sha256(username)

    # Client-side max age grows with the result count, a full week at 10 streams
    CLIENT_MAX_AGE = 7 * BASE_DAY
    CLIENT_MAX_AGE_FULL_COUNT = 10

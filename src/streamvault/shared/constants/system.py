"""
System Configuration Constants

This module contains base units and application-level metadata.
"""

# =============================================================================
# BASE CONSTANTS (Foundation values used by other constants)
# =============================================================================

BASE_FILE_SIZE = 1024  # 1KB in bytes
MEBIBYTE = BASE_FILE_SIZE**2
GIBIBYTE = BASE_FILE_SIZE**3

BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND
BASE_HOUR = 60 * BASE_MINUTE
BASE_DAY = 24 * BASE_HOUR


class Application:
    """Application metadata constants."""

    NAME = "StreamVault"
    VERSION = "0.3.0"
    PRODUCT_LABEL = "StreamVault"


class Logging:
    """Logging configuration constants."""

    ROOT_LOGGER = "streamvault"
    DEFAULT_LEVEL = "INFO"

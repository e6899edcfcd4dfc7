"""StreamVault Shared Module.

This package contains shared utilities, constants, models and error handling
used across StreamVault.
"""

__all__ = ["cache_utils", "constants", "errors", "logging", "models", "protocols"]

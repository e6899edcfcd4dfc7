"""StreamVault Error Handling Module

This module defines the error handling system for StreamVault, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Pipeline Taxonomy: metadata, search-call and authentication failures are
  distinct types so the engine can decide fatal vs. recoverable
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict (credentials must never reach logs)
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("user_id", "password", "username")


class ErrorCode(str, Enum):
    """Error codes for StreamVault.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Metadata resolution
    METADATA_RESOLUTION_FAILED = "METADATA_RESOLUTION_FAILED"

    # Upstream content search
    SEARCH_CALL_FAILED = "SEARCH_CALL_FAILED"
    SEARCH_TIMEOUT = "SEARCH_TIMEOUT"
    SEARCH_AUTHENTICATION_FAILED = "SEARCH_AUTHENTICATION_FAILED"
    MISSING_CREDENTIALS = "MISSING_CREDENTIALS"

    # Validation
    INVALID_CONTENT_ID = "INVALID_CONTENT_ID"
    CUSTOM_TITLES_PARSE_FAILED = "CUSTOM_TITLES_PARSE_FAILED"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"
    FILE_READ_ERROR = "FILE_READ_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        content_id: Optional content identifier being resolved
        operation: Optional operation name that caused the error
        query: Optional search query associated with the error
        user_id: Optional account identifier (masked in logs)
        additional_data: Optional dict with primitive values only
    """

    content_id: str | None = None
    operation: str | None = None
    query: str | None = None
    user_id: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with credential masking.

        Args:
            mask_keys: Fields to exclude from output. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with masked sensitive fields and guaranteed additional_data key.

        Example:
            >>> context = ErrorContext(user_id="alice", operation="search")
            >>> context.safe_dict()
            {'operation': 'search', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        for field_name in ("content_id", "operation", "query", "user_id"):
            value = getattr(self, field_name)
            if value is not None and field_name not in mask_keys:
                data[field_name] = value

        if self.additional_data is not None:
            data["additional_data"] = {
                k: v for k, v in self.additional_data.items() if k not in mask_keys
            }
        else:
            data["additional_data"] = {}

        return data


class StreamVaultError(Exception):
    """Base exception class for all StreamVault errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize StreamVaultError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging with credential masking."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(StreamVaultError):
    """Domain-specific errors.

    Raised when business rules or domain constraints are violated,
    e.g. a malformed content id or an unparseable custom title dictionary.
    """


class InfrastructureError(StreamVaultError):
    """Infrastructure-related errors.

    Raised when interacting with external systems: the metadata
    providers, the upstream content search service, the file system.
    """


class ApplicationError(StreamVaultError):
    """Application-level errors (configuration, bootstrap)."""


class MetadataResolutionError(InfrastructureError):
    """Metadata could not be resolved for a content id.

    Fatal for a pipeline run: no candidates can be searched without a title.
    """


class SearchCallError(InfrastructureError):
    """A single upstream search call failed.

    Recoverable: the orchestrator logs it and continues with other variants.
    """


class AuthenticationError(SearchCallError):
    """The upstream search service rejected the account credentials.

    Short-circuits the whole pipeline and maps to the sentinel stream.
    """


def create_search_call_error(
    query: str,
    original_error: Exception | None = None,
    message: str | None = None,
) -> SearchCallError:
    """Create a recoverable search call error with context.

    Timeouts get their own code; every other failure is ``SEARCH_CALL_FAILED``.
    """
    timed_out = isinstance(original_error, (TimeoutError, asyncio.TimeoutError))
    return SearchCallError(
        ErrorCode.SEARCH_TIMEOUT if timed_out else ErrorCode.SEARCH_CALL_FAILED,
        message or f"Search failed for query: {query}",
        ErrorContext(operation="search", query=query),
        original_error,
    )


def create_metadata_error(
    content_id: str,
    original_error: Exception | None = None,
) -> MetadataResolutionError:
    """Create a fatal metadata resolution error with context."""
    return MetadataResolutionError(
        ErrorCode.METADATA_RESOLUTION_FAILED,
        f"Failed to resolve metadata for {content_id}",
        ErrorContext(operation="resolve_metadata", content_id=content_id),
        original_error,
    )


"""Centralized exception hierarchy for stickies-sync.

All custom exceptions inherit from StickiesSyncError, so callers can catch
every sync-related failure with a single except clause.

Exception Hierarchy:
    StickiesSyncError (base)
     ConfigurationError - Configuration loading/validation errors
     InvalidStickiesIdError - Identifier is not 24 hexadecimal characters
     StickiesApiError - Remote stickies API errors
        NetworkFailure - Transport failures and timeouts
        ServerError - Non-2xx responses
        StickiesNotFoundError - 404 when loading a document
        MalformedResponseError - Response body is not the expected JSON

Usage Examples:
    try:
        notes = await api.fetch(stickies_id)
    except StickiesNotFoundError:
        notes = [blank_note()]
    except StickiesApiError as e:
        logger.error("stickies_load_failed", **e.to_dict())
"""

from typing import Any


class StickiesSyncError(Exception):
    """Base exception for all stickies-sync errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (e.g., URL, status code)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


# Configuration Errors


class ConfigurationError(StickiesSyncError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is malformed
    - Configuration values fail validation
    """


class InvalidStickiesIdError(StickiesSyncError):
    """A stickies identifier is not a 24-character hexadecimal string."""


# API Errors


class StickiesApiError(StickiesSyncError):
    """Base class for errors talking to the stickies API."""


class NetworkFailure(StickiesApiError):
    """The request never produced a response.

    Raised when:
    - The server cannot be reached
    - The request times out
    - The connection drops mid-request
    """


class ServerError(StickiesApiError):
    """The server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        context = {"status_code": status_code, **(context or {})}
        super().__init__(
            message, suggestion=suggestion, error_code=error_code, context=context
        )


class StickiesNotFoundError(StickiesApiError):
    """No document exists for the requested identifier.

    Loading code treats this as an empty document rather than a failure.
    """


class MalformedResponseError(StickiesApiError):
    """A 2xx response whose body could not be understood."""

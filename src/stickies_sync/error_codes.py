"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    API - Remote stickies API errors
    DOC - Document and identifier errors
    CFG - Configuration errors

Usage:
    from stickies_sync.error_codes import ErrorCode

    raise ServerError(
        "Update failed",
        status_code=500,
        error_code=ErrorCode.API_UPDATE_FAILED.value,
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    # =========================================================================
    # API Errors (API-xxx-xxx)
    # =========================================================================
    API_CONNECTION_FAILED = "API-CONN-001"
    """Server unreachable or connection dropped."""

    API_TIMEOUT = "API-TIMEOUT-001"
    """Request exceeded the configured timeout."""

    API_LOAD_FAILED = "API-LOAD-001"
    """GET returned a non-2xx status other than 404."""

    API_CREATE_FAILED = "API-CREATE-001"
    """POST returned a non-2xx status."""

    API_UPDATE_FAILED = "API-UPDATE-001"
    """PUT returned a non-2xx status."""

    API_DELETE_FAILED = "API-DELETE-001"
    """DELETE returned a non-2xx status."""

    API_NOT_FOUND = "API-NOTFOUND-001"
    """No document exists for the identifier."""

    API_MALFORMED_RESPONSE = "API-RESPONSE-001"
    """Response body was not the expected JSON shape."""

    # =========================================================================
    # Document Errors (DOC-xxx-xxx)
    # =========================================================================
    DOC_INVALID_ID = "DOC-ID-001"
    """Identifier is not 24 hexadecimal characters."""

    # =========================================================================
    # Configuration Errors (CFG-xxx-xxx)
    # =========================================================================
    CFG_INVALID = "CFG-INVALID-001"
    """Configuration failed validation."""

    CFG_PARSE_FAILED = "CFG-PARSE-001"
    """Configuration file could not be parsed."""


def get_error_domain(code: ErrorCode) -> str:
    """Extract the domain prefix (e.g., "API", "CFG") from an error code."""
    return code.value.split("-")[0]


def is_retriable_error_code(code: ErrorCode) -> bool:
    """Check if an error code represents a failure worth retrying on next edit."""
    retriable_codes = {
        ErrorCode.API_CONNECTION_FAILED,
        ErrorCode.API_TIMEOUT,
        ErrorCode.API_CREATE_FAILED,
        ErrorCode.API_UPDATE_FAILED,
        ErrorCode.API_DELETE_FAILED,
    }
    return code in retriable_codes

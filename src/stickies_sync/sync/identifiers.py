"""Stickies identifier validation and URL path handling."""

import re

from stickies_sync.error_codes import ErrorCode
from stickies_sync.exceptions import InvalidStickiesIdError

STICKIES_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_stickies_id(value: str | None) -> bool:
    """Check for a 24-character hexadecimal identifier."""
    return bool(value) and STICKIES_ID_PATTERN.match(value) is not None


def validate_stickies_id(value: str) -> str:
    """Return ``value`` unchanged or raise InvalidStickiesIdError."""
    if not is_valid_stickies_id(value):
        msg = f"Invalid stickies id: {value!r}"
        raise InvalidStickiesIdError(
            msg,
            suggestion="A stickies id is 24 hexadecimal characters.",
            error_code=ErrorCode.DOC_INVALID_ID.value,
        )
    return value


def id_from_path(path: str) -> str | None:
    """Extract the identifier from a ``/{id}`` page path.

    Anything that is not exactly one valid identifier after the leading
    slash yields None.
    """
    candidate = path[1:] if path.startswith("/") else path
    return candidate if is_valid_stickies_id(candidate) else None


def path_for(stickies_id: str | None) -> str:
    """Page path reflecting ``stickies_id`` (``/`` when there is none)."""
    return f"/{stickies_id}" if stickies_id else "/"

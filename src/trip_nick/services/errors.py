"""Domain errors raised by Trip Nick services.

Every error carries a stable machine-usable ``kind`` and the HTTP status the
API layer answers with. Extra keyword arguments are echoed in the response
body next to the message.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

# Largest value an INTEGER primary key column holds.
MAX_ID = 2**31 - 1

_DIGITS = re.compile(r"[0-9]+")


class TripNickError(Exception):
    """Base class for errors surfaced to API clients."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body describing this error."""
        return {"success": False, "error": self.kind, "detail": self.message, **self.extra}


class InvalidArgumentError(TripNickError):
    """Malformed identifiers, out-of-range values or bad request bodies."""

    kind = "invalid_argument"
    status_code = 400


class UnknownPostTypeError(InvalidArgumentError):
    """A post payload carried a ``type`` tag outside the known variants."""

    kind = "unknown_post_type"


class NotFoundError(TripNickError):
    """A referenced post, spot, list, image, user or association is missing."""

    kind = "not_found"
    status_code = 404


class ConflictError(TripNickError):
    """The requested change collides with an existing row."""

    kind = "conflict"
    status_code = 409


class InternalError(TripNickError):
    """Unexpected database failure or a write that affected no rows."""

    kind = "internal_error"
    status_code = 500


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Flatten Pydantic or FastAPI validation errors into one readable sentence."""
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def parse_positive_id(raw: object, label: str) -> int:
    """Parse ``raw`` as a positive integer identifier.

    Args:
        raw: Value taken from a path, query string or JSON body.
        label: Entity name used in the error message, e.g. ``"Post"``.

    Returns:
        The identifier as an ``int``.

    Raises:
        InvalidArgumentError: If the value is not a positive integer or does
            not fit an identifier column.
    """
    if isinstance(raw, bool):
        raise InvalidArgumentError(f"{label} ID must be a positive integer")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _DIGITS.fullmatch(raw.strip()):
        digits = raw.strip().lstrip("0") or "0"
        # Long inputs are out of range anyway; skip int() on them.
        value = int(digits) if len(digits) <= len(str(MAX_ID)) else MAX_ID + 1
    else:
        raise InvalidArgumentError(f"{label} ID must be a positive integer")

    if value <= 0:
        raise InvalidArgumentError(f"{label} ID must be a positive integer")
    if value > MAX_ID:
        raise InvalidArgumentError(f"{label} ID must be at most {MAX_ID}")
    return value

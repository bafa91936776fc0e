"""Exceptions raised by the service layer and mapped to HTTP envelopes."""
from __future__ import annotations

import re

from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    """Base class for errors the API reports to clients."""

    status_code = 500

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class RecordValidationError(ServiceError):
    """Input is missing, malformed or conflicts with stored records."""

    status_code = 400


class InvalidIdError(ServiceError):
    """A path id does not have the shape of a record id."""

    status_code = 400

    def __init__(self, message: str = "Invalid id") -> None:
        super().__init__(message)


class RecordNotFoundError(ServiceError):
    """No non-deleted record matches the requested id."""

    status_code = 404


class CodeGenerationError(ServiceError):
    """A unique code could not be produced."""

    status_code = 500


_UNIQUE_VIOLATION_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"),  # SQLite
    re.compile(r"Key \((\w+)\)=\("),  # PostgreSQL
)


def unique_violation_field(exc: IntegrityError) -> str | None:
    """Return the column named by a unique-constraint failure, if any."""
    text = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _UNIQUE_VIOLATION_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


__all__ = [
    "CodeGenerationError",
    "InvalidIdError",
    "RecordNotFoundError",
    "RecordValidationError",
    "ServiceError",
    "unique_violation_field",
]

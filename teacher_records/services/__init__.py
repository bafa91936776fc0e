"""Convenient re-exports for the backend service layer."""
from __future__ import annotations

from .codes import (
    RandomDigitCode,
    SequentialCode,
    generate_unique_code,
    insert_with_unique_code,
)
from .errors import (
    CodeGenerationError,
    InvalidIdError,
    RecordNotFoundError,
    RecordValidationError,
    ServiceError,
)
from .repository import Page, PageRequest, SoftDeleteRepository, parse_id

__all__ = [
    "CodeGenerationError",
    "InvalidIdError",
    "Page",
    "PageRequest",
    "RandomDigitCode",
    "RecordNotFoundError",
    "RecordValidationError",
    "SequentialCode",
    "ServiceError",
    "SoftDeleteRepository",
    "generate_unique_code",
    "insert_with_unique_code",
    "parse_id",
]

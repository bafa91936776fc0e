"""Human-readable code generation for teachers and positions.

Two policies are available. :class:`RandomDigitCode` draws a random numeric
string and is used for teachers. :class:`SequentialCode` derives ``POS001``
style codes from the number of live records and is used for positions that
arrive without a code. Both are retried by :func:`generate_unique_code` until
the candidate is free. The unique constraint on the ``code`` column covers
soft-deleted rows as well, so their codes stay reserved; it also rejects any
collision that slips through between the check and the insert.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, Collection, Protocol, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .errors import CodeGenerationError, unique_violation_field
from .repository import SoftDeleteRepository

LOGGER = logging.getLogger(__name__)

CODE_WRITE_ATTEMPTS = 3

RecordT = TypeVar("RecordT")


class CodePolicy(Protocol):
    def candidate(self, repository: SoftDeleteRepository, attempt: int) -> str:
        ...


@dataclass(frozen=True, slots=True)
class RandomDigitCode:
    digits: int = 10

    def candidate(self, repository: SoftDeleteRepository, attempt: int) -> str:
        low = 10 ** (self.digits - 1)
        return str(low + secrets.randbelow(9 * low))


@dataclass(frozen=True, slots=True)
class SequentialCode:
    prefix: str = "POS"
    width: int = 3

    def candidate(self, repository: SoftDeleteRepository, attempt: int) -> str:
        number = repository.count() + 1 + attempt
        return f"{self.prefix}{number:0{self.width}d}"


def generate_unique_code(
    repository: SoftDeleteRepository,
    policy: CodePolicy,
    rejected: Collection[str] = (),
) -> str:
    """Return a code that no stored record of ``repository.model`` holds.

    ``rejected`` lists codes the database already refused for this write.
    """
    attempt = 0
    try:
        while True:
            code = policy.candidate(repository, attempt)
            if code not in rejected and not repository.stored_exists(repository.model.code == code):
                return code
            LOGGER.debug("Code %s already taken for %s", code, repository.model.__name__)
            attempt += 1
    except SQLAlchemyError as exc:
        LOGGER.exception("Code generation failed for %s", repository.model.__name__)
        raise CodeGenerationError(
            f"Unable to generate a {repository.model.__name__.lower()} code"
        ) from exc


def insert_with_unique_code(
    repository: SoftDeleteRepository,
    policy: CodePolicy,
    build: Callable[[str], RecordT],
    attempts: int = CODE_WRITE_ATTEMPTS,
) -> RecordT:
    """Generate a code, build the record with it and insert it in a savepoint.

    A unique-constraint failure on ``code`` rolls back only the savepoint and
    the write is retried with a fresh code.
    """
    name = repository.model.__name__
    rejected: set[str] = set()
    for _ in range(attempts):
        code = generate_unique_code(repository, policy, rejected)
        record = build(code)
        try:
            with repository.session.begin_nested():
                repository.add(record)
        except IntegrityError as exc:
            if unique_violation_field(exc) != "code":
                raise
            LOGGER.warning("Code %s rejected by storage for %s, retrying", code, name)
            rejected.add(code)
            continue
        return record
    raise CodeGenerationError(f"Unable to generate a {name.lower()} code")


__all__ = [
    "CODE_WRITE_ATTEMPTS",
    "CodePolicy",
    "RandomDigitCode",
    "SequentialCode",
    "generate_unique_code",
    "insert_with_unique_code",
]

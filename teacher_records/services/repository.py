"""Data access scoped to records that have not been soft deleted."""
from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.base import ExecutableOption

from teacher_records.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from teacher_records.db.models import Teacher, TeacherPosition, User

from .errors import InvalidIdError

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", User, Teacher, TeacherPosition)


@dataclass(slots=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def build(cls, page: Any = None, limit: Any = None) -> "PageRequest":
        """Normalise raw query values: page >= 1, limit clamped to [1, MAX_PAGE_SIZE]."""
        return cls(
            page=max(1, _as_int(page) or 1),
            limit=min(MAX_PAGE_SIZE, max(1, _as_int(limit) or DEFAULT_PAGE_SIZE)),
        )


@dataclass(slots=True)
class Page:
    items: Sequence[Any]
    total: int
    request: PageRequest

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.request.limit)

    def metadata(self) -> dict[str, int]:
        return {
            "currentPage": self.request.page,
            "totalPages": self.total_pages,
            "totalItems": self.total,
            "itemsPerPage": self.request.limit,
        }


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_id(value: str) -> str:
    """Return ``value`` in canonical form or raise :class:`InvalidIdError`."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError as exc:
        raise InvalidIdError() from exc


class SoftDeleteRepository(Generic[ModelT]):
    """Query helper whose every read carries ``is_deleted = false``.

    :meth:`get_stored` and :meth:`stored_exists` are the only reads that see
    deleted rows too.
    """

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def select(self, *criteria: ColumnElement[bool]) -> Select[tuple[ModelT]]:
        return select(self.model).where(self.model.is_deleted.is_(False), *criteria)

    def get(self, record_id: str) -> ModelT | None:
        return self.find_one(self.model.id == record_id)

    def get_stored(self, record_id: str) -> ModelT | None:
        return self.session.get(self.model, record_id)

    def stored_exists(self, *criteria: ColumnElement[bool]) -> bool:
        """Like :meth:`exists` but also matches soft-deleted rows."""
        stmt = select(self.model.id).where(*criteria).limit(1)
        return self.session.scalar(stmt) is not None

    def find_one(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        return self.session.scalars(self.select(*criteria).limit(1)).first()

    def find_many(self, ids: Iterable[str]) -> dict[str, ModelT]:
        wanted = set(ids)
        if not wanted:
            return {}
        rows = self.session.scalars(self.select(self.model.id.in_(wanted))).all()
        return {row.id: row for row in rows}

    def exists(self, *criteria: ColumnElement[bool]) -> bool:
        return self.find_one(*criteria) is not None

    def count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(self.model.is_deleted.is_(False), *criteria)
        )
        return self.session.scalar(stmt) or 0

    def list_all(self, *criteria: ColumnElement[bool]) -> Sequence[ModelT]:
        stmt = self.select(*criteria).order_by(self.model.created_at.desc(), self.model.id.desc())
        return self.session.scalars(stmt).all()

    def page(
        self,
        request: PageRequest,
        *criteria: ColumnElement[bool],
        options: Sequence[ExecutableOption] = (),
    ) -> Page:
        total = self.count(*criteria)
        if request.offset >= total:
            return Page(items=[], total=total, request=request)
        stmt = (
            self.select(*criteria)
            .options(*options)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(request.offset)
            .limit(request.limit)
        )
        return Page(items=self.session.scalars(stmt).all(), total=total, request=request)

    def add(self, record: ModelT) -> ModelT:
        self.session.add(record)
        self.session.flush()
        return record

    def soft_delete(self, record: ModelT) -> ModelT:
        record.is_deleted = True
        self.session.flush()
        LOGGER.info("Soft deleted %s %s", self.model.__name__, record.id)
        return record


__all__ = ["Page", "PageRequest", "SoftDeleteRepository", "parse_id"]

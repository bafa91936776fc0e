"""Pydantic schemas shared across the teacher records API."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .db.models import UserRole

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelReadModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is not None and not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


def _check_date_range(end_date: Optional[date], info: ValidationInfo) -> Optional[date]:
    start = info.data.get("start_date")
    if end_date is not None and isinstance(start, date) and end_date < start:
        raise ValueError("endDate must be on or after startDate")
    return end_date


def _ensure_any_field(model: BaseModel) -> None:
    if not model.model_fields_set:
        raise ValueError("At least one field must be provided for update")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: str
    phone_number: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    identity: str = Field(..., min_length=1)
    dob: date
    role: UserRole

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return _check_email(value)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone_number: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    identity: Optional[str] = Field(default=None, min_length=1)
    dob: Optional[date] = None
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        return _check_email(value)

    def ensure_any_field(self) -> None:
        _ensure_any_field(self)


class UserSummary(CamelReadModel):
    id: str
    name: str
    email: str
    phone_number: str
    address: str
    identity: str
    dob: date


class UserRead(UserSummary):
    role: UserRole
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Teacher positions
# ---------------------------------------------------------------------------


class PositionCreate(CamelModel):
    code: Optional[str] = Field(default=None, min_length=1, max_length=32)
    name: str = Field(..., min_length=1)
    description: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("description", "des")
    )
    is_active: bool = True


class PositionUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("description", "des")
    )
    is_active: Optional[bool] = None

    def ensure_any_field(self) -> None:
        _ensure_any_field(self)


class PositionSummary(CamelReadModel):
    id: str
    name: str
    code: str


class PositionRead(PositionSummary):
    description: Optional[str] = None
    is_active: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Teachers
# ---------------------------------------------------------------------------


class DegreeData(CamelReadModel):
    type: str = Field(..., min_length=1)
    school: str = Field(..., min_length=1)
    major: str = Field(..., min_length=1)
    year: int
    is_graduated: bool = False


class TeacherProfile(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    teacher_positions_id: List[str] = Field(default_factory=list)
    degrees: List[DegreeData] = Field(default_factory=list)

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, value: Optional[date], info: ValidationInfo) -> Optional[date]:
        return _check_date_range(value, info)


class TeacherCreate(TeacherProfile):
    user_id: Optional[str] = None


class TeacherWithUserCreate(CamelModel):
    """Payload for creating the backing user and the teacher in one step."""

    user: UserCreate
    teacher: TeacherProfile


class TeacherUpdate(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    teacher_positions_id: Optional[List[str]] = None
    degrees: Optional[List[DegreeData]] = None
    is_active: Optional[bool] = None

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, value: Optional[date], info: ValidationInfo) -> Optional[date]:
        return _check_date_range(value, info)

    def ensure_any_field(self) -> None:
        _ensure_any_field(self)


class TeacherRead(CamelReadModel):
    id: str
    code: str
    user_id: str
    user: Optional[UserSummary] = None
    teacher_positions_id: List[str] = Field(default_factory=list)
    teacher_positions: List[Optional[PositionSummary]] = Field(default_factory=list)
    degrees: List[DegreeData] = Field(default_factory=list)
    is_active: bool
    is_deleted: bool
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


def envelope(
    data: Any = None,
    *,
    message: str | None = None,
    pagination: dict[str, int] | None = None,
    errors: list[str] | None = None,
    success: bool = True,
) -> dict[str, Any]:
    """Build the response body, leaving out keys that were not supplied."""

    body: dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = _dump(data)
    if errors:
        body["errors"] = list(errors)
    if pagination is not None:
        body["pagination"] = Pagination.model_validate(pagination).model_dump(by_alias=True)
    return body


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, mode="json")
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


__all__ = [
    "DegreeData",
    "EMAIL_PATTERN",
    "Pagination",
    "PositionCreate",
    "PositionRead",
    "PositionSummary",
    "PositionUpdate",
    "TeacherCreate",
    "TeacherProfile",
    "TeacherRead",
    "TeacherUpdate",
    "TeacherWithUserCreate",
    "UserCreate",
    "UserRead",
    "UserSummary",
    "UserUpdate",
    "envelope",
]

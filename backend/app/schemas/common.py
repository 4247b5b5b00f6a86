"""Shared schema definitions."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, Iterable, List, Mapping, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..querying import PageResult

T = TypeVar("T")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordModel(BaseModel):
    """Base for read models built from a projected database row."""

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]):
        return cls.model_validate(dict(row))


class PartialUpdateModel(BaseModel):
    """Payload where every field is optional but NOT NULL columns reject an explicit null."""

    NON_NULLABLE: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self):
        for name in self.NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class PaginationMeta(BaseModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: datetime = Field(default_factory=utcnow)


class ApiResponse(MessageResponse, Generic[T]):
    """Standard success envelope carrying a single record."""

    data: T


class ListResponse(MessageResponse, Generic[T]):
    """Envelope for unpaginated listings."""

    data: List[T]
    count: int = Field(..., ge=0)

    @classmethod
    def from_records(cls, records: Iterable[T], message: str):
        items = list(records)
        return cls(message=message, data=items, count=len(items))


class PaginatedResponse(MessageResponse, Generic[T]):
    """Standard shape for paginated listings."""

    data: List[T]
    pagination: PaginationMeta

    @classmethod
    def from_page(cls, result: PageResult, message: str):
        return cls(
            message=message,
            data=result.records,
            pagination=PaginationMeta(**result.pagination()),
        )


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
    timestamp: datetime = Field(default_factory=utcnow)


class DeletedRecord(BaseModel):
    id: Union[int, str]
    deleted_at: datetime = Field(default_factory=utcnow)


class HealthStatus(BaseModel):
    status: str
    database: str

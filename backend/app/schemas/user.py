from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.user import UserRole, UserStatus
from .common import PartialUpdateModel, RecordModel


class UserCreate(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    title: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)
    password: Optional[str] = None
    address: Optional[str] = None
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
    biography: Optional[str] = None
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    github_url: Optional[str] = Field(default=None, max_length=500)
    role: UserRole = UserRole.STUDENT
    is_instructor: bool = False
    status: UserStatus = UserStatus.ACTIVE


class UserUpdate(PartialUpdateModel):
    NON_NULLABLE = ("first_name", "last_name", "role", "is_instructor", "status")

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    title: Optional[str] = Field(default=None, max_length=100)
    address: Optional[str] = None
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
    biography: Optional[str] = None
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    github_url: Optional[str] = Field(default=None, max_length=500)
    role: Optional[UserRole] = None
    is_instructor: Optional[bool] = None
    status: Optional[UserStatus] = None


class UserStatusUpdate(BaseModel):
    status: Optional[str] = None


class UserRead(RecordModel):
    """Public view of a user; the password hash is never part of it."""

    id: int
    first_name: str
    last_name: str
    title: Optional[str] = None
    email: str
    phone: str
    address: Optional[str] = None
    profile_image_url: Optional[str] = None
    biography: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    role: UserRole
    is_instructor: bool
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_instructor_user(self) -> bool:
        return self.role == UserRole.INSTRUCTOR or self.is_instructor

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

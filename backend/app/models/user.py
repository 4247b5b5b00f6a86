"""SQLAlchemy table definition for platform users."""

from __future__ import annotations

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, Integer, String, Text, false, func

from ..database import Base


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class User(Base):
    """A student, instructor or administrator account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    title = Column(String(100), nullable=True)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(30), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    biography = Column(Text, nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    github_url = Column(String(500), nullable=True)
    role = Column(
        Enum(
            UserRole,
            name="user_role_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=UserRole.STUDENT,
    )
    is_instructor = Column(Boolean, nullable=False, default=False, server_default=false())
    status = Column(
        Enum(
            UserStatus,
            name="user_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("users_role_status_idx", User.role, User.status)

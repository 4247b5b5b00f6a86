"""Business logic for platform users."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .. import models, schemas
from ..database import Database
from ..errors import ValidationError
from ..querying import (
    FilterField,
    FixedCondition,
    PageRequest,
    PageResult,
    build_filtered_query,
    build_update_statement,
    fetch_page,
)
from ..schemas.common import is_valid_email
from ..security import generate_password_hash
from .records import apply_update, delete_by_key, insert_record, require_by_key

LOGGER = logging.getLogger(__name__)

TABLE = "users"
ORDER_BY = "created_at DESC, id DESC"
MIN_PASSWORD_LENGTH = 6

# never includes password_hash
USER_COLUMNS = (
    "id",
    "first_name",
    "last_name",
    "title",
    "email",
    "phone",
    "address",
    "profile_image_url",
    "biography",
    "linkedin_url",
    "github_url",
    "role",
    "is_instructor",
    "status",
    "created_at",
    "updated_at",
)

USER_FILTERS = (
    FilterField.equals("role"),
    FilterField.equals("status"),
    FilterField.equals("is_instructor"),
    FilterField.substring("search", "first_name", "last_name", "email"),
)

INSTRUCTOR_FILTERS = (FilterField.equals("status"),)

UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "title",
    "address",
    "profile_image_url",
    "biography",
    "linkedin_url",
    "github_url",
    "role",
    "is_instructor",
    "status",
)

NOT_FOUND = "User not found"
DUPLICATE = "Email or phone already exists"


class UserService:
    """Encapsulates persistence operations for user accounts."""

    @staticmethod
    def list_users(
        database: Database,
        filters: Mapping[str, Any],
        page_request: PageRequest,
    ) -> PageResult[schemas.UserRead]:
        query = build_filtered_query(
            TABLE, USER_FILTERS, filters, page_request, ORDER_BY, columns=USER_COLUMNS
        )
        return fetch_page(database, query, schemas.UserRead.from_row)

    @staticmethod
    def list_instructors(
        database: Database,
        status: Optional[models.UserStatus],
        page_request: PageRequest,
    ) -> PageResult[schemas.UserRead]:
        query = build_filtered_query(
            TABLE,
            INSTRUCTOR_FILTERS,
            {"status": status},
            page_request,
            ORDER_BY,
            columns=USER_COLUMNS,
            conditions=(
                FixedCondition(
                    "(role = {} OR is_instructor = {})",
                    (models.UserRole.INSTRUCTOR.value, True),
                ),
            ),
        )
        return fetch_page(database, query, schemas.UserRead.from_row)

    @staticmethod
    def get_user(database: Database, user_id: int) -> schemas.UserRead:
        row = require_by_key(database, TABLE, user_id, columns=USER_COLUMNS, not_found=NOT_FOUND)
        return schemas.UserRead.from_row(row)

    @staticmethod
    def get_user_by_email(database: Database, email: str) -> schemas.UserRead:
        row = require_by_key(
            database,
            TABLE,
            email,
            key_column="email",
            columns=USER_COLUMNS,
            not_found=NOT_FOUND,
        )
        return schemas.UserRead.from_row(row)

    @staticmethod
    def create_user(database: Database, data: schemas.UserCreate) -> schemas.UserRead:
        payload = data.model_dump()
        if any(
            not payload.get(name)
            for name in ("first_name", "last_name", "email", "phone", "password")
        ):
            raise ValidationError(
                "Missing required fields: first_name, last_name, email, phone, password"
            )
        if len(payload["password"]) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if not is_valid_email(payload["email"]):
            raise ValidationError("Invalid email format")

        password = payload.pop("password")
        payload["password_hash"] = generate_password_hash(password)
        values = {key: value for key, value in payload.items() if value is not None}
        user_id = insert_record(database, models.User.__table__, values, conflict=DUPLICATE)
        LOGGER.info("Created user %s", user_id)
        return UserService.get_user(database, user_id)

    @staticmethod
    def update_user(database: Database, user_id: int, data: schemas.UserUpdate) -> schemas.UserRead:
        statement = build_update_statement(
            TABLE,
            UPDATABLE_FIELDS,
            data.model_dump(exclude_unset=True),
            key_value=user_id,
        )
        apply_update(database, statement, not_found=NOT_FOUND)
        return UserService.get_user(database, user_id)

    @staticmethod
    def change_status(database: Database, user_id: int, status: Optional[str]) -> schemas.UserRead:
        allowed = {member.value for member in models.UserStatus}
        if status not in allowed:
            raise ValidationError("Invalid status. Must be ACTIVE or INACTIVE")
        statement = build_update_statement(
            TABLE, ("status",), {"status": status}, key_value=user_id
        )
        apply_update(database, statement, not_found=NOT_FOUND)
        return UserService.get_user(database, user_id)

    @staticmethod
    def set_profile_image(database: Database, user_id: int, url: str) -> None:
        statement = build_update_statement(
            TABLE, ("profile_image_url",), {"profile_image_url": url}, key_value=user_id
        )
        apply_update(database, statement, not_found=NOT_FOUND)

    @staticmethod
    def delete_user(database: Database, user_id: int) -> schemas.DeletedRecord:
        delete_by_key(database, TABLE, user_id, not_found=NOT_FOUND)
        LOGGER.info("Deleted user %s", user_id)
        return schemas.DeletedRecord(id=user_id)

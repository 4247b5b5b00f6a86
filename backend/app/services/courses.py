"""Business logic for the course catalog."""

from __future__ import annotations

from typing import Any, List, Mapping

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
from .records import apply_update, delete_by_key, insert_record, require_by_key, select_all

TABLE = "courses"
ORDER_BY = "id DESC"

COURSE_FILTERS = (
    FilterField.equals("category_id"),
    FilterField.equals("level"),
    FilterField.equals("status"),
    FilterField.equals("is_free_course"),
    FilterField.equals("is_top_course"),
    FilterField.substring("search", "title", "short_description"),
)

UPDATABLE_FIELDS = (
    "title",
    "short_description",
    "description",
    "outcomes",
    "faqs",
    "language",
    "category_id",
    "sub_category_id",
    "section",
    "requirements",
    "price",
    "discount_flag",
    "discounted_price",
    "level",
    "user_id",
    "thumbnail",
    "video_url",
    "course_type",
    "is_top_course",
    "is_admin",
    "status",
    "course_overview_provider",
    "meta_keywords",
    "meta_description",
    "is_free_course",
    "multi_instructor",
    "enable_drip_content",
    "creator",
    "expiry_period",
    "upcoming_image_thumbnail",
    "publish_date",
)

NOT_FOUND = "Course not found"


class CourseService:
    """Encapsulates persistence operations for courses."""

    @staticmethod
    def list_courses(database: Database) -> List[schemas.CourseRead]:
        return [schemas.CourseRead.from_row(row) for row in select_all(database, TABLE, ORDER_BY)]

    @staticmethod
    def filter_courses(
        database: Database,
        filters: Mapping[str, Any],
        page_request: PageRequest,
    ) -> PageResult[schemas.CourseRead]:
        query = build_filtered_query(TABLE, COURSE_FILTERS, filters, page_request, ORDER_BY)
        return fetch_page(database, query, schemas.CourseRead.from_row)

    @staticmethod
    def courses_by_category(
        database: Database,
        category_id: int,
        page_request: PageRequest,
    ) -> PageResult[schemas.CourseRead]:
        query = build_filtered_query(
            TABLE,
            (),
            {},
            page_request,
            ORDER_BY,
            conditions=(FixedCondition("category_id = {}", (category_id,)),),
        )
        return fetch_page(database, query, schemas.CourseRead.from_row)

    @staticmethod
    def get_course(database: Database, course_id: int) -> schemas.CourseRead:
        return schemas.CourseRead.from_row(
            require_by_key(database, TABLE, course_id, not_found=NOT_FOUND)
        )

    @staticmethod
    def create_course(database: Database, data: schemas.CourseCreate) -> schemas.CourseRead:
        payload = data.model_dump()
        if not payload.get("title"):
            raise ValidationError("Title is required")

        values = {key: value for key, value in payload.items() if value is not None}
        course_id = insert_record(
            database,
            models.Course.__table__,
            values,
            conflict="Course conflicts with an existing record",
        )
        return CourseService.get_course(database, course_id)

    @staticmethod
    def update_course(
        database: Database, course_id: int, data: schemas.CourseUpdate
    ) -> schemas.CourseRead:
        statement = build_update_statement(
            TABLE,
            UPDATABLE_FIELDS,
            data.model_dump(exclude_unset=True),
            key_value=course_id,
            touch_column="last_modified",
        )
        apply_update(database, statement, not_found=NOT_FOUND)
        return CourseService.get_course(database, course_id)

    @staticmethod
    def delete_course(database: Database, course_id: int) -> None:
        delete_by_key(database, TABLE, course_id, not_found=NOT_FOUND)

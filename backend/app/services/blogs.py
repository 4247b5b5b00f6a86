"""Business logic for blog posts."""

from __future__ import annotations

from typing import Any, List, Mapping

from .. import models, schemas
from ..database import Database
from ..errors import ValidationError
from ..querying import (
    FilterField,
    PageRequest,
    PageResult,
    build_filtered_query,
    build_update_statement,
    fetch_page,
)
from .records import apply_update, delete_by_key, insert_record, require_by_key, select_all

TABLE = "blogs"
ORDER_BY = "created_at DESC, id DESC"

BLOG_FILTERS = (
    FilterField.equals("category_id"),
    FilterField.equals("author_id"),
    FilterField.equals("status"),
    FilterField.equals("visibility"),
    FilterField.equals("is_popular"),
    FilterField.equals("show_on_homepage"),
    FilterField.substring("search", "title", "short_description"),
)

UPDATABLE_FIELDS = (
    "title",
    "slug",
    "category_id",
    "author_id",
    "author_name",
    "author_email",
    "keywords",
    "content",
    "thumbnail_url",
    "banner_url",
    "is_popular",
    "status",
    "short_description",
    "reading_time",
    "image_alt_text",
    "image_caption",
    "publish_date",
    "visibility",
    "seo_title",
    "seo_description",
    "focus_keyword",
    "canonical_url",
    "meta_robots",
    "allow_comments",
    "show_on_homepage",
    "is_sticky",
)

REQUIRED_FIELDS = ("title", "content", "category_id", "author_id", "slug")

NOT_FOUND = "Blog not found"
SLUG_CONFLICT = "A blog with this slug already exists"


class BlogService:
    """Encapsulates persistence operations for blog posts."""

    @staticmethod
    def list_blogs(database: Database) -> List[schemas.BlogRead]:
        return [schemas.BlogRead.from_row(row) for row in select_all(database, TABLE, ORDER_BY)]

    @staticmethod
    def filter_blogs(
        database: Database,
        filters: Mapping[str, Any],
        page_request: PageRequest,
    ) -> PageResult[schemas.BlogRead]:
        query = build_filtered_query(TABLE, BLOG_FILTERS, filters, page_request, ORDER_BY)
        return fetch_page(database, query, schemas.BlogRead.from_row)

    @staticmethod
    def get_blog(database: Database, blog_id: int) -> schemas.BlogRead:
        return schemas.BlogRead.from_row(require_by_key(database, TABLE, blog_id, not_found=NOT_FOUND))

    @staticmethod
    def get_blog_by_slug(database: Database, slug: str) -> schemas.BlogRead:
        row = require_by_key(database, TABLE, slug, key_column="slug", not_found=NOT_FOUND)
        return schemas.BlogRead.from_row(row)

    @staticmethod
    def create_blog(database: Database, data: schemas.BlogCreate) -> schemas.BlogRead:
        payload = data.model_dump()
        if any(not payload.get(name) for name in REQUIRED_FIELDS):
            raise ValidationError("Title, content, category_id, author_id, and slug are required")

        values = {key: value for key, value in payload.items() if value is not None}
        blog_id = insert_record(database, models.Blog.__table__, values, conflict=SLUG_CONFLICT)
        return BlogService.get_blog(database, blog_id)

    @staticmethod
    def update_blog(database: Database, blog_id: int, data: schemas.BlogUpdate) -> schemas.BlogRead:
        statement = build_update_statement(
            TABLE,
            UPDATABLE_FIELDS,
            data.model_dump(exclude_unset=True),
            key_value=blog_id,
        )
        apply_update(database, statement, not_found=NOT_FOUND, conflict=SLUG_CONFLICT)
        return BlogService.get_blog(database, blog_id)

    @staticmethod
    def delete_blog(database: Database, blog_id: int) -> None:
        delete_by_key(database, TABLE, blog_id, not_found=NOT_FOUND)

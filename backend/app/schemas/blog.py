from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .common import PartialUpdateModel, RecordModel


class BlogBase(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    category_id: Optional[int] = Field(default=None, description="Category the post is filed under")
    author_id: Optional[int] = Field(default=None, description="User who wrote the post")
    author_name: Optional[str] = Field(default=None, max_length=255)
    author_email: Optional[str] = Field(default=None, max_length=255)
    keywords: Optional[str] = None
    content: Optional[str] = None
    thumbnail_url: Optional[str] = Field(default=None, max_length=500)
    banner_url: Optional[str] = Field(default=None, max_length=500)
    is_popular: bool = False
    status: str = Field(default="draft", max_length=20)
    short_description: Optional[str] = None
    reading_time: Optional[int] = Field(default=None, ge=0, description="Minutes")
    image_alt_text: Optional[str] = Field(default=None, max_length=255)
    image_caption: Optional[str] = Field(default=None, max_length=500)
    publish_date: Optional[datetime] = None
    visibility: str = Field(default="private", max_length=20)
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = None
    focus_keyword: Optional[str] = Field(default=None, max_length=255)
    canonical_url: Optional[str] = Field(default=None, max_length=500)
    meta_robots: Optional[str] = Field(default=None, max_length=100)
    allow_comments: bool = True
    show_on_homepage: bool = False
    is_sticky: bool = False


class BlogCreate(BlogBase):
    """Schema used to create new blog posts."""

    pass


class BlogUpdate(PartialUpdateModel):
    NON_NULLABLE = (
        "title",
        "slug",
        "category_id",
        "author_id",
        "content",
        "is_popular",
        "status",
        "visibility",
        "allow_comments",
        "show_on_homepage",
        "is_sticky",
    )

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    author_name: Optional[str] = Field(default=None, max_length=255)
    author_email: Optional[str] = Field(default=None, max_length=255)
    keywords: Optional[str] = None
    content: Optional[str] = Field(default=None, min_length=1)
    thumbnail_url: Optional[str] = Field(default=None, max_length=500)
    banner_url: Optional[str] = Field(default=None, max_length=500)
    is_popular: Optional[bool] = None
    status: Optional[str] = Field(default=None, max_length=20)
    short_description: Optional[str] = None
    reading_time: Optional[int] = Field(default=None, ge=0)
    image_alt_text: Optional[str] = Field(default=None, max_length=255)
    image_caption: Optional[str] = Field(default=None, max_length=500)
    publish_date: Optional[datetime] = None
    visibility: Optional[str] = Field(default=None, max_length=20)
    seo_title: Optional[str] = Field(default=None, max_length=255)
    seo_description: Optional[str] = None
    focus_keyword: Optional[str] = Field(default=None, max_length=255)
    canonical_url: Optional[str] = Field(default=None, max_length=500)
    meta_robots: Optional[str] = Field(default=None, max_length=100)
    allow_comments: Optional[bool] = None
    show_on_homepage: Optional[bool] = None
    is_sticky: Optional[bool] = None


class BlogRead(RecordModel):
    """Schema representing stored blog posts."""

    id: int
    title: str
    slug: str
    category_id: int
    author_id: int
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    keywords: Optional[str] = None
    content: str
    thumbnail_url: Optional[str] = None
    banner_url: Optional[str] = None
    is_popular: bool
    status: str
    short_description: Optional[str] = None
    reading_time: Optional[int] = None
    image_alt_text: Optional[str] = None
    image_caption: Optional[str] = None
    publish_date: Optional[datetime] = None
    visibility: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    focus_keyword: Optional[str] = None
    canonical_url: Optional[str] = None
    meta_robots: Optional[str] = None
    allow_comments: bool
    show_on_homepage: bool
    is_sticky: bool
    created_at: datetime
    updated_at: datetime

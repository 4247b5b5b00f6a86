from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .common import PartialUpdateModel, RecordModel


class CourseBase(BaseModel):
    title: Optional[str] = Field(default=None, max_length=255)
    short_description: Optional[str] = None
    description: Optional[str] = None
    outcomes: Optional[str] = None
    faqs: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=100)
    category_id: Optional[int] = None
    sub_category_id: Optional[int] = None
    section: Optional[str] = None
    requirements: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    discount_flag: bool = False
    discounted_price: Optional[Decimal] = Field(default=None, ge=0)
    level: Optional[str] = Field(default=None, max_length=50)
    user_id: Optional[int] = None
    thumbnail: Optional[str] = Field(default=None, max_length=500)
    video_url: Optional[str] = Field(default=None, max_length=500)
    course_type: Optional[str] = Field(default=None, max_length=50)
    is_top_course: bool = False
    is_admin: bool = False
    status: str = Field(default="active", max_length=50)
    course_overview_provider: Optional[str] = Field(default=None, max_length=50)
    meta_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    is_free_course: bool = False
    multi_instructor: bool = False
    enable_drip_content: bool = False
    creator: Optional[int] = None
    expiry_period: Optional[int] = Field(default=None, ge=0)
    upcoming_image_thumbnail: Optional[str] = Field(default=None, max_length=500)
    publish_date: Optional[datetime] = None


class CourseCreate(CourseBase):
    pass


class CourseUpdate(PartialUpdateModel):
    NON_NULLABLE = (
        "title",
        "discount_flag",
        "is_top_course",
        "is_admin",
        "status",
        "is_free_course",
        "multi_instructor",
        "enable_drip_content",
    )

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    short_description: Optional[str] = None
    description: Optional[str] = None
    outcomes: Optional[str] = None
    faqs: Optional[str] = None
    language: Optional[str] = Field(default=None, max_length=100)
    category_id: Optional[int] = None
    sub_category_id: Optional[int] = None
    section: Optional[str] = None
    requirements: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    discount_flag: Optional[bool] = None
    discounted_price: Optional[Decimal] = Field(default=None, ge=0)
    level: Optional[str] = Field(default=None, max_length=50)
    user_id: Optional[int] = None
    thumbnail: Optional[str] = Field(default=None, max_length=500)
    video_url: Optional[str] = Field(default=None, max_length=500)
    course_type: Optional[str] = Field(default=None, max_length=50)
    is_top_course: Optional[bool] = None
    is_admin: Optional[bool] = None
    status: Optional[str] = Field(default=None, max_length=50)
    course_overview_provider: Optional[str] = Field(default=None, max_length=50)
    meta_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    is_free_course: Optional[bool] = None
    multi_instructor: Optional[bool] = None
    enable_drip_content: Optional[bool] = None
    creator: Optional[int] = None
    expiry_period: Optional[int] = Field(default=None, ge=0)
    upcoming_image_thumbnail: Optional[str] = Field(default=None, max_length=500)
    publish_date: Optional[datetime] = None


class CourseRead(RecordModel):
    id: int
    title: str
    short_description: Optional[str] = None
    description: Optional[str] = None
    outcomes: Optional[str] = None
    faqs: Optional[str] = None
    language: Optional[str] = None
    category_id: Optional[int] = None
    sub_category_id: Optional[int] = None
    section: Optional[str] = None
    requirements: Optional[str] = None
    price: Optional[Decimal] = None
    discount_flag: bool
    discounted_price: Optional[Decimal] = None
    level: Optional[str] = None
    user_id: Optional[int] = None
    thumbnail: Optional[str] = None
    video_url: Optional[str] = None
    date_added: datetime
    last_modified: datetime
    course_type: Optional[str] = None
    is_top_course: bool
    is_admin: bool
    status: str
    course_overview_provider: Optional[str] = None
    meta_keywords: Optional[str] = None
    meta_description: Optional[str] = None
    is_free_course: bool
    multi_instructor: bool
    enable_drip_content: bool
    creator: Optional[int] = None
    expiry_period: Optional[int] = None
    upcoming_image_thumbnail: Optional[str] = None
    publish_date: Optional[datetime] = None

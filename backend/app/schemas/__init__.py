"""Expose Pydantic schemas for convenient imports."""

from .blog import BlogBase, BlogCreate, BlogRead, BlogUpdate
from .common import (
    ApiResponse,
    DeletedRecord,
    ErrorResponse,
    HealthStatus,
    ListResponse,
    MessageResponse,
    PaginatedResponse,
    PaginationMeta,
    is_valid_email,
)
from .contact import ContactCreate, ContactMessageRead, ContactStats, ContactStatusUpdate
from .course import CourseBase, CourseCreate, CourseRead, CourseUpdate
from .image import ImageRead, UploadedImageRead
from .newsletter import NewsletterStats, SubscriberRead, SubscriptionRequest
from .user import UserCreate, UserRead, UserStatusUpdate, UserUpdate

__all__ = [
    "ApiResponse",
    "BlogBase",
    "BlogCreate",
    "BlogRead",
    "BlogUpdate",
    "ContactCreate",
    "ContactMessageRead",
    "ContactStats",
    "ContactStatusUpdate",
    "CourseBase",
    "CourseCreate",
    "CourseRead",
    "CourseUpdate",
    "DeletedRecord",
    "ErrorResponse",
    "HealthStatus",
    "ImageRead",
    "ListResponse",
    "MessageResponse",
    "NewsletterStats",
    "PaginatedResponse",
    "PaginationMeta",
    "SubscriberRead",
    "SubscriptionRequest",
    "UploadedImageRead",
    "UserCreate",
    "UserRead",
    "UserStatusUpdate",
    "UserUpdate",
    "is_valid_email",
]

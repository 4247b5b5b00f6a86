"""Expose SQLAlchemy models for convenient imports."""

from .blog import Blog
from .contact import ContactMessage, ContactStatus
from .course import Course
from .image import Image
from .newsletter import NewsletterSubscriber, SubscriberStatus
from .user import User, UserRole, UserStatus

__all__ = [
    "Blog",
    "ContactMessage",
    "ContactStatus",
    "Course",
    "Image",
    "NewsletterSubscriber",
    "SubscriberStatus",
    "User",
    "UserRole",
    "UserStatus",
]

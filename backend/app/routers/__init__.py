"""Routers package."""

from .blogs import router as blogs_router
from .contact import router as contact_router
from .courses import router as courses_router
from .health import router as health_router
from .images import router as images_router
from .newsletter import router as newsletter_router
from .users import router as users_router

__all__ = [
    "blogs_router",
    "contact_router",
    "courses_router",
    "health_router",
    "images_router",
    "newsletter_router",
    "users_router",
]

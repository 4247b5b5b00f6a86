"""Service layer encapsulating business logic for API routers."""

from .blogs import BlogService
from .contact import ContactService
from .courses import CourseService
from .images import ImageService
from .mailer import Mailer, get_mailer
from .media import (
    CloudinaryMediaClient,
    InMemoryMediaClient,
    MediaClient,
    MediaUploadError,
    UploadedMedia,
    build_media_client_from_env,
    get_media_client,
)
from .newsletter import NewsletterService
from .notifications import (
    BrevoEmailClient,
    ConsoleNotificationClient,
    NotificationClient,
    NotificationError,
    NotificationResult,
    SendGridEmailClient,
    build_email_client_from_env,
)
from .users import UserService

__all__ = [
    "BlogService",
    "BrevoEmailClient",
    "CloudinaryMediaClient",
    "ConsoleNotificationClient",
    "ContactService",
    "CourseService",
    "ImageService",
    "InMemoryMediaClient",
    "Mailer",
    "MediaClient",
    "MediaUploadError",
    "NewsletterService",
    "NotificationClient",
    "NotificationError",
    "NotificationResult",
    "SendGridEmailClient",
    "UploadedMedia",
    "UserService",
    "build_email_client_from_env",
    "build_media_client_from_env",
    "get_mailer",
    "get_media_client",
]

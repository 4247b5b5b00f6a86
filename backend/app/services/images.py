"""Business logic for image uploads and their stored metadata."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, BinaryIO, Mapping, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError

from .. import models, schemas
from ..database import Database, insert_row
from ..errors import ValidationError
from ..querying import FilterField, PageRequest, PageResult, build_filtered_query, fetch_page
from .media import MediaClient, MediaUploadError, UploadedMedia
from .records import delete_by_key, require_by_key

LOGGER = logging.getLogger(__name__)

TABLE = "images"
ORDER_BY = "uploaded_at DESC, id DESC"
DEFAULT_FOLDER = "biomed"
PROFILE_FOLDER = "biomed/profiles"
MAX_UPLOAD_BYTES = 5 * 1024 * 1024

ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})

IMAGE_COLUMNS = (
    "id",
    "cloudinary_id",
    "secure_url AS url",
    "width",
    "height",
    "size",
    "format",
    "folder",
    "uploaded_at",
)

IMAGE_FILTERS = (FilterField.equals("folder"),)

NOT_FOUND = "Image not found"


def read_upload(stream: Optional[BinaryIO]) -> bytes:
    """Read at most one byte past the upload size limit."""

    if stream is None:
        return b""
    return stream.read(MAX_UPLOAD_BYTES + 1)


def validate_upload(filename: Optional[str], content_type: Optional[str], content: bytes) -> None:
    """Reject anything that is not a JPG, PNG, GIF or WEBP image of at most 5 MB."""

    if not filename:
        raise ValidationError("No image file provided")
    extension = PurePosixPath(filename).suffix.lower()
    if content_type not in ALLOWED_MIME_TYPES or extension not in ALLOWED_EXTENSIONS:
        raise ValidationError("Only image files are allowed (JPG, PNG, GIF, WEBP)")
    if len(content) > MAX_UPLOAD_BYTES:
        raise ValidationError("File too large. Maximum size is 5MB")


def _uploaded(media: UploadedMedia) -> schemas.UploadedImageRead:
    return schemas.UploadedImageRead(
        cloudinary_id=media.public_id,
        url=media.secure_url,
        width=media.width,
        height=media.height,
        size=media.size,
        format=media.format,
    )


class ImageService:
    """Proxies uploads to the media host and keeps their metadata."""

    @staticmethod
    def upload_to_host(
        media_client: MediaClient,
        *,
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes,
        folder: str,
    ) -> UploadedMedia:
        validate_upload(filename, content_type, content)
        uploaded = media_client.upload(content, filename=filename, folder=folder)
        LOGGER.info("Uploaded %s to the media host as %s", filename, uploaded.public_id)
        return uploaded

    @staticmethod
    def upload_image(
        database: Database,
        media_client: MediaClient,
        *,
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes,
        folder: Optional[str] = None,
    ) -> Tuple[Union[schemas.ImageRead, schemas.UploadedImageRead], bool]:
        """Upload and record an image; the flag reports whether the metadata was saved.

        When the metadata insert fails after a successful upload the upload
        data is returned with the flag unset.
        """

        folder = (folder or "").strip() or DEFAULT_FOLDER
        uploaded = ImageService.upload_to_host(
            media_client,
            filename=filename,
            content_type=content_type,
            content=content,
            folder=folder,
        )

        values = {
            "cloudinary_id": uploaded.public_id,
            "url": uploaded.url,
            "secure_url": uploaded.secure_url,
            "public_id": uploaded.public_id,
            "width": uploaded.width,
            "height": uploaded.height,
            "format": uploaded.format,
            "size": uploaded.size,
            "folder": folder,
        }
        try:
            with database.transaction() as connection:
                image_id = insert_row(connection, models.Image.__table__, values)
        except SQLAlchemyError:
            LOGGER.exception("Image %s uploaded but its metadata was not saved", uploaded.public_id)
            return _uploaded(uploaded), False

        return ImageService.get_image(database, image_id), True

    @staticmethod
    def upload_profile_image(
        media_client: MediaClient,
        *,
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes,
    ) -> schemas.UploadedImageRead:
        uploaded = ImageService.upload_to_host(
            media_client,
            filename=filename,
            content_type=content_type,
            content=content,
            folder=PROFILE_FOLDER,
        )
        return _uploaded(uploaded)

    @staticmethod
    def discard_upload(media_client: MediaClient, public_id: str) -> None:
        """Remove an uploaded asset whose owning record could not be updated."""

        try:
            media_client.destroy(public_id)
        except MediaUploadError:
            LOGGER.exception("Could not remove orphaned upload %s", public_id)

    @staticmethod
    def list_images(
        database: Database,
        filters: Mapping[str, Any],
        page_request: PageRequest,
    ) -> PageResult[schemas.ImageRead]:
        query = build_filtered_query(
            TABLE, IMAGE_FILTERS, filters, page_request, ORDER_BY, columns=IMAGE_COLUMNS
        )
        return fetch_page(database, query, schemas.ImageRead.from_row)

    @staticmethod
    def get_image(database: Database, image_id: str) -> schemas.ImageRead:
        row = require_by_key(database, TABLE, image_id, columns=IMAGE_COLUMNS, not_found=NOT_FOUND)
        return schemas.ImageRead.from_row(row)

    @staticmethod
    def get_by_cloudinary_id(database: Database, public_id: str) -> schemas.ImageRead:
        row = require_by_key(
            database,
            TABLE,
            public_id,
            key_column="cloudinary_id",
            columns=IMAGE_COLUMNS,
            not_found=NOT_FOUND,
        )
        return schemas.ImageRead.from_row(row)

    @staticmethod
    def delete_image(
        database: Database, media_client: MediaClient, image_id: str
    ) -> schemas.DeletedRecord:
        image = ImageService.get_image(database, image_id)
        media_client.destroy(image.cloudinary_id)
        delete_by_key(database, TABLE, image_id, not_found=NOT_FOUND)
        LOGGER.info("Deleted image %s (%s)", image_id, image.cloudinary_id)
        return schemas.DeletedRecord(id=image_id)

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .common import RecordModel


class UploadedImageRead(BaseModel):
    """What the media host returned for an upload."""

    cloudinary_id: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    format: Optional[str] = None


class ImageRead(RecordModel):
    id: str
    cloudinary_id: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    format: Optional[str] = None
    folder: str
    uploaded_at: datetime

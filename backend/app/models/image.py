"""SQLAlchemy table definition for uploaded image metadata."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Index, Integer, String, func

from ..database import Base


class Image(Base):
    """Metadata of an asset stored on the media host."""

    __tablename__ = "images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    cloudinary_id = Column(String(255), nullable=False)
    url = Column(String(500), nullable=True)
    secure_url = Column(String(500), nullable=False)
    public_id = Column(String(255), nullable=False)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    format = Column(String(20), nullable=True)
    size = Column(Integer, nullable=True)
    folder = Column(String(255), nullable=False, default="biomed")
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("images_cloudinary_id_idx", Image.cloudinary_id)
Index("images_folder_idx", Image.folder)

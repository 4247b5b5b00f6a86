"""SQLAlchemy table definition for blog posts."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text, false, func, true

from ..database import Base


class Blog(Base):
    """A published or draft article shown on the content site."""

    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    category_id = Column(Integer, nullable=False)
    author_id = Column(Integer, nullable=False)
    author_name = Column(String(255), nullable=True)
    author_email = Column(String(255), nullable=True)
    keywords = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    thumbnail_url = Column(String(500), nullable=True)
    banner_url = Column(String(500), nullable=True)
    is_popular = Column(Boolean, nullable=False, default=False, server_default=false())
    status = Column(String(20), nullable=False, default="draft", server_default="draft")
    short_description = Column(Text, nullable=True)
    reading_time = Column(Integer, nullable=True)
    image_alt_text = Column(String(255), nullable=True)
    image_caption = Column(String(500), nullable=True)
    publish_date = Column(DateTime(timezone=True), nullable=True)
    visibility = Column(String(20), nullable=False, default="private", server_default="private")
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(Text, nullable=True)
    focus_keyword = Column(String(255), nullable=True)
    canonical_url = Column(String(500), nullable=True)
    meta_robots = Column(String(100), nullable=True)
    allow_comments = Column(Boolean, nullable=False, default=True, server_default=true())
    show_on_homepage = Column(Boolean, nullable=False, default=False, server_default=false())
    is_sticky = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("blogs_category_status_idx", Blog.category_id, Blog.status)
Index("blogs_created_at_idx", Blog.created_at)

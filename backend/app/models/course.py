"""SQLAlchemy table definition for courses."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, Numeric, String, Text, false, func

from ..database import Base


class Course(Base):
    """A course in the learning catalog."""

    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    short_description = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    outcomes = Column(Text, nullable=True)
    faqs = Column(Text, nullable=True)
    language = Column(String(100), nullable=True)
    category_id = Column(Integer, nullable=True)
    sub_category_id = Column(Integer, nullable=True)
    section = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    discount_flag = Column(Boolean, nullable=False, default=False, server_default=false())
    discounted_price = Column(Numeric(10, 2), nullable=True)
    level = Column(String(50), nullable=True)
    user_id = Column(Integer, nullable=True)
    thumbnail = Column(String(500), nullable=True)
    video_url = Column(String(500), nullable=True)
    date_added = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_modified = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    course_type = Column(String(50), nullable=True)
    is_top_course = Column(Boolean, nullable=False, default=False, server_default=false())
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())
    status = Column(String(50), nullable=False, default="active", server_default="active")
    course_overview_provider = Column(String(50), nullable=True)
    meta_keywords = Column(Text, nullable=True)
    meta_description = Column(Text, nullable=True)
    is_free_course = Column(Boolean, nullable=False, default=False, server_default=false())
    multi_instructor = Column(Boolean, nullable=False, default=False, server_default=false())
    enable_drip_content = Column(Boolean, nullable=False, default=False, server_default=false())
    creator = Column(Integer, nullable=True)
    expiry_period = Column(Integer, nullable=True)
    upcoming_image_thumbnail = Column(String(500), nullable=True)
    publish_date = Column(DateTime(timezone=True), nullable=True)


Index("courses_category_idx", Course.category_id)
Index("courses_status_level_idx", Course.status, Course.level)

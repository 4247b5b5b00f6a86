"""SQLAlchemy table definition for newsletter subscribers."""

from __future__ import annotations

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func

from ..database import Base


class SubscriberStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    UNSUBSCRIBED = "unsubscribed"


class NewsletterSubscriber(Base):
    """An email address on the newsletter list."""

    __tablename__ = "newsletter_subscribers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    status = Column(
        Enum(
            SubscriberStatus,
            name="newsletter_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=SubscriberStatus.ACTIVE,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

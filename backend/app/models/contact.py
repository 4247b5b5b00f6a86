"""SQLAlchemy table definition for contact form submissions."""

from __future__ import annotations

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, Integer, String, Text, func

from ..database import Base


class ContactStatus(str, enum.Enum):
    NEW = "new"
    RESPONDED = "responded"
    RESOLVED = "resolved"


class ContactMessage(Base):
    """A message sent through the public contact form."""

    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    country_code = Column(String(10), nullable=True)
    phone_number = Column(String(30), nullable=True)
    interest_topic = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    agreed_to_terms = Column(Boolean, nullable=False, default=True)
    status = Column(
        Enum(
            ContactStatus,
            name="contact_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=ContactStatus.NEW,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


Index("contact_messages_status_idx", ContactMessage.status)

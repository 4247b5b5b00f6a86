from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.contact import ContactStatus
from .common import RecordModel


class ContactCreate(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    country_code: Optional[str] = Field(default=None, max_length=10)
    phone_number: Optional[str] = Field(default=None, max_length=30)
    interest_topic: Optional[str] = Field(default=None, max_length=255)
    message: Optional[str] = None
    agreed_to_terms: bool = True


class ContactStatusUpdate(BaseModel):
    status: Optional[str] = None


class ContactMessageRead(RecordModel):
    id: int
    full_name: str
    email: str
    country_code: Optional[str] = None
    phone_number: Optional[str] = None
    interest_topic: Optional[str] = None
    message: str
    agreed_to_terms: bool
    status: ContactStatus
    created_at: datetime


class ContactStats(BaseModel):
    total: int
    new: int
    responded: int
    resolved: int

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..models.newsletter import SubscriberStatus
from .common import RecordModel


class SubscriptionRequest(BaseModel):
    email: Optional[str] = None


class SubscriberRead(RecordModel):
    id: int
    email: str
    status: SubscriberStatus
    created_at: datetime


class NewsletterStats(BaseModel):
    total: int
    active: int
    pending: int
    unsubscribed: int

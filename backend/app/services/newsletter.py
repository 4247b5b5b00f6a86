"""Business logic for newsletter subscriptions."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from .. import models, schemas
from ..database import Database, insert_row
from ..errors import ConflictError, NotFoundError, ValidationError
from ..querying import FilterField, PageRequest, PageResult, build_filtered_query, fetch_page
from ..schemas.common import is_valid_email
from .mailer import Mailer
from .records import count_by_status, require_by_key

LOGGER = logging.getLogger(__name__)

TABLE = "newsletter_subscribers"
ORDER_BY = "created_at DESC, id DESC"

SUBSCRIBER_FILTERS = (
    FilterField.equals("status"),
    FilterField.substring("search", "email"),
)

NOT_FOUND = "Subscriber not found"

_REACTIVATE_SQL = (
    "UPDATE newsletter_subscribers SET status = :p0, updated_at = CURRENT_TIMESTAMP "
    "WHERE email = :p1 AND status = :p2"
)
_UNSUBSCRIBE_SQL = (
    "UPDATE newsletter_subscribers SET status = :p0, updated_at = CURRENT_TIMESTAMP "
    "WHERE email = :p1"
)


def _require_email(email: Optional[str]) -> str:
    if not email or not email.strip():
        raise ValidationError("Email is required")
    return email.strip()


class NewsletterService:
    """Subscription lifecycle backed by the unique constraint on ``email``."""

    @staticmethod
    def list_subscribers(
        database: Database,
        filters: Mapping[str, Any],
        page_request: PageRequest,
    ) -> PageResult[schemas.SubscriberRead]:
        query = build_filtered_query(TABLE, SUBSCRIBER_FILTERS, filters, page_request, ORDER_BY)
        return fetch_page(database, query, schemas.SubscriberRead.from_row)

    @staticmethod
    def get_subscriber(database: Database, email: str) -> schemas.SubscriberRead:
        row = require_by_key(database, TABLE, email, key_column="email", not_found=NOT_FOUND)
        return schemas.SubscriberRead.from_row(row)

    @staticmethod
    def subscribe(
        database: Database, mailer: Mailer, email: Optional[str]
    ) -> Tuple[schemas.SubscriberRead, bool]:
        """Subscribe ``email`` and return the subscriber plus whether a row was created.

        A duplicate insert falls back to reactivating an ``unsubscribed`` row
        in a single conditional update; any other existing row is a conflict.
        """

        email = (email or "").strip()
        if not is_valid_email(email):
            raise ValidationError("Valid email is required")

        active = models.SubscriberStatus.ACTIVE.value
        created = True
        try:
            with database.transaction() as connection:
                insert_row(
                    connection,
                    models.NewsletterSubscriber.__table__,
                    {"email": email, "status": active},
                )
        except IntegrityError:
            created = False
            reactivated = database.execute(
                _REACTIVATE_SQL,
                {"p0": active, "p1": email, "p2": models.SubscriberStatus.UNSUBSCRIBED.value},
            )
            if reactivated == 0:
                raise ConflictError("This email is already subscribed")
            LOGGER.info("Reactivated newsletter subscription for %s", email)

        mailer.send_welcome(email)
        return NewsletterService.get_subscriber(database, email), created

    @staticmethod
    def confirm(database: Database, email: Optional[str]) -> schemas.SubscriberRead:
        return NewsletterService.get_subscriber(database, _require_email(email))

    @staticmethod
    def unsubscribe(database: Database, mailer: Mailer, email: Optional[str]) -> schemas.SubscriberRead:
        email = _require_email(email)
        updated = database.execute(
            _UNSUBSCRIBE_SQL,
            {"p0": models.SubscriberStatus.UNSUBSCRIBED.value, "p1": email},
        )
        if updated == 0:
            raise NotFoundError(NOT_FOUND)

        mailer.send_unsubscribe(email)
        return NewsletterService.get_subscriber(database, email)

    @staticmethod
    def statistics(database: Database) -> schemas.NewsletterStats:
        counts = count_by_status(
            database, TABLE, [member.value for member in models.SubscriberStatus]
        )
        return schemas.NewsletterStats(**counts)

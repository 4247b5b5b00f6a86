"""Business logic for contact-form submissions."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .. import models, schemas
from ..database import Database, run_statement
from ..errors import NotFoundError, ValidationError
from ..querying import (
    FilterField,
    PageRequest,
    PageResult,
    build_filtered_query,
    build_update_statement,
    fetch_page,
)
from ..schemas.common import is_valid_email
from .mailer import Mailer
from .records import apply_update, count_by_status, insert_record, require_by_key

LOGGER = logging.getLogger(__name__)

TABLE = "contact_messages"
ORDER_BY = "created_at DESC, id DESC"

CONTACT_FILTERS = (
    FilterField.equals("status"),
    FilterField.substring("search", "full_name", "email", "message"),
)

NOT_FOUND = "Message not found"


class ContactService:
    """Stores contact messages and notifies the sender and the administrator."""

    @staticmethod
    def submit(database: Database, mailer: Mailer, data: schemas.ContactCreate) -> schemas.ContactMessageRead:
        payload = data.model_dump()
        if not payload.get("full_name") or not payload.get("email") or not payload.get("message"):
            raise ValidationError("Full name, email, and message are required")
        if not is_valid_email(payload["email"]):
            raise ValidationError("Valid email address is required")
        if payload.get("agreed_to_terms") is not True:
            raise ValidationError("You must agree to the terms and conditions")

        values = {key: value for key, value in payload.items() if value is not None}
        values["status"] = models.ContactStatus.NEW.value
        message_id = insert_record(
            database,
            models.ContactMessage.__table__,
            values,
            conflict="Message conflicts with an existing record",
        )
        LOGGER.info("Stored contact message %s from %s", message_id, payload["email"])

        mailer.send_contact_confirmation(payload["email"], payload["full_name"])
        mailer.send_contact_admin_notification(payload)
        return ContactService.get_message(database, message_id)

    @staticmethod
    def list_messages(
        database: Database,
        filters: Mapping[str, Any],
        page_request: PageRequest,
    ) -> PageResult[schemas.ContactMessageRead]:
        query = build_filtered_query(TABLE, CONTACT_FILTERS, filters, page_request, ORDER_BY)
        return fetch_page(database, query, schemas.ContactMessageRead.from_row)

    @staticmethod
    def get_message(database: Database, message_id: int) -> schemas.ContactMessageRead:
        row = require_by_key(database, TABLE, message_id, not_found=NOT_FOUND)
        return schemas.ContactMessageRead.from_row(row)

    @staticmethod
    def update_status(
        database: Database, message_id: int, status: Optional[str]
    ) -> schemas.ContactMessageRead:
        if not status:
            raise ValidationError("Status is required")
        allowed = [member.value for member in models.ContactStatus]
        if status not in allowed:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(allowed)}")

        statement = build_update_statement(
            TABLE, ("status",), {"status": status}, key_value=message_id, touch_column=None
        )
        apply_update(database, statement, not_found=NOT_FOUND)
        return ContactService.get_message(database, message_id)

    @staticmethod
    def delete_message(database: Database, message_id: int) -> schemas.ContactMessageRead:
        """Delete the message and return it as it was before deletion."""

        with database.transaction() as connection:
            row = run_statement(
                connection, f"SELECT * FROM {TABLE} WHERE id = :p0", {"p0": message_id}
            ).mappings().first()
            if row is None:
                raise NotFoundError(NOT_FOUND)
            deleted = schemas.ContactMessageRead.from_row(row)
            run_statement(connection, f"DELETE FROM {TABLE} WHERE id = :p0", {"p0": message_id})
        return deleted

    @staticmethod
    def statistics(database: Database) -> schemas.ContactStats:
        counts = count_by_status(database, TABLE, [member.value for member in models.ContactStatus])
        return schemas.ContactStats(**counts)

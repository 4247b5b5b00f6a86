"""API router for the public contact form and its administration."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..database import Database, get_database
from ..models.contact import ContactStatus
from ..querying import PageRequest
from ..services import ContactService, Mailer, get_mailer
from .pagination import page_request_params

router = APIRouter()


@router.post(
    "/submit",
    response_model=schemas.ApiResponse[schemas.ContactMessageRead],
    status_code=status.HTTP_201_CREATED,
)
def submit_contact(
    payload: schemas.ContactCreate,
    database: Database = Depends(get_database),
    mailer: Mailer = Depends(get_mailer),
):
    return schemas.ApiResponse(
        message="Thank you for contacting us! We will get back to you soon.",
        data=ContactService.submit(database, mailer, payload),
    )


@router.get("", response_model=schemas.PaginatedResponse[schemas.ContactMessageRead])
def list_messages(
    status_: Optional[ContactStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches name, email or message"),
    page_request: PageRequest = Depends(page_request_params(10)),
    database: Database = Depends(get_database),
):
    result = ContactService.list_messages(
        database, {"status": status_, "search": search}, page_request
    )
    return schemas.PaginatedResponse.from_page(result, "Messages retrieved successfully")


@router.get("/stats/summary", response_model=schemas.ApiResponse[schemas.ContactStats])
def contact_statistics(database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Statistics retrieved successfully",
        data=ContactService.statistics(database),
    )


@router.get("/{message_id}", response_model=schemas.ApiResponse[schemas.ContactMessageRead])
def get_message(message_id: int, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Message retrieved successfully",
        data=ContactService.get_message(database, message_id),
    )


@router.put(
    "/{message_id}/status",
    response_model=schemas.ApiResponse[schemas.ContactMessageRead],
)
def update_message_status(
    message_id: int,
    payload: schemas.ContactStatusUpdate,
    database: Database = Depends(get_database),
):
    return schemas.ApiResponse(
        message="Message status updated successfully",
        data=ContactService.update_status(database, message_id, payload.status),
    )


@router.delete("/{message_id}", response_model=schemas.ApiResponse[schemas.ContactMessageRead])
def delete_message(message_id: int, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Message deleted successfully",
        data=ContactService.delete_message(database, message_id),
    )

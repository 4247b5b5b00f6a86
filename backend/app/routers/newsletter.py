"""API router for newsletter subscriptions."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from .. import schemas
from ..database import Database, get_database
from ..models.newsletter import SubscriberStatus
from ..querying import PageRequest
from ..services import Mailer, NewsletterService, get_mailer
from .pagination import page_request_params

router = APIRouter()


@router.get("", response_model=schemas.PaginatedResponse[schemas.SubscriberRead])
def list_subscribers(
    status_: Optional[SubscriberStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches the email address"),
    page_request: PageRequest = Depends(page_request_params(20)),
    database: Database = Depends(get_database),
):
    result = NewsletterService.list_subscribers(
        database, {"status": status_, "search": search}, page_request
    )
    return schemas.PaginatedResponse.from_page(result, "Subscribers retrieved successfully")


@router.get("/stats/summary", response_model=schemas.ApiResponse[schemas.NewsletterStats])
def subscriber_statistics(database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Statistics retrieved successfully",
        data=NewsletterService.statistics(database),
    )


@router.post(
    "/subscribe",
    response_model=schemas.ApiResponse[schemas.SubscriberRead],
    status_code=status.HTTP_201_CREATED,
)
def subscribe(
    payload: schemas.SubscriptionRequest,
    response: Response,
    database: Database = Depends(get_database),
    mailer: Mailer = Depends(get_mailer),
):
    subscriber, created = NewsletterService.subscribe(database, mailer, payload.email)
    if not created:
        response.status_code = status.HTTP_200_OK
        return schemas.ApiResponse(message="Welcome back! You have been resubscribed", data=subscriber)
    return schemas.ApiResponse(message="Successfully subscribed to newsletter!", data=subscriber)


@router.post("/confirm", response_model=schemas.ApiResponse[schemas.SubscriberRead])
def confirm_subscription(
    payload: schemas.SubscriptionRequest, database: Database = Depends(get_database)
):
    return schemas.ApiResponse(
        message="You are already subscribed to our newsletter!",
        data=NewsletterService.confirm(database, payload.email),
    )


@router.post("/unsubscribe", response_model=schemas.ApiResponse[schemas.SubscriberRead])
def unsubscribe(
    payload: schemas.SubscriptionRequest,
    database: Database = Depends(get_database),
    mailer: Mailer = Depends(get_mailer),
):
    return schemas.ApiResponse(
        message="Successfully unsubscribed from newsletter",
        data=NewsletterService.unsubscribe(database, mailer, payload.email),
    )


@router.get("/{email}", response_model=schemas.ApiResponse[schemas.SubscriberRead])
def get_subscriber(email: str, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Subscriber retrieved successfully",
        data=NewsletterService.get_subscriber(database, email),
    )

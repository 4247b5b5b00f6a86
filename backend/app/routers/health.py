"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from .. import schemas
from ..database import Database, get_database

router = APIRouter()


@router.get("/health", response_model=schemas.ApiResponse[schemas.HealthStatus])
def health(response: Response, database: Database = Depends(get_database)):
    if database.ping():
        return schemas.ApiResponse(
            message="Service is healthy",
            data=schemas.HealthStatus(status="ok", database="connected"),
        )
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return schemas.ApiResponse(
        success=False,
        message="Database is unreachable",
        data=schemas.HealthStatus(status="degraded", database="unreachable"),
    )

"""Expose the BioMed content API and wire its shared resources, error envelopes and CORS."""

import logging
import os
import re
import time
from contextlib import asynccontextmanager
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .database import Database, read_bool_env
from .errors import ApiError, InternalError
from .logging_config import configure_logging
from .migrations import run_database_migrations
from .routers import (
    blogs_router,
    contact_router,
    courses_router,
    health_router,
    images_router,
    newsletter_router,
    users_router,
)
from .schemas import ErrorResponse
from .services.mailer import Mailer
from .services.media import build_media_client_from_env

configure_logging()

LOGGER = logging.getLogger(__name__)

API_VERSION = os.getenv("API_VERSION", "v1")
API_PREFIX = f"/api/{API_VERSION}"
RUN_MIGRATIONS_ENV = "RUN_MIGRATIONS"
WILDCARD_ORIGIN = "*"


def _normalize_origin(origin: str) -> str | None:
    stripped = origin.strip()
    if not stripped:
        return None
    return stripped.rstrip("/")


def _read_allowed_origins(raw_origins: Iterable[str]) -> list[str]:
    normalized = {_normalize_origin(origin) for origin in raw_origins}
    return sorted({origin for origin in normalized if origin})


def _split_raw_origins(raw_value: str) -> list[str]:
    """Split a raw origin string using commas or whitespace as separators."""

    return [origin for origin in re.split(r"[\s,]+", raw_value) if origin]


def _load_allowed_origins_from_env() -> list[str]:
    raw_value = os.getenv("BACKEND_ALLOWED_ORIGINS")
    if not raw_value:
        return []
    return _read_allowed_origins(_split_raw_origins(raw_value))


def _resolve_allowed_origins() -> list[str]:
    return _load_allowed_origins_from_env() or [WILDCARD_ORIGIN]


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    reason = first.get("msg", "is invalid")
    if field:
        return f"Invalid value for '{field}': {reason}"
    return reason


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = ensure_database_is_ready()
    app.state.database = database
    app.state.mailer = Mailer.from_env()
    app.state.media_client = build_media_client_from_env()
    try:
        yield
    finally:
        database.dispose()


def ensure_database_is_ready() -> Database:
    """Open the connection pool and apply pending migrations unless disabled."""

    database = Database.from_env()
    if read_bool_env(RUN_MIGRATIONS_ENV, True):
        LOGGER.info("Ensuring database schema is up to date before serving requests")
        run_database_migrations(database.url)
    else:
        LOGGER.info("Skipping migrations; %s is disabled", RUN_MIGRATIONS_ENV)
    return database


app = FastAPI(title="BioMed Content API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_resolve_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    LOGGER.debug(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        LOGGER.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.error, exc.message)


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    LOGGER.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    error = InternalError("An unexpected error occurred")
    return _error_response(error.status_code, error.error, error.message)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "Bad Request", _describe_validation_error(exc)
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error_response(
            exc.status_code, "Not Found", f"Route {request.method} {request.url.path} not found"
        )
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return _error_response(exc.status_code, "Method Not Allowed", str(exc.detail))
    return _error_response(exc.status_code, "Error", str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.error(
        "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "An unexpected error occurred",
    )


app.include_router(blogs_router, prefix=f"{API_PREFIX}/blogs", tags=["blogs"])
app.include_router(courses_router, prefix=f"{API_PREFIX}/courses", tags=["courses"])
app.include_router(users_router, prefix=f"{API_PREFIX}/users", tags=["users"])
app.include_router(newsletter_router, prefix=f"{API_PREFIX}/newsletter", tags=["newsletter"])
app.include_router(contact_router, prefix=f"{API_PREFIX}/contact", tags=["contact"])
app.include_router(images_router, prefix=f"{API_PREFIX}/images", tags=["images"])
app.include_router(health_router, prefix=API_PREFIX, tags=["health"])


@app.get("/", tags=["health"])
def read_root() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}

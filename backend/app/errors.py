"""Exceptions raised by the service layer and rendered as API error envelopes."""

from __future__ import annotations

from fastapi import status


class ApiError(RuntimeError):
    """Base class for failures that map onto an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class NotFoundError(ApiError):
    """Primary-key or unique-key lookup miss."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class ConflictError(ApiError):
    """Unique constraint violation."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class UpstreamError(ApiError):
    """A call to the email provider or the media host failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error = "Bad Gateway"


class InternalError(ApiError):
    """Database or unexpected failure; the client only sees a generic message."""


class ConfigurationError(RuntimeError):
    """Raised when an outbound client cannot be configured from the environment."""

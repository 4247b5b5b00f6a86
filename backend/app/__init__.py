"""BioMed content API package."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI


def get_app() -> "FastAPI":
    """Return the FastAPI application, importing it on first use.

    Alembic and the service modules import this package without needing the
    web application or its logging setup.
    """

    from .main import app as fastapi_app

    return fastapi_app


__all__ = ["get_app"]

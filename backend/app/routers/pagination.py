"""Query-string pagination shared by the listing endpoints."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Query

from ..querying import MAX_LIMIT, PageRequest


def page_request_params(default_limit: int) -> Callable[..., PageRequest]:
    """Build a dependency reading ``page`` and ``limit`` with a per-resource default limit.

    Values are taken as raw strings so that malformed or non-positive input
    falls back to the defaults instead of being rejected.
    """

    def dependency(
        page: Optional[str] = Query(None, description="Page number (1-indexed)"),
        limit: Optional[str] = Query(
            None, description=f"Items per page (default {default_limit}, max {MAX_LIMIT})"
        ),
    ) -> PageRequest:
        return PageRequest.from_query(page, limit, default_limit=default_limit)

    return dependency

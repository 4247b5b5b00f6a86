"""API router for blog posts."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..database import Database, get_database
from ..querying import PageRequest
from ..services import BlogService
from .pagination import page_request_params

router = APIRouter()


@router.get("", response_model=schemas.ListResponse[schemas.BlogRead])
def list_blogs(database: Database = Depends(get_database)):
    return schemas.ListResponse.from_records(
        BlogService.list_blogs(database), "Blogs retrieved successfully"
    )


@router.get("/filtered", response_model=schemas.PaginatedResponse[schemas.BlogRead])
def filter_blogs(
    category_id: Optional[int] = Query(None),
    author_id: Optional[int] = Query(None),
    status_: Optional[str] = Query(None, alias="status"),
    visibility: Optional[str] = Query(None),
    is_popular: Optional[bool] = Query(None),
    show_on_homepage: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Matches title or short description"),
    page_request: PageRequest = Depends(page_request_params(10)),
    database: Database = Depends(get_database),
):
    filters = {
        "category_id": category_id,
        "author_id": author_id,
        "status": status_,
        "visibility": visibility,
        "is_popular": is_popular,
        "show_on_homepage": show_on_homepage,
        "search": search,
    }
    result = BlogService.filter_blogs(database, filters, page_request)
    return schemas.PaginatedResponse.from_page(result, "Blogs retrieved successfully")


@router.get("/slug/{slug}", response_model=schemas.ApiResponse[schemas.BlogRead])
def get_blog_by_slug(slug: str, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Blog retrieved successfully",
        data=BlogService.get_blog_by_slug(database, slug),
    )


@router.get("/{blog_id}", response_model=schemas.ApiResponse[schemas.BlogRead])
def get_blog(blog_id: int, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Blog retrieved successfully",
        data=BlogService.get_blog(database, blog_id),
    )


@router.post(
    "",
    response_model=schemas.ApiResponse[schemas.BlogRead],
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/create",
    response_model=schemas.ApiResponse[schemas.BlogRead],
    status_code=status.HTTP_201_CREATED,
)
def create_blog(payload: schemas.BlogCreate, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Blog created successfully",
        data=BlogService.create_blog(database, payload),
    )


@router.put("/{blog_id}", response_model=schemas.ApiResponse[schemas.BlogRead])
def update_blog(
    blog_id: int,
    payload: schemas.BlogUpdate,
    database: Database = Depends(get_database),
):
    return schemas.ApiResponse(
        message="Blog updated successfully",
        data=BlogService.update_blog(database, blog_id, payload),
    )


@router.delete("/{blog_id}", response_model=schemas.ApiResponse[schemas.DeletedRecord])
def delete_blog(blog_id: int, database: Database = Depends(get_database)):
    BlogService.delete_blog(database, blog_id)
    return schemas.ApiResponse(
        message="Blog deleted successfully",
        data=schemas.DeletedRecord(id=blog_id),
    )

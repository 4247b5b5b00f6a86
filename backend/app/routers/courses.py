"""API router for the course catalog."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..database import Database, get_database
from ..querying import PageRequest
from ..services import CourseService
from .pagination import page_request_params

router = APIRouter()


@router.get("", response_model=schemas.ListResponse[schemas.CourseRead])
def list_courses(database: Database = Depends(get_database)):
    return schemas.ListResponse.from_records(
        CourseService.list_courses(database), "Courses retrieved successfully"
    )


@router.get("/filtered", response_model=schemas.PaginatedResponse[schemas.CourseRead])
def filter_courses(
    category_id: Optional[int] = Query(None),
    level: Optional[str] = Query(None),
    status_: Optional[str] = Query(None, alias="status"),
    is_free_course: Optional[bool] = Query(None),
    is_top_course: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Matches title or short description"),
    page_request: PageRequest = Depends(page_request_params(10)),
    database: Database = Depends(get_database),
):
    filters = {
        "category_id": category_id,
        "level": level,
        "status": status_,
        "is_free_course": is_free_course,
        "is_top_course": is_top_course,
        "search": search,
    }
    result = CourseService.filter_courses(database, filters, page_request)
    return schemas.PaginatedResponse.from_page(result, "Courses retrieved successfully")


@router.get(
    "/category/{category_id}",
    response_model=schemas.PaginatedResponse[schemas.CourseRead],
)
def courses_by_category(
    category_id: int,
    page_request: PageRequest = Depends(page_request_params(10)),
    database: Database = Depends(get_database),
):
    result = CourseService.courses_by_category(database, category_id, page_request)
    return schemas.PaginatedResponse.from_page(
        result, f"Courses retrieved successfully for category {category_id}"
    )


@router.get("/{course_id}", response_model=schemas.ApiResponse[schemas.CourseRead])
def get_course(course_id: int, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Course retrieved successfully",
        data=CourseService.get_course(database, course_id),
    )


@router.post(
    "",
    response_model=schemas.ApiResponse[schemas.CourseRead],
    status_code=status.HTTP_201_CREATED,
)
def create_course(payload: schemas.CourseCreate, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Course created successfully",
        data=CourseService.create_course(database, payload),
    )


@router.put("/{course_id}", response_model=schemas.ApiResponse[schemas.CourseRead])
def update_course(
    course_id: int,
    payload: schemas.CourseUpdate,
    database: Database = Depends(get_database),
):
    return schemas.ApiResponse(
        message="Course updated successfully",
        data=CourseService.update_course(database, course_id, payload),
    )


@router.delete("/{course_id}", response_model=schemas.ApiResponse[schemas.DeletedRecord])
def delete_course(course_id: int, database: Database = Depends(get_database)):
    CourseService.delete_course(database, course_id)
    return schemas.ApiResponse(
        message="Course deleted successfully",
        data=schemas.DeletedRecord(id=course_id),
    )

"""API router for platform users."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from .. import schemas
from ..database import Database, get_database
from ..models.user import UserRole, UserStatus
from ..querying import PageRequest
from ..services import ImageService, MediaClient, UserService, get_media_client
from ..services.images import read_upload
from .pagination import page_request_params

router = APIRouter()


@router.post(
    "",
    response_model=schemas.ApiResponse[schemas.UserRead],
    status_code=status.HTTP_201_CREATED,
)
def create_user(payload: schemas.UserCreate, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="User created successfully",
        data=UserService.create_user(database, payload),
    )


@router.get("", response_model=schemas.PaginatedResponse[schemas.UserRead])
def list_users(
    role: Optional[UserRole] = Query(None),
    status_: Optional[UserStatus] = Query(None, alias="status"),
    is_instructor: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Matches first name, last name or email"),
    page_request: PageRequest = Depends(page_request_params(20)),
    database: Database = Depends(get_database),
):
    filters = {
        "role": role,
        "status": status_,
        "is_instructor": is_instructor,
        "search": search,
    }
    result = UserService.list_users(database, filters, page_request)
    return schemas.PaginatedResponse.from_page(result, "Users retrieved successfully")


@router.get("/instructors", response_model=schemas.PaginatedResponse[schemas.UserRead])
def list_instructors(
    status_: Optional[UserStatus] = Query(None, alias="status"),
    page_request: PageRequest = Depends(page_request_params(20)),
    database: Database = Depends(get_database),
):
    result = UserService.list_instructors(database, status_, page_request)
    return schemas.PaginatedResponse.from_page(result, "Instructors retrieved successfully")


@router.get("/email/{email}", response_model=schemas.ApiResponse[schemas.UserRead])
def get_user_by_email(email: str, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="User retrieved successfully",
        data=UserService.get_user_by_email(database, email),
    )


@router.get("/{user_id}", response_model=schemas.ApiResponse[schemas.UserRead])
def get_user(user_id: int, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="User retrieved successfully",
        data=UserService.get_user(database, user_id),
    )


@router.put("/{user_id}", response_model=schemas.ApiResponse[schemas.UserRead])
def update_user(
    user_id: int,
    payload: schemas.UserUpdate,
    database: Database = Depends(get_database),
):
    return schemas.ApiResponse(
        message="User updated successfully",
        data=UserService.update_user(database, user_id, payload),
    )


@router.patch("/{user_id}/status", response_model=schemas.ApiResponse[schemas.UserRead])
def change_user_status(
    user_id: int,
    payload: schemas.UserStatusUpdate,
    database: Database = Depends(get_database),
):
    return schemas.ApiResponse(
        message="User status updated successfully",
        data=UserService.change_status(database, user_id, payload.status),
    )


@router.delete("/{user_id}", response_model=schemas.ApiResponse[schemas.DeletedRecord])
def delete_user(user_id: int, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="User deleted successfully",
        data=UserService.delete_user(database, user_id),
    )


@router.post(
    "/{user_id}/profile-image",
    response_model=schemas.ApiResponse[schemas.UploadedImageRead],
    status_code=status.HTTP_201_CREATED,
)
def upload_profile_image(
    user_id: int,
    image: Optional[UploadFile] = File(None),
    database: Database = Depends(get_database),
    media_client: MediaClient = Depends(get_media_client),
):
    UserService.get_user(database, user_id)
    uploaded = ImageService.upload_profile_image(
        media_client,
        filename=image.filename if image else None,
        content_type=image.content_type if image else None,
        content=read_upload(image.file if image else None),
    )
    try:
        UserService.set_profile_image(database, user_id, uploaded.url)
    except Exception:
        ImageService.discard_upload(media_client, uploaded.cloudinary_id)
        raise
    return schemas.ApiResponse(message="Profile image uploaded successfully", data=uploaded)

"""API router for image uploads."""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from .. import schemas
from ..database import Database, get_database
from ..querying import PageRequest
from ..services import ImageService, MediaClient, get_media_client
from ..services.images import read_upload
from .pagination import page_request_params

router = APIRouter()


@router.post(
    "/upload",
    response_model=schemas.ApiResponse[Union[schemas.ImageRead, schemas.UploadedImageRead]],
    status_code=status.HTTP_201_CREATED,
)
def upload_image(
    image: Optional[UploadFile] = File(None),
    folder: Optional[str] = Form(None),
    database: Database = Depends(get_database),
    media_client: MediaClient = Depends(get_media_client),
):
    data, saved = ImageService.upload_image(
        database,
        media_client,
        filename=image.filename if image else None,
        content_type=image.content_type if image else None,
        content=read_upload(image.file if image else None),
        folder=folder,
    )
    message = "Image uploaded successfully"
    if not saved:
        message = "Image uploaded successfully (metadata not saved)"
    return schemas.ApiResponse(message=message, data=data)


@router.get("", response_model=schemas.PaginatedResponse[schemas.ImageRead])
def list_images(
    folder: Optional[str] = Query(None),
    page_request: PageRequest = Depends(page_request_params(20)),
    database: Database = Depends(get_database),
):
    result = ImageService.list_images(database, {"folder": folder}, page_request)
    return schemas.PaginatedResponse.from_page(result, "Images retrieved successfully")


@router.get(
    "/cloudinary/{public_id:path}",
    response_model=schemas.ApiResponse[schemas.ImageRead],
)
def get_image_by_cloudinary_id(public_id: str, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Image retrieved successfully",
        data=ImageService.get_by_cloudinary_id(database, public_id),
    )


@router.get("/{image_id}", response_model=schemas.ApiResponse[schemas.ImageRead])
def get_image(image_id: str, database: Database = Depends(get_database)):
    return schemas.ApiResponse(
        message="Image retrieved successfully",
        data=ImageService.get_image(database, image_id),
    )


@router.delete("/{image_id}", response_model=schemas.ApiResponse[schemas.DeletedRecord])
def delete_image(
    image_id: str,
    database: Database = Depends(get_database),
    media_client: MediaClient = Depends(get_media_client),
):
    return schemas.ApiResponse(
        message="Image deleted successfully",
        data=ImageService.delete_image(database, media_client, image_id),
    )

"""
Image upload endpoints (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from ..auth import dependencies as auth_dependencies
from . import service

router = APIRouter(
    prefix="/api/upload",
    dependencies=[Depends(auth_dependencies.require_admin)],
)


@router.post("")
async def upload_image(image: UploadFile | None = File(default=None)) -> dict:
    """
    Single image for logos, backgrounds and page content.
    """
    return await service.upload_single(image)


@router.post("/house/{house_id}", status_code=201)
async def upload_house_images(
    house_id: int,
    images: list[UploadFile] = File(default=[]),
) -> dict:
    return await service.upload_house_images(house_id, images)


@router.delete("/image/{image_id}")
async def delete_image(image_id: int) -> dict:
    return await service.delete_image(image_id)


@router.put("/image/{image_id}/primary")
async def set_primary_image(image_id: int) -> dict:
    return await service.set_primary_image(image_id)

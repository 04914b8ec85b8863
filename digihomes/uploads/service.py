"""
Upload business logic: store files, link them to houses, clean up orphans.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, UploadFile

from ..core import storage
from ..houses import repository as houses_repository
from . import repository

MAX_FILES_PER_REQUEST = 10

logger = logging.getLogger(__name__)


async def upload_single(file: UploadFile | None) -> dict:
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No image file provided")
    stored = await storage.save_image(file)
    return {"url": stored.url, "filename": stored.filename}


async def upload_house_images(house_id: int, files: list[UploadFile]) -> dict:
    files = [f for f in files if f.filename]
    if not files:
        raise HTTPException(status_code=400, detail="No images uploaded")
    if len(files) > MAX_FILES_PER_REQUEST:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files. Max is {MAX_FILES_PER_REQUEST} per request.",
        )

    stored: list[storage.StoredFile] = []
    try:
        for file in files:
            stored.append(await storage.save_image(file))
    except Exception:
        # Keep the batch all-or-nothing on disk/bucket; the error itself propagates.
        for item in stored:
            await storage.delete_image(item.url)
        raise

    if not await houses_repository.house_exists(house_id):
        for item in stored:
            await storage.delete_image(item.url)
        logger.info("upload_orphans_removed house_id=%s count=%s", house_id, len(stored))
        raise HTTPException(status_code=404, detail="House not found")

    is_first_upload = await repository.count_images(house_id) == 0

    images = []
    for index, item in enumerate(stored):
        images.append(
            await repository.insert_image(
                house_id=house_id,
                image_url=item.url,
                is_primary=is_first_upload and index == 0,
            )
        )

    return {"message": "Images uploaded successfully", "images": images}


async def delete_image(image_id: int) -> dict:
    row = await repository.delete_image(image_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Image not found")

    await storage.delete_image(str(row["image_url"]))
    return {"message": "Image deleted successfully"}


async def set_primary_image(image_id: int) -> dict:
    row = await repository.get_image(image_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Image not found")

    await repository.set_primary_image(house_id=int(row["house_id"]), image_id=image_id)
    return {"message": "Primary image updated successfully"}

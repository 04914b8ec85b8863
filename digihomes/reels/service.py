"""
Reel business logic.
"""

from __future__ import annotations

from fastapi import HTTPException

from . import repository, schemas


async def list_reels() -> list[dict]:
    return await repository.list_active_reels()


async def get_reel(reel_id: int) -> dict:
    row = await repository.get_reel(reel_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Reel not found")
    return row


async def create_reel(payload: schemas.ReelCreate) -> dict:
    title = payload.title.strip()
    media_url = payload.media_url.strip()
    if not title or not media_url:
        raise HTTPException(status_code=400, detail="Title and media URL are required")

    return await repository.insert_reel(
        title=title,
        description=payload.description or "",
        media_url=media_url,
        media_type=(payload.media_type or "").strip() or "image",
        thumbnail_url=(payload.thumbnail_url or "").strip() or None,
        display_order=payload.display_order or 0,
    )


async def update_reel(reel_id: int, payload: schemas.ReelUpdate) -> dict:
    values = payload.model_dump()
    set_thumbnail = "thumbnail_url" in payload.model_fields_set
    if set_thumbnail:
        values["thumbnail_url"] = (payload.thumbnail_url or "").strip() or None

    row = await repository.update_reel(reel_id, values, set_thumbnail=set_thumbnail)
    if row is None:
        raise HTTPException(status_code=404, detail="Reel not found")
    return row


async def delete_reel(reel_id: int) -> dict:
    row = await repository.delete_reel(reel_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Reel not found")
    return {"message": "Reel deleted successfully"}


async def reorder_reels(payload: schemas.ReorderRequest) -> dict:
    if payload.reel_orders is None:
        raise HTTPException(status_code=400, detail="Invalid reorder data")

    await repository.set_display_orders([(item.display_order, item.id) for item in payload.reel_orders])
    return {"message": "Reels reordered successfully"}

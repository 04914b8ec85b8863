"""
Reel API endpoints. Writes need a signed-in user.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth import dependencies as auth_dependencies
from . import schemas, service

router = APIRouter(prefix="/api/reels")


@router.get("")
async def list_reels() -> list[dict]:
    return await service.list_reels()


@router.get("/{reel_id}")
async def get_reel(reel_id: int) -> dict:
    return await service.get_reel(reel_id)


@router.post("", status_code=201)
async def create_reel(
    payload: schemas.ReelCreate,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_reel(payload)


@router.put("/reorder/all")
async def reorder_reels(
    payload: schemas.ReorderRequest,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.reorder_reels(payload)


@router.put("/{reel_id}")
async def update_reel(
    reel_id: int,
    payload: schemas.ReelUpdate,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_reel(reel_id, payload)


@router.delete("/{reel_id}")
async def delete_reel(
    reel_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_reel(reel_id)

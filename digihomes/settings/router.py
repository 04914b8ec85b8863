"""
Settings API endpoints: site settings map, animation timings, and the
location/house-type lookup lists.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth import dependencies as auth_dependencies
from . import schemas, service

router = APIRouter(prefix="/api/settings")


@router.get("")
async def get_settings() -> dict:
    return await service.all_settings()


@router.get("/animations")
async def get_animation_settings() -> dict:
    return await service.animation_settings()


@router.put("/animations")
async def update_animation_settings(
    payload: schemas.AnimationSettingsUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_animation_settings(payload)


@router.get("/locations")
async def list_locations() -> list[dict]:
    return await service.list_lookup("locations")


@router.post("/locations", status_code=201)
async def add_location(
    payload: schemas.NamedItemCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.add_lookup("locations", payload)


@router.delete("/locations/{item_id}")
async def delete_location(
    item_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.remove_lookup("locations", item_id)


@router.get("/house-types")
async def list_house_types() -> list[dict]:
    return await service.list_lookup("house_types")


@router.post("/house-types", status_code=201)
async def add_house_type(
    payload: schemas.NamedItemCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.add_lookup("house_types", payload)


@router.delete("/house-types/{item_id}")
async def delete_house_type(
    item_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.remove_lookup("house_types", item_id)


# Registered last so the fixed paths above win.
@router.put("/{key}")
async def update_setting(
    key: str,
    payload: schemas.SettingUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_setting(key, payload)

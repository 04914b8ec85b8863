"""
Settings business logic.

Settings are an open key -> JSON map; the frontend owns the shape of each
value. Only `animation_settings` is validated, because its numbers drive
client-side timers.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException

from . import repository, schemas

ANIMATION_KEY = "animation_settings"

ANIMATION_DEFAULTS: dict[str, float | int] = {
    "baseDelay": 100,
    "cardStaggerMultiplier": 1,
    "heroStaggerMultiplier": 1.5,
    "sectionStaggerMultiplier": 1.2,
    "heroTextDelay": 300,
    "statsCountDuration": 2000,
}

# name -> (min, max, cast)
ANIMATION_BOUNDS: dict[str, tuple[float, float, type]] = {
    "baseDelay": (50, 500, int),
    "cardStaggerMultiplier": (0.5, 5, float),
    "heroStaggerMultiplier": (0.5, 5, float),
    "sectionStaggerMultiplier": (0.5, 5, float),
    "heroTextDelay": (100, 2000, int),
    "statsCountDuration": (500, 5000, int),
}

LOOKUP_LABELS = {"locations": "Location", "house_types": "House type"}


async def all_settings() -> dict[str, Any]:
    rows = await repository.list_settings()
    return {str(r["setting_key"]): r["setting_value"] for r in rows}


async def update_setting(key: str, payload: schemas.SettingUpdate) -> dict:
    key = (key or "").strip()
    if not key or payload.value is None:
        raise HTTPException(status_code=400, detail="Key and value are required")
    return await repository.upsert_setting(key, payload.value)


def _clamp(name: str, raw: Any) -> float | int:
    low, high, cast = ANIMATION_BOUNDS[name]
    try:
        value = cast(float(raw))
    except (TypeError, ValueError, OverflowError):
        value = 0
    if not value:
        value = ANIMATION_DEFAULTS[name]
    return cast(max(low, min(high, value)))


async def animation_settings() -> dict[str, Any]:
    stored = await repository.get_setting(ANIMATION_KEY)
    if not isinstance(stored, dict):
        return dict(ANIMATION_DEFAULTS)
    return {**ANIMATION_DEFAULTS, **stored}


async def update_animation_settings(payload: schemas.AnimationSettingsUpdate) -> dict[str, Any]:
    values = {name: _clamp(name, getattr(payload, name)) for name in ANIMATION_BOUNDS}
    await repository.upsert_setting(ANIMATION_KEY, values)
    return values


async def list_lookup(table: str) -> list[dict]:
    return await repository.list_active(table)


async def add_lookup(table: str, payload: schemas.NamedItemCreate) -> dict:
    name = payload.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail=f"{LOOKUP_LABELS[table]} name is required")
    return await repository.add_or_reactivate(table, name)


async def remove_lookup(table: str, item_id: int) -> dict:
    row = await repository.deactivate(table, item_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"{LOOKUP_LABELS[table]} not found")
    return {"message": f"{LOOKUP_LABELS[table]} removed"}

"""
House API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth import dependencies as auth_dependencies
from . import schemas, service

router = APIRouter(prefix="/api/houses")


@router.get("")
async def list_houses(
    location: str | None = Query(default=None),
    house_type: str | None = Query(default=None),
    status: str | None = Query(default=None),
    property_type: str | None = Query(default=None),
    listing_type: str | None = Query(default=None),
    town: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
) -> list[dict]:
    """
    Public listing. Every supplied filter narrows the result (AND).
    """
    filters = schemas.HouseFilters(
        location=location,
        house_type=house_type,
        status=status,
        property_type=property_type,
        listing_type=listing_type,
        town=town,
        search=search,
    )
    return await service.list_houses(filters)


@router.get("/types")
async def house_types() -> list[str]:
    return await service.house_types_in_use()


@router.get("/admin/stats")
async def dashboard_stats(_: dict = Depends(auth_dependencies.require_admin)) -> dict:
    return await service.dashboard_stats()


@router.get("/{house_id}")
async def get_house(house_id: int) -> dict:
    return await service.get_house(house_id)


@router.post("", status_code=201)
async def create_house(
    payload: schemas.HouseWrite,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_house(payload)


@router.put("/{house_id}")
async def update_house(
    house_id: int,
    payload: schemas.HouseWrite,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_house(house_id, payload)


@router.delete("/{house_id}")
async def delete_house(
    house_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_house(house_id)

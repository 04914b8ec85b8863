"""
House business logic: input cleaning and not-found handling.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi import HTTPException

from . import repository, schemas

DEFAULT_PROPERTY_TYPE = "house"
DEFAULT_LISTING_TYPE = "rent"
DEFAULT_VACANCY_STATUS = "available"

# Columns an update may set to NULL by sending null or "" explicitly.
CLEARABLE_COLUMNS = {"size_acres", "dimensions"}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_int(value: Any) -> int | None:
    if _blank(value):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _to_decimal(value: Any) -> Decimal | None:
    if _blank(value):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _to_text(value: Any) -> str | None:
    if _blank(value):
        return None
    return str(value).strip()


def _clean(payload: schemas.HouseWrite) -> dict[str, Any]:
    return {
        "title": _to_text(payload.title),
        "description": payload.description,
        "location": _to_text(payload.location),
        "town": _to_text(payload.town),
        "house_type": _to_text(payload.house_type),
        "property_type": _to_text(payload.property_type),
        "listing_type": _to_text(payload.listing_type),
        "bedrooms": _to_int(payload.bedrooms),
        "bathrooms": _to_int(payload.bathrooms),
        "size_acres": _to_decimal(payload.size_acres),
        "dimensions": _to_text(payload.dimensions),
        "rent_price": _to_decimal(payload.rent_price),
        "vacancy_status": _to_text(payload.vacancy_status),
        "featured": payload.featured,
        "internal_features": payload.internal_features,
        "external_features": payload.external_features,
        "land_features": payload.land_features,
    }


async def list_houses(filters: schemas.HouseFilters) -> list[dict]:
    return await repository.list_houses(filters)


async def get_house(house_id: int) -> dict:
    row = await repository.get_house(house_id)
    if row is None:
        raise HTTPException(status_code=404, detail="House not found")
    return row


async def create_house(payload: schemas.HouseWrite) -> dict:
    values = _clean(payload)
    if not values["title"] or not values["location"] or values["rent_price"] is None:
        raise HTTPException(status_code=400, detail="Title, location, and price are required")

    values.update(
        house_type=values["house_type"] or "",
        property_type=values["property_type"] or DEFAULT_PROPERTY_TYPE,
        listing_type=values["listing_type"] or DEFAULT_LISTING_TYPE,
        bedrooms=values["bedrooms"] or 1,
        bathrooms=values["bathrooms"] or 1,
        vacancy_status=values["vacancy_status"] or DEFAULT_VACANCY_STATUS,
        featured=bool(values["featured"]),
        internal_features=values["internal_features"] or [],
        external_features=values["external_features"] or [],
        land_features=values["land_features"] or [],
    )
    return await repository.insert_house(values)


async def update_house(house_id: int, payload: schemas.HouseWrite) -> dict:
    values = _clean(payload)
    # A clearable column is overwritten only when the client sent the key.
    overwrite = CLEARABLE_COLUMNS & payload.model_fields_set

    row = await repository.update_house(house_id, values, overwrite=overwrite)
    if row is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return row


async def delete_house(house_id: int) -> dict:
    row = await repository.delete_house(house_id)
    if row is None:
        raise HTTPException(status_code=404, detail="House not found")
    return {"message": "House deleted successfully"}


async def house_types_in_use() -> list[str]:
    return await repository.list_house_types_in_use()


async def dashboard_stats() -> dict:
    counts = await repository.dashboard_counts()
    totals = counts["totals"]
    return {
        "totalHouses": int(totals.get("total_houses") or 0),
        "availableHouses": int(totals.get("available_houses") or 0),
        "occupiedHouses": int(totals.get("occupied_houses") or 0),
        "subscribers": int(totals.get("subscribers") or 0),
        "byLocation": {str(r["location"]): int(r["count"]) for r in counts["by_location"]},
    }

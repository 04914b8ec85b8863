"""
House persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from ..core import db
from .schemas import HouseFilters

# One row per house with its images folded into a JSON array.
HOUSE_SELECT = """
SELECT h.*,
  COALESCE(
    json_agg(
      json_build_object('id', hi.id, 'image_url', hi.image_url, 'is_primary', hi.is_primary)
      ORDER BY hi.is_primary DESC, hi.id
    ) FILTER (WHERE hi.id IS NOT NULL),
    '[]'
  ) AS images
FROM houses h
LEFT JOIN house_images hi ON h.id = hi.house_id
"""

# (query field, SQL column) for exact-match filters, in clause order.
EXACT_FILTERS = (
    ("location", "h.location"),
    ("house_type", "h.house_type"),
    ("status", "h.vacancy_status"),
    ("property_type", "h.property_type"),
    ("listing_type", "h.listing_type"),
    ("town", "h.town"),
)

HOUSE_COLUMNS = (
    "title",
    "description",
    "location",
    "town",
    "house_type",
    "property_type",
    "listing_type",
    "bedrooms",
    "bathrooms",
    "size_acres",
    "dimensions",
    "rent_price",
    "vacancy_status",
    "featured",
    "internal_features",
    "external_features",
    "land_features",
)

JSON_COLUMNS = {"internal_features", "external_features", "land_features"}


def build_list_query(filters: HouseFilters) -> tuple[str, list[Any]]:
    """
    Build the listing query: one AND clause with one positional parameter
    per supplied filter. Blank filters are ignored.
    """
    clauses: list[str] = []
    args: list[Any] = []

    for field, column in EXACT_FILTERS:
        value = (getattr(filters, field) or "").strip()
        if not value:
            continue
        args.append(value)
        clauses.append(f"{column} = ${len(args)}")

    search = (filters.search or "").strip()
    if search:
        args.append(f"%{search}%")
        n = len(args)
        clauses.append(f"(h.title ILIKE ${n} OR h.description ILIKE ${n})")

    where = "WHERE " + " AND ".join(clauses) if clauses else ""
    sql = f"{HOUSE_SELECT} {where} GROUP BY h.id ORDER BY h.featured DESC, h.created_at DESC"
    return sql, args


async def list_houses(filters: HouseFilters) -> list[dict[str, Any]]:
    sql, args = build_list_query(filters)
    return await db.fetch_all(sql, *args)


async def get_house(house_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"{HOUSE_SELECT} WHERE h.id = $1 GROUP BY h.id",
        house_id,
    )


async def house_exists(house_id: int) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM houses WHERE id = $1", house_id)
    return row is not None


async def insert_house(values: dict[str, Any]) -> dict[str, Any]:
    columns = [c for c in HOUSE_COLUMNS if c in values]
    placeholders = [
        f"${i}::jsonb" if c in JSON_COLUMNS else f"${i}"
        for i, c in enumerate(columns, start=1)
    ]
    row = await db.fetch_one(
        f"""
        INSERT INTO houses ({", ".join(columns)})
        VALUES ({", ".join(placeholders)})
        RETURNING *
        """,
        *[values[c] for c in columns],
    )
    if row is None:
        raise RuntimeError("Failed to create house.")
    return row


def build_update_query(house_id: int, values: dict[str, Any], *, overwrite: set[str]) -> tuple[str, list[Any]]:
    """
    Every column keeps its current value when the given value is None,
    except columns listed in `overwrite`, which are assigned as-is.
    """
    assignments: list[str] = []
    args: list[Any] = []
    for column in HOUSE_COLUMNS:
        args.append(values.get(column))
        param = f"${len(args)}"
        if column in JSON_COLUMNS:
            param += "::jsonb"
        if column in overwrite:
            assignments.append(f"{column} = {param}")
        else:
            assignments.append(f"{column} = COALESCE({param}, {column})")

    args.append(house_id)
    sql = f"""
        UPDATE houses
        SET {", ".join(assignments)},
            updated_at = CURRENT_TIMESTAMP
        WHERE id = ${len(args)}
        RETURNING *
    """
    return sql, args


async def update_house(house_id: int, values: dict[str, Any], *, overwrite: set[str]) -> dict[str, Any] | None:
    sql, args = build_update_query(house_id, values, overwrite=overwrite)
    return await db.fetch_one(sql, *args)


async def delete_house(house_id: int) -> dict[str, Any] | None:
    return await db.fetch_one("DELETE FROM houses WHERE id = $1 RETURNING id", house_id)


async def list_house_types_in_use() -> list[str]:
    rows = await db.fetch_all(
        """
        SELECT DISTINCT house_type
        FROM houses
        WHERE house_type IS NOT NULL AND house_type <> ''
        ORDER BY house_type
        """
    )
    return [str(r["house_type"]) for r in rows]


async def dashboard_counts() -> dict[str, Any]:
    row = await db.fetch_one(
        """
        SELECT
          (SELECT count(*) FROM houses) AS total_houses,
          (SELECT count(*) FROM houses WHERE vacancy_status = 'available') AS available_houses,
          (SELECT count(*) FROM houses WHERE vacancy_status = 'occupied') AS occupied_houses,
          (SELECT count(*) FROM newsletter_subscribers) AS subscribers
        """
    )
    by_location = await db.fetch_all(
        """
        SELECT location, count(*) AS count
        FROM houses
        GROUP BY location
        ORDER BY location
        """
    )
    return {"totals": row or {}, "by_location": by_location}

"""
Site settings, locations and house types persistence.
"""

from __future__ import annotations

from typing import Any

from ..core import db

# Lookup tables share one shape: (id, name, is_active, created_at).
LOOKUP_TABLES = {"locations", "house_types"}


async def list_settings() -> list[dict[str, Any]]:
    return await db.fetch_all("SELECT setting_key, setting_value FROM site_settings ORDER BY setting_key")


async def get_setting(key: str) -> Any:
    row = await db.fetch_one(
        "SELECT setting_value FROM site_settings WHERE setting_key = $1",
        key,
    )
    return None if row is None else row["setting_value"]


async def upsert_setting(key: str, value: Any) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO site_settings (setting_key, setting_value, updated_at)
        VALUES ($1, $2::jsonb, CURRENT_TIMESTAMP)
        ON CONFLICT (setting_key)
        DO UPDATE SET setting_value = EXCLUDED.setting_value,
                      updated_at = CURRENT_TIMESTAMP
        RETURNING id, setting_key, setting_value, updated_at
        """,
        key,
        value,
    )
    if row is None:
        raise RuntimeError("Failed to upsert setting.")
    return row


def _lookup_table(table: str) -> str:
    if table not in LOOKUP_TABLES:
        raise ValueError(f"Unknown lookup table: {table}")
    return table


async def list_active(table: str) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"SELECT id, name, is_active, created_at FROM {_lookup_table(table)} WHERE is_active = true ORDER BY name"
    )


async def add_or_reactivate(table: str, name: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO {_lookup_table(table)} (name)
        VALUES ($1)
        ON CONFLICT (name) DO UPDATE SET is_active = true
        RETURNING id, name, is_active, created_at
        """,
        name,
    )
    if row is None:
        raise RuntimeError(f"Failed to upsert {table} row.")
    return row


async def deactivate(table: str, item_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"UPDATE {_lookup_table(table)} SET is_active = false WHERE id = $1 RETURNING id",
        item_id,
    )

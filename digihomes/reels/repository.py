"""
Reel persistence.
"""

from __future__ import annotations

from typing import Any

from ..core import db


async def list_active_reels() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT *
        FROM digi_reels
        WHERE is_active = true
        ORDER BY display_order ASC, created_at DESC
        """
    )


async def get_reel(reel_id: int) -> dict[str, Any] | None:
    return await db.fetch_one("SELECT * FROM digi_reels WHERE id = $1", reel_id)


async def insert_reel(
    *,
    title: str,
    description: str,
    media_url: str,
    media_type: str,
    thumbnail_url: str | None,
    display_order: int,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO digi_reels (title, description, media_url, media_type, thumbnail_url, display_order)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING *
        """,
        title,
        description,
        media_url,
        media_type,
        thumbnail_url,
        display_order,
    )
    if row is None:
        raise RuntimeError("Failed to create reel.")
    return row


async def update_reel(reel_id: int, values: dict[str, Any], *, set_thumbnail: bool) -> dict[str, Any] | None:
    """
    Keep-existing-if-null for every column; thumbnail_url is assigned as-is
    when `set_thumbnail` is true so it can be cleared.
    """
    thumbnail_sql = "$5" if set_thumbnail else "COALESCE($5, thumbnail_url)"
    return await db.fetch_one(
        f"""
        UPDATE digi_reels
        SET title = COALESCE($1, title),
            description = COALESCE($2, description),
            media_url = COALESCE($3, media_url),
            media_type = COALESCE($4, media_type),
            thumbnail_url = {thumbnail_sql},
            is_active = COALESCE($6, is_active),
            display_order = COALESCE($7, display_order),
            updated_at = CURRENT_TIMESTAMP
        WHERE id = $8
        RETURNING *
        """,
        values.get("title"),
        values.get("description"),
        values.get("media_url"),
        values.get("media_type"),
        values.get("thumbnail_url"),
        values.get("is_active"),
        values.get("display_order"),
        reel_id,
    )


async def delete_reel(reel_id: int) -> dict[str, Any] | None:
    return await db.fetch_one("DELETE FROM digi_reels WHERE id = $1 RETURNING id", reel_id)


async def set_display_orders(orders: list[tuple[int, int]]) -> None:
    """
    `orders` holds (display_order, id) pairs.
    """
    if not orders:
        return None
    await db.execute_many(
        "UPDATE digi_reels SET display_order = $1, updated_at = CURRENT_TIMESTAMP WHERE id = $2",
        orders,
    )

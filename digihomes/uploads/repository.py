"""
House image persistence.
"""

from __future__ import annotations

from typing import Any

from ..core import db


async def count_images(house_id: int) -> int:
    count = await db.fetch_val("SELECT count(*) FROM house_images WHERE house_id = $1", house_id)
    return int(count or 0)


async def insert_image(*, house_id: int, image_url: str, is_primary: bool) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO house_images (house_id, image_url, is_primary)
        VALUES ($1, $2, $3)
        RETURNING id, house_id, image_url, is_primary, created_at
        """,
        house_id,
        image_url,
        is_primary,
    )
    if row is None:
        raise RuntimeError("Failed to insert house image.")
    return row


async def get_image(image_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        "SELECT id, house_id, image_url, is_primary, created_at FROM house_images WHERE id = $1",
        image_id,
    )


async def delete_image(image_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        "DELETE FROM house_images WHERE id = $1 RETURNING id, house_id, image_url, is_primary",
        image_id,
    )


async def set_primary_image(*, house_id: int, image_id: int) -> None:
    # One statement: the target becomes primary and every sibling is cleared.
    await db.execute(
        """
        UPDATE house_images
        SET is_primary = (id = $2)
        WHERE house_id = $1
        """,
        house_id,
        image_id,
    )

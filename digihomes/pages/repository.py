"""
Page persistence.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from ..core import db

PAGE_COLUMNS = "id, slug, title, content, is_active, created_at, updated_at"


class PageExistsError(RuntimeError):
    pass


async def list_active_pages() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {PAGE_COLUMNS} FROM pages WHERE is_active = true ORDER BY title")


async def get_page(slug: str) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {PAGE_COLUMNS} FROM pages WHERE slug = $1", slug)


async def create_page(*, slug: str, title: str, content: Any) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO pages (slug, title, content)
            VALUES ($1, $2, $3::jsonb)
            RETURNING {PAGE_COLUMNS}
            """,
            slug,
            title,
            content,
        )
    except asyncpg.UniqueViolationError as exc:
        raise PageExistsError(slug) from exc
    if row is None:
        raise RuntimeError("Failed to create page.")
    return row


def build_update_query(slug: str, updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """
    SET only the supplied columns; updated_at is always bumped.
    """
    assignments: list[str] = []
    args: list[Any] = []
    for column in ("title", "content", "is_active"):
        if column not in updates:
            continue
        args.append(updates[column])
        cast = "::jsonb" if column == "content" else ""
        assignments.append(f"{column} = ${len(args)}{cast}")

    assignments.append("updated_at = CURRENT_TIMESTAMP")
    args.append(slug)
    sql = f"UPDATE pages SET {', '.join(assignments)} WHERE slug = ${len(args)} RETURNING {PAGE_COLUMNS}"
    return sql, args


async def update_page(slug: str, updates: dict[str, Any]) -> dict[str, Any] | None:
    sql, args = build_update_query(slug, updates)
    return await db.fetch_one(sql, *args)


async def delete_page(slug: str) -> dict[str, Any] | None:
    return await db.fetch_one("DELETE FROM pages WHERE slug = $1 RETURNING id", slug)


async def rename_slug(*, old_slug: str, new_slug: str, new_title: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE pages
        SET slug = $1, title = $2, updated_at = CURRENT_TIMESTAMP
        WHERE slug = $3
        RETURNING {PAGE_COLUMNS}
        """,
        new_slug,
        new_title,
        old_slug,
    )

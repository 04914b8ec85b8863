"""
Newsletter subscriber persistence.
"""

from __future__ import annotations

from typing import Any

from ..core import db


async def get_by_email(email: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        "SELECT id, email, name, verified FROM newsletter_subscribers WHERE email = $1",
        email,
    )


async def delete_subscriber(subscriber_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        "DELETE FROM newsletter_subscribers WHERE id = $1 RETURNING id",
        subscriber_id,
    )


async def insert_subscriber(*, email: str, name: str, verification_token: str) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO newsletter_subscribers (email, name, verification_token, verified)
        VALUES ($1, $2, $3, false)
        RETURNING *
        """,
        email,
        name,
        verification_token,
    )
    if row is None:
        raise RuntimeError("Failed to insert subscriber.")
    return row


async def mark_verified(subscriber_id: int) -> None:
    await db.execute(
        "UPDATE newsletter_subscribers SET verified = true WHERE id = $1",
        subscriber_id,
    )


async def verify_token(token: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        UPDATE newsletter_subscribers
        SET verified = true, verification_token = NULL
        WHERE verification_token = $1
        RETURNING id, email, name, verified, created_at
        """,
        token,
    )


async def list_subscribers() -> list[dict[str, Any]]:
    return await db.fetch_all(
        "SELECT id, email, name, verified, created_at FROM newsletter_subscribers ORDER BY created_at DESC"
    )


async def list_verified(subscriber_ids: list[int] | None = None) -> list[dict[str, Any]]:
    if subscriber_ids:
        return await db.fetch_all(
            """
            SELECT id, email, name
            FROM newsletter_subscribers
            WHERE verified = true
              AND id = ANY($1::int[])
            ORDER BY id
            """,
            subscriber_ids,
        )
    return await db.fetch_all(
        "SELECT id, email, name FROM newsletter_subscribers WHERE verified = true ORDER BY id"
    )

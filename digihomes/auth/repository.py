"""
Users table access. Emails are stored and compared lowercased.
"""

from __future__ import annotations

from typing import Any

from ..core import db

USER_COLUMNS = "id, name, email, password, role, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_user_by_email(email: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"SELECT {USER_COLUMNS} FROM users WHERE lower(email) = $1",
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE id = $1", user_id)


async def update_password(user_id: int, password_hash: str) -> None:
    await db.execute("UPDATE users SET password = $2 WHERE id = $1", user_id, password_hash)

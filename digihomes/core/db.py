"""
PostgreSQL access through a process-wide asyncpg pool.

The app lifespan opens the pool before the first request and closes it on
shutdown. Queries are raw SQL with $1..$n placeholders; rows come back as
plain dicts. json/jsonb values are (de)serialized by a per-connection codec,
so callers pass and receive Python lists and dicts.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Sequence

import asyncpg

from . import config

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


async def _register_json_codecs(conn: asyncpg.Connection) -> None:
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(type_name, encoder=json.dumps, decoder=json.loads, schema="pg_catalog")


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return
    min_size, max_size = config.db_pool_min(), config.db_pool_max()
    _pool = await asyncpg.create_pool(
        dsn=config.database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=30,
        # Hosted Postgres requires TLS outside development.
        ssl=None if config.is_development() else "require",
        init=_register_json_codecs,
    )
    logger.info("db_pool_ready min=%s max=%s", min_size, max_size)


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool is not initialized.")
    return _pool


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    row = await pool().fetchrow(sql, *args)
    return None if row is None else dict(row)


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    return [dict(row) for row in await pool().fetch(sql, *args)]


async def fetch_val(sql: str, *args: Any) -> Any:
    return await pool().fetchval(sql, *args)


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement and return its status tag (e.g. "UPDATE 3").
    """
    return await pool().execute(sql, *args)


async def execute_many(sql: str, args: Iterable[Sequence[Any]]) -> None:
    await pool().executemany(sql, args)

"""
Rename the `rent` page to `rentals`.

Does nothing when `rent` is missing or `rentals` already exists, so it is
safe to run more than once.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from ..core import db
from ..pages import repository as pages_repository

logger = logging.getLogger(__name__)


async def migrate() -> bool:
    if await pages_repository.get_page("rent") is None:
        logger.info("no page with slug 'rent'; nothing to migrate")
        return False
    if await pages_repository.get_page("rentals") is not None:
        logger.warning("page 'rentals' already exists; skipping")
        return False

    row = await pages_repository.rename_slug(old_slug="rent", new_slug="rentals", new_title="Rentals")
    logger.info("migrated page slug rent -> rentals id=%s", row["id"] if row else None)
    return row is not None


async def main() -> int:
    await db.init_pool()
    try:
        await migrate()
    except Exception:
        logger.exception("migration_failed")
        return 1
    finally:
        await db.close_pool()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    sys.exit(asyncio.run(main()))

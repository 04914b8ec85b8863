"""
Load demo data into a development database.

Destructive: houses, images, subscribers and users are wiped first, then
the default rows and a set of sample listings are inserted.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from decimal import Decimal

from .. import seed
from ..core import config, db, schema

logger = logging.getLogger(__name__)

SAMPLE_HOUSES = [
    ("Modern 2 Bedroom Apartment", "Beautiful modern apartment with spacious rooms and ample natural lighting.", "Nakuru", "2 Bedroom", 2, 1, 15000, "available", True),
    ("Cozy 1 Bedroom Studio", "Perfect starter home for singles or couples. Secure parking.", "Nakuru", "1 Bedroom", 1, 1, 8500, "available", False),
    ("Spacious 3 Bedroom Family Home", "Large living area, modern kitchen and a small garden near schools.", "Nakuru", "3 Bedroom", 3, 2, 25000, "occupied", True),
    ("Executive 2 Bedroom Apartment", "High-end finishing, 24/7 security and backup water supply.", "Nyahururu", "2 Bedroom", 2, 2, 18000, "available", True),
    ("Budget-Friendly Bedsitter", "Affordable and clean bedsitter. Water and electricity included.", "Nyahururu", "Bedsitter", 1, 1, 5000, "available", False),
    ("Luxurious 4 Bedroom Villa", "Premium villa with a large compound and servant quarters.", "Nakuru", "4 Bedroom", 4, 3, 45000, "available", True),
    ("Single Room with Kitchen", "Self-contained single room with a private kitchen area.", "Nyahururu", "Single Room", 1, 1, 3500, "occupied", False),
    ("Modern 1 Bedroom Apartment", "Newly built apartment with tiled floors and a fitted kitchen.", "Nyahururu", "1 Bedroom", 1, 1, 7500, "available", False),
]

SAMPLE_SUBSCRIBERS = [
    ("john.doe@email.com", "John"),
    ("jane.smith@gmail.com", "Jane"),
    ("tenant@example.com", "Tenant"),
]


async def load_samples() -> None:
    await schema.init_schema()
    await db.execute("DELETE FROM house_images")
    await db.execute("DELETE FROM houses")
    await db.execute("DELETE FROM newsletter_subscribers")
    await db.execute("DELETE FROM users")
    logger.info("existing data cleared")

    await seed.seed_defaults()

    await db.execute_many(
        """
        INSERT INTO houses (title, description, location, house_type, bedrooms, bathrooms,
                            rent_price, vacancy_status, featured)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        """,
        [(*row[:6], Decimal(row[6]), *row[7:]) for row in SAMPLE_HOUSES],
    )
    await db.execute_many(
        "INSERT INTO newsletter_subscribers (email, name, verified) VALUES ($1, $2, true)",
        SAMPLE_SUBSCRIBERS,
    )
    logger.info(
        "sample data loaded houses=%s subscribers=%s admin=%s",
        len(SAMPLE_HOUSES),
        len(SAMPLE_SUBSCRIBERS),
        config.admin_email(),
    )


async def main() -> int:
    if not config.is_development():
        logger.error("refusing to wipe a non-development database (APP_ENV=%s)", config.app_env())
        return 1

    await db.init_pool()
    try:
        await load_samples()
    except Exception:
        logger.exception("seed_failed")
        return 1
    finally:
        await db.close_pool()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    sys.exit(asyncio.run(main()))

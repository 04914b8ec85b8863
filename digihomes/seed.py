"""
Default rows inserted on startup.

Each group is inserted only when its table is empty (the admin user only when
the configured admin email is absent), so admins' later edits are never
overwritten.
"""

from __future__ import annotations

import logging
from typing import Any

from .auth import security
from .core import config, db

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = ["Nakuru", "Nyahururu"]

DEFAULT_HOUSE_TYPES = ["Bedsitter", "1 Bedroom", "2 Bedroom", "3 Bedroom", "Studio", "Apartment"]

DEFAULT_PAGES: list[dict[str, Any]] = [
    {
        "slug": "services",
        "title": "Our Services",
        "content": {
            "hero": {
                "title": "Our Services",
                "subtitle": "Professional property services tailored to your needs",
                "backgroundImage": "",
            },
            "sections": [
                {
                    "title": "Property Management",
                    "description": "Complete property management services for landlords",
                    "icon": "Building",
                    "items": ["Tenant screening", "Rent collection", "Maintenance coordination"],
                },
                {
                    "title": "Rental Services",
                    "description": "Find your perfect rental home with our expert guidance",
                    "icon": "Home",
                    "items": ["Property viewing", "Lease negotiation", "Move-in assistance"],
                },
                {
                    "title": "Consultation",
                    "description": "Expert advice on property investment and management",
                    "icon": "Users",
                    "items": ["Market analysis", "Investment advice", "Legal guidance"],
                },
            ],
        },
    },
    {
        "slug": "buy",
        "title": "Buy Property",
        "content": {
            "hero": {
                "title": "Buy Your Dream Home",
                "subtitle": "Explore properties available for purchase",
                "backgroundImage": "",
            },
            "sections": [],
            "properties": [],
        },
    },
    {
        "slug": "rent",
        "title": "Rent Property",
        "content": {
            "hero": {
                "title": "Find Your Perfect Rental",
                "subtitle": "Quality rental properties in Nakuru & Nyahururu",
                "backgroundImage": "",
            },
            "sections": [],
            "filterOptions": {
                "locations": ["Nakuru", "Nyahururu"],
                "types": ["Bedsitter", "1 Bedroom", "2 Bedroom", "3 Bedroom"],
            },
        },
    },
]

DEFAULT_SETTINGS: dict[str, Any] = {
    "brand_settings": {
        "name": "DIGIHOMES",
        "splitPosition": 4,
        "primaryColor": "#2563eb",
        "secondaryColor": "#dc2626",
        "logo": "",
        "themeColor": "#2563eb",
    },
    "animation_settings": {"duration": 700, "staggerDelay": 100},
    "hero_stats": [
        {"value": "100+", "label": "Happy Tenants"},
        {"value": "50+", "label": "Properties"},
        {"value": "2", "label": "Locations"},
        {"value": "5+", "label": "Years Experience"},
    ],
    "features": [
        {"icon": "Building", "title": "Quality Homes", "description": "Carefully selected properties that meet our high standards."},
        {"icon": "MapPin", "title": "Prime Locations", "description": "Properties in Nakuru and Nyahururu with easy access to amenities."},
        {"icon": "Shield", "title": "Trusted Agency", "description": "Years of experience helping families find their perfect homes."},
        {"icon": "Clock", "title": "Quick Process", "description": "Streamlined rental process to get you into your new home faster."},
    ],
    "company_info": {
        "name": "DIGIHOMES AGENCIES",
        "tagline": "WE CARE ALWAYS",
        "phone": "+254 700 000 000",
        "phone2": "",
        "email": "info@digihomes.co.ke",
        "whatsapp": "",
        "facebook": "",
        "instagram": "",
        "twitter": "",
        "logo": "",
    },
    "hero_content": {
        "title": "Find Your Perfect Home in",
        "highlight": "Nakuru & Nyahururu",
        "description": "DIGI Homes Agencies is your trusted partner in finding quality rental properties.",
        "backgroundImage": "",
        "backgroundImageMobile": "",
        "overlayColor": "#000000",
        "overlayColorMobile": "#000000",
        "overlayOpacity": 0.5,
        "overlayOpacityMobile": 0.6,
    },
    "features_section": {
        "title": "Why Choose DIGIHOMES?",
        "subtitle": "We're committed to making your house-hunting experience smooth and successful.",
    },
    "houses_section": {
        "title": "Available Houses",
        "subtitle": "Explore our selection of quality rental properties",
    },
    "locations_section": {
        "title": "Our Locations",
        "subtitle": "We operate in two beautiful towns in Kenya's Rift Valley region",
        "locations": [],
    },
    "footer_content": {
        "tagline": "Your trusted partner in finding the perfect home.",
        "description": "",
        "quickLinks": [],
        "contactLocations": [],
        "contactPhones": [],
        "contactEmail": "",
        "backgroundColor": "#111827",
        "textColor": "#9ca3af",
    },
    "contact_page": {
        "title": "Get in Touch",
        "subtitle": "Have questions? We'd love to hear from you.",
        "workingHours": [],
        "offices": [],
        "faqs": [],
    },
    "digi_posts": {
        "title": "Digi Posts",
        "subtitle": "Stay updated with our latest news and announcements",
        "posts": [],
    },
}


async def _table_is_empty(table: str) -> bool:
    # `table` is always one of the literals below, never user input.
    count = await db.fetch_val(f"SELECT COUNT(*) FROM {table}")
    return int(count or 0) == 0


async def seed_admin() -> None:
    email = config.admin_email()
    existing = await db.fetch_one("SELECT id FROM users WHERE lower(email) = $1", email)
    if existing is not None:
        return
    await db.execute(
        "INSERT INTO users (name, email, password, role) VALUES ($1, $2, $3, 'admin')",
        "Admin",
        email,
        security.hash_password(config.admin_password()),
    )
    logger.info("seed_admin_created email=%s", email)


async def seed_defaults() -> None:
    await seed_admin()

    if await _table_is_empty("locations"):
        await db.execute_many(
            "INSERT INTO locations (name) VALUES ($1) ON CONFLICT DO NOTHING",
            [(name,) for name in DEFAULT_LOCATIONS],
        )
        logger.info("seed_locations_created count=%s", len(DEFAULT_LOCATIONS))

    if await _table_is_empty("house_types"):
        await db.execute_many(
            "INSERT INTO house_types (name) VALUES ($1) ON CONFLICT DO NOTHING",
            [(name,) for name in DEFAULT_HOUSE_TYPES],
        )
        logger.info("seed_house_types_created count=%s", len(DEFAULT_HOUSE_TYPES))

    if await _table_is_empty("pages"):
        await db.execute_many(
            "INSERT INTO pages (slug, title, content) VALUES ($1, $2, $3::jsonb) ON CONFLICT (slug) DO NOTHING",
            [(page["slug"], page["title"], page["content"]) for page in DEFAULT_PAGES],
        )
        logger.info("seed_pages_created count=%s", len(DEFAULT_PAGES))

    if await _table_is_empty("site_settings"):
        await db.execute_many(
            """
            INSERT INTO site_settings (setting_key, setting_value)
            VALUES ($1, $2::jsonb)
            ON CONFLICT (setting_key) DO NOTHING
            """,
            list(DEFAULT_SETTINGS.items()),
        )
        logger.info("seed_settings_created count=%s", len(DEFAULT_SETTINGS))

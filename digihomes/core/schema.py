"""
Idempotent schema bootstrap.

Runs on every process start: tables are created if missing, then columns
added later in the project's life are added if missing. Safe to re-run.
"""

from __future__ import annotations

import logging

from . import db

logger = logging.getLogger(__name__)

CREATE_TABLES = """
CREATE TABLE IF NOT EXISTS users (
  id SERIAL PRIMARY KEY,
  name VARCHAR(100) NOT NULL,
  email VARCHAR(255) UNIQUE NOT NULL,
  password VARCHAR(255) NOT NULL,
  role VARCHAR(20) DEFAULT 'admin',
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS houses (
  id SERIAL PRIMARY KEY,
  title VARCHAR(255) NOT NULL,
  description TEXT,
  location VARCHAR(100) NOT NULL,
  house_type VARCHAR(100) NOT NULL DEFAULT '',
  bedrooms INTEGER DEFAULT 1,
  bathrooms INTEGER DEFAULT 1,
  rent_price DECIMAL(12, 2) NOT NULL,
  vacancy_status VARCHAR(20) DEFAULT 'available',
  featured BOOLEAN DEFAULT false,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS house_images (
  id SERIAL PRIMARY KEY,
  house_id INTEGER REFERENCES houses(id) ON DELETE CASCADE,
  image_url VARCHAR(500) NOT NULL,
  is_primary BOOLEAN DEFAULT false,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS newsletter_subscribers (
  id SERIAL PRIMARY KEY,
  email VARCHAR(255) UNIQUE NOT NULL,
  name VARCHAR(100),
  verified BOOLEAN DEFAULT false,
  verification_token VARCHAR(255),
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS site_settings (
  id SERIAL PRIMARY KEY,
  setting_key VARCHAR(100) UNIQUE NOT NULL,
  setting_value JSONB NOT NULL,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS locations (
  id SERIAL PRIMARY KEY,
  name VARCHAR(100) UNIQUE NOT NULL,
  is_active BOOLEAN DEFAULT true,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS house_types (
  id SERIAL PRIMARY KEY,
  name VARCHAR(100) UNIQUE NOT NULL,
  is_active BOOLEAN DEFAULT true,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS pages (
  id SERIAL PRIMARY KEY,
  slug VARCHAR(100) UNIQUE NOT NULL,
  title VARCHAR(255) NOT NULL,
  content JSONB NOT NULL DEFAULT '{}',
  is_active BOOLEAN DEFAULT true,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS digi_reels (
  id SERIAL PRIMARY KEY,
  title VARCHAR(255) NOT NULL,
  description TEXT DEFAULT '',
  media_url VARCHAR(500) NOT NULL,
  media_type VARCHAR(20) DEFAULT 'image',
  thumbnail_url VARCHAR(500),
  is_active BOOLEAN DEFAULT true,
  display_order INTEGER DEFAULT 0,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

# Columns added after the first release of `houses`.
ADD_COLUMNS = """
ALTER TABLE houses ADD COLUMN IF NOT EXISTS property_type VARCHAR(50) DEFAULT 'house';
ALTER TABLE houses ADD COLUMN IF NOT EXISTS listing_type VARCHAR(20) DEFAULT 'rent';
ALTER TABLE houses ADD COLUMN IF NOT EXISTS size_acres DECIMAL(10, 2);
ALTER TABLE houses ADD COLUMN IF NOT EXISTS dimensions VARCHAR(100);
ALTER TABLE houses ADD COLUMN IF NOT EXISTS town VARCHAR(100);
ALTER TABLE houses ADD COLUMN IF NOT EXISTS internal_features JSONB DEFAULT '[]';
ALTER TABLE houses ADD COLUMN IF NOT EXISTS external_features JSONB DEFAULT '[]';
ALTER TABLE houses ADD COLUMN IF NOT EXISTS land_features JSONB DEFAULT '[]';
"""

CREATE_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_houses_location ON houses(location);
CREATE INDEX IF NOT EXISTS idx_houses_vacancy ON houses(vacancy_status);
CREATE INDEX IF NOT EXISTS idx_houses_type ON houses(house_type);
CREATE INDEX IF NOT EXISTS idx_houses_listing_type ON houses(listing_type);
CREATE INDEX IF NOT EXISTS idx_house_images_house_id ON house_images(house_id);
CREATE INDEX IF NOT EXISTS idx_pages_slug ON pages(slug);
CREATE INDEX IF NOT EXISTS idx_reels_order ON digi_reels(display_order);
"""


async def init_schema() -> None:
    # Multi-statement strings are fine here: no parameters are bound.
    await db.execute(CREATE_TABLES)
    await db.execute(ADD_COLUMNS)
    await db.execute(CREATE_INDEXES)
    logger.info("schema_ready")

"""
House API schemas.

Numeric fields accept strings too: admin forms post "" for blank inputs,
which the service maps to defaults (create) or "keep existing" (update).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

NumberInput = int | float | str | None


class HouseFilters(BaseModel):
    location: str | None = None
    house_type: str | None = None
    status: str | None = None
    property_type: str | None = None
    listing_type: str | None = None
    town: str | None = None
    search: str | None = None


class HouseWrite(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, max_length=100)
    town: str | None = Field(default=None, max_length=100)
    house_type: str | None = Field(default=None, max_length=100)
    property_type: str | None = Field(default=None, max_length=50)
    listing_type: str | None = Field(default=None, max_length=20)
    bedrooms: NumberInput = None
    bathrooms: NumberInput = None
    size_acres: NumberInput = None
    dimensions: str | None = Field(default=None, max_length=100)
    rent_price: NumberInput = None
    vacancy_status: str | None = Field(default=None, max_length=20)
    featured: bool | None = None
    internal_features: list[str] | None = None
    external_features: list[str] | None = None
    land_features: list[str] | None = None

"""
Reel API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ReelCreate(BaseModel):
    title: str = Field(default="", max_length=255)
    description: str | None = None
    media_url: str = Field(default="", max_length=500)
    media_type: str | None = Field(default=None, max_length=20)
    thumbnail_url: str | None = Field(default=None, max_length=500)
    display_order: int | None = None


class ReelUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    media_url: str | None = Field(default=None, max_length=500)
    media_type: str | None = Field(default=None, max_length=20)
    thumbnail_url: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None
    display_order: int | None = None


class ReelOrder(BaseModel):
    id: int
    display_order: int


class ReorderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reel_orders: list[ReelOrder] | None = Field(default=None, alias="reelOrders")

"""
Page API schemas. `content` is caller-defined JSON and is stored as-is.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PageCreate(BaseModel):
    slug: str = Field(default="", max_length=100)
    title: str = Field(default="", max_length=255)
    content: Any = None


class PageUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    content: Any = None
    is_active: bool | None = None

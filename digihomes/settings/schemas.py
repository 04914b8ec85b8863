"""
Settings API schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SettingUpdate(BaseModel):
    value: Any = None


class NamedItemCreate(BaseModel):
    name: str = Field(default="", max_length=100)


class AnimationSettingsUpdate(BaseModel):
    baseDelay: Any = None
    cardStaggerMultiplier: Any = None
    heroStaggerMultiplier: Any = None
    sectionStaggerMultiplier: Any = None
    heroTextDelay: Any = None
    statsCountDuration: Any = None

"""
Newsletter API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SubscribeRequest(BaseModel):
    email: str = Field(default="", max_length=255)
    name: str = Field(default="", max_length=100)


class CheckEmailRequest(BaseModel):
    email: str = Field(default="", max_length=255)


class BroadcastRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject: str = Field(default="", max_length=255)
    html_content: str = Field(default="", alias="htmlContent")
    subscriber_ids: list[int] | None = Field(default=None, alias="subscriberIds")

"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CheckAdminRequest(BaseModel):
    email: str = Field(default="", max_length=320)


class LoginRequest(BaseModel):
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=128)


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(default="", alias="currentPassword", max_length=128)
    new_password: str = Field(default="", alias="newPassword", max_length=128)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    token: str
    user: UserResponse

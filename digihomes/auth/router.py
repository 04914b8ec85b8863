"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, schemas, service

router = APIRouter(prefix="/api/auth")


@router.post("/check-admin")
async def check_admin(payload: schemas.CheckAdminRequest) -> dict:
    return await service.check_admin(payload)


@router.post("/login", response_model=schemas.LoginResponse)
async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    return await service.login(payload)


@router.get("/me")
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> dict:
    return service.me(current_user)


@router.put("/change-password")
async def change_password(
    payload: schemas.ChangePasswordRequest,
    current_user: dict = Depends(dependencies.get_current_user),
) -> dict:
    return await service.change_password(payload, user_row=current_user)

"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas, security

ADMIN_ROLE = "admin"

logger = logging.getLogger(__name__)


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        name=str(user_row.get("name") or ""),
        email=str(user_row["email"]),
        role=str(user_row.get("role") or ADMIN_ROLE),
        created_at=user_row.get("created_at"),
    )


async def check_admin(payload: schemas.CheckAdminRequest) -> dict[str, bool]:
    email = repository.normalize_email(payload.email)
    if not email:
        return {"isAdmin": False}
    user_row = await repository.get_user_by_email(email)
    return {"isAdmin": user_row is not None and user_row.get("role") == ADMIN_ROLE}


async def login(payload: schemas.LoginRequest) -> schemas.LoginResponse:
    if not payload.email.strip() or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required.",
        )

    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    is_valid = security.verify_password(payload.password, str(user_row.get("password") or ""))
    if not is_valid:
        logger.warning("login_failed user_id=%s", user_row["id"])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )

    token = security.build_access_token(
        user_id=int(user_row["id"]),
        email=str(user_row["email"]),
        role=str(user_row.get("role") or ADMIN_ROLE),
    )
    return schemas.LoginResponse(token=token, user=_to_user_response(user_row))


async def change_password(payload: schemas.ChangePasswordRequest, *, user_row: dict) -> dict[str, str]:
    if not payload.current_password or not payload.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current and new password are required.",
        )
    if len(payload.new_password) < security.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {security.MIN_PASSWORD_LENGTH} characters.",
        )
    if not security.verify_password(payload.current_password, str(user_row.get("password") or "")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect.",
        )

    await repository.update_password(int(user_row["id"]), security.hash_password(payload.new_password))
    return {"message": "Password updated successfully"}


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    user_row = await repository.get_user_by_id(int(subject))
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found.",
        )
    return user_row


def me(user_row: dict) -> dict:
    return {"user": _to_user_response(user_row).model_dump()}

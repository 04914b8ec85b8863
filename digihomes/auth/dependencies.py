"""
FastAPI dependencies guarding admin routes.

`get_current_user` resolves the bearer token to a users row;
`require_admin` additionally checks the row's role.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import service

BEARER_SCHEME = "bearer"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def parse_bearer(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise _unauthorized("No token provided.")

    scheme, _, token = raw.partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token:
        raise _unauthorized("Authorization must be: Bearer <token>.")
    return token


async def get_current_user(authorization: str | None = Header(default=None)) -> dict:
    return await service.get_user_from_access_token(parse_bearer(authorization))


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("role") != service.ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required.",
        )
    return current_user

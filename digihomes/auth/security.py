"""
Password hashing (bcrypt) and admin session tokens (HS256 JWT).

Tokens carry the user id in `sub` plus the email and role at issue time;
`role` is informational only, the live role is re-read from the users table
on every request.
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

from ..core import config

MIN_PASSWORD_LENGTH = 6
TOKEN_TYPE = "access"


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """
    Check a password against a stored hash. Empty input or a malformed hash
    never verifies.
    """
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def build_access_token(*, user_id: int, email: str, role: str) -> str:
    issued_at = now_epoch_s()
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + config.access_token_ttl_s(),
    }
    return jwt.encode(claims, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    token = (token or "").strip()
    if not token:
        raise AuthSecurityError("Access token is empty.")

    try:
        claims = jwt.decode(token, config.jwt_secret(), algorithms=[config.jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if str(claims.get("type") or "").lower() != TOKEN_TYPE:
        raise AuthSecurityError("Token is not an access token.")
    return claims

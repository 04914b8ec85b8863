"""
Environment-backed settings.

Each accessor reads the environment on call so tests can monkeypatch
variables without reloading modules.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_FRONTEND_URL = "http://localhost:5173"
DEFAULT_ADMIN_EMAIL = "admin@digihomes.co.ke"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def app_env() -> str:
    return _env_str("APP_ENV") or _env_str("NODE_ENV", "development")


def is_development() -> bool:
    return app_env().lower() == "development"


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def frontend_url() -> str:
    return _env_str("FRONTEND_URL", DEFAULT_FRONTEND_URL).rstrip("/")


def admin_email() -> str:
    return _env_str("ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL).lower()


def admin_password() -> str:
    return _env_str("ADMIN_PASSWORD", "admin123")


def db_pool_min() -> int:
    return max(1, _env_int("DB_POOL_MIN", 1))


def db_pool_max() -> int:
    return max(db_pool_min(), _env_int("DB_POOL_MAX", 5))


def brevo_api_key() -> str:
    return _env_str("BREVO_API_KEY")


def email_from() -> str:
    return _env_str("EMAIL_FROM", "noreply@digihomes.co.ke")


def email_from_name() -> str:
    return _env_str("EMAIL_FROM_NAME", "DIGI Homes")


def cloudinary_credentials() -> dict[str, str] | None:
    """
    Return Cloudinary credentials, or None unless all three are set.
    """
    creds = {
        "cloud_name": _env_str("CLOUDINARY_CLOUD_NAME"),
        "api_key": _env_str("CLOUDINARY_API_KEY"),
        "api_secret": _env_str("CLOUDINARY_API_SECRET"),
    }
    if not all(creds.values()):
        return None
    return creds


def uploads_dir() -> Path:
    # Relative to the working directory, not the installed package.
    raw = os.environ.get("UPLOADS_DIR", "").strip()
    return Path(raw) if raw else Path.cwd() / "uploads"


def max_upload_bytes(*, bucket: bool) -> int:
    default = (10 if bucket else 5) * 1024 * 1024
    value = _env_int("MAX_UPLOAD_BYTES", default)
    return value if value > 0 else default


def jwt_secret() -> str:
    # Fine for local runs; deployments must set JWT_SECRET.
    return _env_str("JWT_SECRET", "digihomes-dev-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_ttl_s() -> int:
    minutes = _env_int("ACCESS_TOKEN_EXPIRE_MIN", 7 * 24 * 60)
    return max(1, minutes) * 60


def database_url() -> str:
    """
    asyncpg DSN from DATABASE_URL. A libpq-style `sslmode` parameter is
    dropped; TLS is chosen by `app_env()` when the pool is created.
    """
    url = _env_str("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = urlencode([(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"])
    return urlunsplit(parts._replace(query=query))

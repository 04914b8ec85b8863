"""
Image storage: local disk or Cloudinary.

Cloudinary is used only when all three CLOUDINARY_* variables are set;
otherwise files go to UPLOADS_DIR and are served under /uploads. The two
modes return differently shaped URLs (absolute https vs. /uploads/<name>).
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

import cloudinary
import cloudinary.uploader
from fastapi import HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from . import config

logger = logging.getLogger(__name__)

LOCAL_URL_PREFIX = "/uploads/"
CLOUDINARY_FOLDER = "digi-homes"

LOCAL_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/svg+xml"}
BUCKET_FORMATS = {"jpg", "jpeg", "png", "gif", "webp"}


class StorageError(RuntimeError):
    pass


@dataclass(frozen=True)
class StoredFile:
    url: str
    filename: str


def use_cloudinary() -> bool:
    return config.cloudinary_credentials() is not None


def _configure_cloudinary() -> None:
    creds = config.cloudinary_credentials()
    if creds is None:
        raise StorageError("Cloudinary is not configured.")
    cloudinary.config(secure=True, **creds)


def _bucket_format(file: UploadFile) -> str:
    ext = Path(file.filename or "").suffix.lower().lstrip(".")
    if not ext and file.content_type:
        ext = file.content_type.split("/")[-1].lower()
    return ext


def validate_image(file: UploadFile) -> None:
    """
    Reject files whose type the active storage backend does not accept.
    """
    if use_cloudinary():
        if _bucket_format(file) not in BUCKET_FORMATS:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid file type. Allowed: {sorted(BUCKET_FORMATS)}",
            )
        return

    if (file.content_type or "").lower() not in LOCAL_CONTENT_TYPES:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only JPEG, PNG, WebP and SVG are allowed.",
        )


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Max is {max_bytes} bytes.",
            )

    return bytes(buf)


def _save_local(data: bytes, original_name: str) -> StoredFile:
    directory = config.uploads_dir()
    directory.mkdir(parents=True, exist_ok=True)
    name = f"{uuid.uuid4()}{Path(original_name).suffix.lower()}"
    (directory / name).write_bytes(data)
    return StoredFile(url=f"{LOCAL_URL_PREFIX}{name}", filename=name)


def _save_cloudinary(data: bytes) -> StoredFile:
    _configure_cloudinary()
    result = cloudinary.uploader.upload(
        data,
        folder=CLOUDINARY_FOLDER,
        resource_type="image",
        transformation=[{"width": 1200, "height": 800, "crop": "limit", "quality": "auto"}],
    )
    url = str(result.get("secure_url") or result.get("url") or "")
    if not url:
        raise StorageError("Cloudinary returned no URL.")
    return StoredFile(url=url, filename=str(result.get("public_id") or ""))


async def save_image(file: UploadFile) -> StoredFile:
    """
    Validate, read and persist one uploaded image.
    """
    validate_image(file)
    bucket = use_cloudinary()
    data = await read_upload_bytes(file, max_bytes=config.max_upload_bytes(bucket=bucket))
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")

    if bucket:
        try:
            return await run_in_threadpool(_save_cloudinary, data)
        except StorageError:
            raise
        except Exception as exc:
            logger.exception("cloudinary_upload_failed filename=%r", file.filename)
            raise StorageError(f"Cloudinary upload failed: {str(exc)[:200]}") from exc

    return await run_in_threadpool(_save_local, data, file.filename or "")


def public_id_from_url(url: str) -> str | None:
    """
    Cloudinary public id ("<folder>/<name>") for a delivery URL.
    """
    if not url or "cloudinary" not in url:
        return None
    parts = url.rstrip("/").split("/")
    if len(parts) < 2:
        return None
    filename = parts[-1]
    folder = parts[-2]
    return f"{folder}/{filename.split('.')[0]}"


def local_path_from_url(url: str) -> Path | None:
    if not url.startswith(LOCAL_URL_PREFIX):
        return None
    name = url[len(LOCAL_URL_PREFIX):]
    # Stored names are flat uuids; refuse anything that walks out of the dir.
    if not name or "/" in name or "\\" in name or name in {".", ".."}:
        return None
    return config.uploads_dir() / name


async def delete_image(url: str) -> bool:
    """
    Best-effort removal of a stored image. Returns True when something was
    deleted.
    """
    public_id = public_id_from_url(url)
    if public_id is not None:
        try:
            _configure_cloudinary()
            await run_in_threadpool(cloudinary.uploader.destroy, public_id)
        except Exception:
            logger.exception("cloudinary_delete_failed public_id=%s", public_id)
            return False
        return True

    path = local_path_from_url(url)
    if path is None or not path.exists():
        return False
    try:
        path.unlink()
    except OSError:
        logger.warning("local_delete_failed path=%s", path, exc_info=True)
        return False
    return True

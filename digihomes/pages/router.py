"""
Page API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth import dependencies as auth_dependencies
from . import schemas, service

router = APIRouter(prefix="/api/pages")


@router.get("")
async def list_pages() -> list[dict]:
    return await service.list_pages()


@router.get("/{slug}")
async def get_page(slug: str) -> dict:
    return await service.get_page(slug)


@router.post("", status_code=201)
async def create_page(
    payload: schemas.PageCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_page(payload)


@router.put("/{slug}")
async def update_page(
    slug: str,
    payload: schemas.PageUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_page(slug, payload)


@router.delete("/{slug}")
async def delete_page(
    slug: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_page(slug)

"""
Page business logic.
"""

from __future__ import annotations

from fastapi import HTTPException

from . import repository, schemas


async def list_pages() -> list[dict]:
    return await repository.list_active_pages()


async def get_page(slug: str) -> dict:
    row = await repository.get_page(slug)
    if row is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return row


async def create_page(payload: schemas.PageCreate) -> dict:
    slug = payload.slug.strip()
    title = payload.title.strip()
    if not slug or not title:
        raise HTTPException(status_code=400, detail="Slug and title are required")

    try:
        return await repository.create_page(
            slug=slug,
            title=title,
            content=payload.content if payload.content is not None else {},
        )
    except repository.PageExistsError as exc:
        raise HTTPException(status_code=400, detail="Page with this slug already exists") from exc


async def update_page(slug: str, payload: schemas.PageUpdate) -> dict:
    # Explicit nulls are ignored; only real values are written.
    updates = {
        name: getattr(payload, name)
        for name in payload.model_fields_set
        if getattr(payload, name) is not None
    }
    row = await repository.update_page(slug, updates)
    if row is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return row


async def delete_page(slug: str) -> dict:
    row = await repository.delete_page(slug)
    if row is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return {"message": "Page deleted"}

"""
Newsletter API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth import dependencies as auth_dependencies
from . import schemas, service

router = APIRouter(prefix="/api/newsletter")


@router.post("/subscribe", status_code=201)
async def subscribe(payload: schemas.SubscribeRequest) -> dict:
    return await service.subscribe(payload)


@router.get("/check-email")
async def check_email(email: str = Query(default="", max_length=255)) -> dict:
    return await service.check_email(email)


@router.post("/check-email")
async def check_email_post(payload: schemas.CheckEmailRequest) -> dict:
    return await service.check_email(payload.email)


@router.get("/verify")
async def verify(token: str | None = Query(default=None)) -> dict:
    return await service.verify(token)


@router.get("/subscribers")
async def list_subscribers(_: dict = Depends(auth_dependencies.require_admin)) -> list[dict]:
    return await service.list_subscribers()


@router.delete("/subscribers/{subscriber_id}")
async def delete_subscriber(
    subscriber_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_subscriber(subscriber_id)


@router.post("/broadcast")
async def broadcast(
    payload: schemas.BroadcastRequest,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.broadcast(payload)

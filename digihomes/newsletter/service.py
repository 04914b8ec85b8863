"""
Newsletter business logic.

Subscriptions are double opt-in when Brevo is configured. Without an API key
there is no way to deliver a verification link, so new subscribers are
verified immediately.
"""

from __future__ import annotations

import logging
import re
import secrets
from urllib.parse import urlencode

from fastapi import HTTPException

from ..core import brevo, config
from . import emails, repository, schemas

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

VERIFY_SUBJECT = "Verify your DIGI Homes Newsletter Subscription"

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _public(subscriber: dict) -> dict:
    # The token proves mailbox ownership; never echo it back to the caller.
    return {k: v for k, v in subscriber.items() if k != "verification_token"}


def new_verification_token() -> str:
    return secrets.token_hex(32)


def verification_url(token: str) -> str:
    return f"{config.frontend_url()}/verify-email?{urlencode({'token': token})}"


async def send_verification_email(*, email: str, name: str, token: str) -> bool:
    """
    Returns False when email is not configured or the send fails.
    """
    if not brevo.is_configured():
        logger.info("brevo_not_configured skipping verification email")
        return False

    try:
        await brevo.send_email(
            to_email=email,
            to_name=name,
            subject=VERIFY_SUBJECT,
            html_content=emails.verification_email(name=name, verify_url=verification_url(token)),
        )
    except brevo.BrevoError:
        logger.exception("verification_email_failed email=%s", email)
        return False
    return True


async def check_email(email: str) -> dict:
    row = await repository.get_by_email(_normalize_email(email))
    if row is None:
        return {"exists": False}
    return {"exists": True, "verified": bool(row["verified"])}


async def subscribe(payload: schemas.SubscribeRequest) -> dict:
    email = _normalize_email(payload.email)
    name = (payload.name or "").strip()
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")
    if not EMAIL_RE.match(email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    existing = await repository.get_by_email(email)
    if existing is not None:
        if existing["verified"]:
            raise HTTPException(status_code=400, detail="Email already subscribed")
        # An unverified address is replaced, which also invalidates its old token.
        await repository.delete_subscriber(int(existing["id"]))

    token = new_verification_token()
    subscriber = await repository.insert_subscriber(email=email, name=name, verification_token=token)

    sent = await send_verification_email(email=email, name=name, token=token)
    if not sent and not brevo.is_configured():
        await repository.mark_verified(int(subscriber["id"]))
        return {
            "message": "Successfully subscribed to newsletter",
            "subscriber": {**_public(subscriber), "verified": True},
        }

    return {
        "message": "Please check your email to verify your subscription",
        "subscriber": _public(subscriber),
    }


async def verify(token: str | None) -> dict:
    token = (token or "").strip()
    if not token:
        raise HTTPException(status_code=400, detail="Verification token is required")

    row = await repository.verify_token(token)
    if row is None:
        raise HTTPException(status_code=400, detail="Invalid or expired verification token")
    return {"message": "Email verified successfully!", "subscriber": row}


async def list_subscribers() -> list[dict]:
    return await repository.list_subscribers()


async def delete_subscriber(subscriber_id: int) -> dict:
    row = await repository.delete_subscriber(subscriber_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Subscriber not found")
    return {"message": "Subscriber removed successfully"}


async def broadcast(payload: schemas.BroadcastRequest) -> dict:
    subject = payload.subject.strip()
    if not subject or not payload.html_content.strip():
        raise HTTPException(status_code=400, detail="Subject and content are required")
    if not brevo.is_configured():
        raise HTTPException(
            status_code=400,
            detail="Email service not configured. Please set BREVO_API_KEY in environment variables.",
        )

    subscribers = await repository.list_verified(payload.subscriber_ids)
    if not subscribers:
        raise HTTPException(status_code=400, detail="No verified subscribers to send to")

    html_content = emails.broadcast_email(payload.html_content)
    success_count = 0
    fail_count = 0

    # Serial on purpose: one request per recipient, no batching.
    for subscriber in subscribers:
        try:
            await brevo.send_email(
                to_email=str(subscriber["email"]),
                to_name=str(subscriber.get("name") or "Subscriber"),
                subject=subject,
                html_content=html_content,
            )
        except brevo.BrevoError:
            logger.warning("broadcast_send_failed subscriber_id=%s", subscriber["id"], exc_info=True)
            fail_count += 1
        else:
            success_count += 1

    logger.info("broadcast_done total=%s ok=%s failed=%s", len(subscribers), success_count, fail_count)
    return {
        "message": f"Broadcast sent: {success_count} successful, {fail_count} failed",
        "successCount": success_count,
        "failCount": fail_count,
        "total": len(subscribers),
    }

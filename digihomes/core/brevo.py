"""
Brevo (Sendinblue) transactional email client.

Used endpoint:
- POST /v3/smtp/email  -> 201 {"messageId": "..."}
"""

from __future__ import annotations

from typing import Any

import httpx

from . import config

BREVO_BASE_URL = "https://api.brevo.com"


# Email failures are explicit and separable from other runtime errors.
class BrevoError(RuntimeError):
    pass


def is_configured() -> bool:
    return bool(config.brevo_api_key())


async def send_email(
    *,
    to_email: str,
    to_name: str,
    subject: str,
    html_content: str,
    timeout_s: float = 15.0,
) -> None:
    """
    Send one HTML email. Raises BrevoError when the API key is missing or
    the request does not succeed.
    """
    api_key = config.brevo_api_key()
    if not api_key:
        raise BrevoError("BREVO_API_KEY is not set.")

    payload: dict[str, Any] = {
        "sender": {"name": config.email_from_name(), "email": config.email_from()},
        "to": [{"email": to_email, "name": to_name}],
        "subject": subject,
        "htmlContent": html_content,
    }
    headers = {
        "accept": "application/json",
        "api-key": api_key,
        "content-type": "application/json",
    }

    try:
        async with httpx.AsyncClient(base_url=BREVO_BASE_URL, timeout=timeout_s) as client:
            resp = await client.post("/v3/smtp/email", json=payload, headers=headers)
    except httpx.HTTPError as exc:
        raise BrevoError(f"Brevo request failed: {exc}") from exc

    if not resp.is_success:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise BrevoError(f"Brevo send failed: {resp.status_code} {body}")

"""
HTML bodies for newsletter emails.
"""

from __future__ import annotations

from html import escape

FOOTER = "DIGI Homes Agencies - Nakuru & Nyahururu, Kenya"


def verification_email(*, name: str, verify_url: str) -> str:
    url = escape(verify_url, quote=True)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #2563eb;">Welcome to DIGI Homes Newsletter!</h2>
  <p>Hi {escape(name)},</p>
  <p>Thank you for subscribing to our newsletter. Please click the button below to verify your email address:</p>
  <div style="text-align: center; margin: 30px 0;">
    <a href="{url}" style="background-color: #2563eb; color: white; padding: 12px 30px; text-decoration: none; border-radius: 8px; display: inline-block;">Verify Email</a>
  </div>
  <p style="color: #666; font-size: 14px;">If the button doesn't work, copy and paste this link into your browser:</p>
  <p style="color: #2563eb; font-size: 14px; word-break: break-all;">{url}</p>
  <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;" />
  <p style="color: #999; font-size: 12px;">{FOOTER}</p>
</div>
"""


def broadcast_email(html_content: str) -> str:
    # Admin-authored HTML is sent as-is.
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  {html_content}
  <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;" />
  <p style="color: #999; font-size: 12px;">You received this email because you subscribed to DIGI Homes Newsletter.</p>
  <p style="color: #999; font-size: 12px;">{FOOTER}</p>
</div>
"""

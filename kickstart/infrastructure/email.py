"""Outbound email delivery through the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from kickstart.config import get_settings

logger = logging.getLogger(__name__)

NOT_CONFIGURED_ERROR = "Email delivery is not configured"


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a single delivery attempt.

    ``attempted`` is ``False`` when no request reached SendGrid, e.g. because
    the credentials are not configured.
    """

    delivered: bool
    status_code: int | None = None
    error: str | None = None
    attempted: bool = True


def describe_sendgrid_error(body: Any) -> str | None:
    """Return a readable description of a SendGrid error payload."""

    if body in (None, "", b""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages: list[str] = []
        for item in parsed.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            if item.get("help"):
                messages.append(f"{item['message']} (help: {item['help']})")
            else:
                messages.append(str(item["message"]))
        if messages:
            return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return str(parsed)


def _failure(status_code: int | None, details: str | None) -> DeliveryResult:
    if status_code and details:
        error = f"SendGrid responded with status {status_code}: {details}"
    elif status_code:
        error = f"SendGrid responded with status {status_code}"
    else:
        error = details or "SendGrid request failed"
    logger.error(error)
    return DeliveryResult(delivered=False, status_code=status_code, error=error)


def send_email(subject: str, html_content: str, recipient: str) -> DeliveryResult:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return DeliveryResult(delivered=False, error=NOT_CONFIGURED_ERROR, attempted=False)

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        details = describe_sendgrid_error(getattr(exc, "body", None)) or str(exc)
        return _failure(getattr(exc, "status_code", None), details)

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        return _failure(
            status_code, describe_sendgrid_error(getattr(response, "body", None))
        )

    logger.info("Email '%s' delivered to %s", subject, recipient)
    return DeliveryResult(delivered=True, status_code=status_code)


def build_welcome_email(first_name: str, username: str) -> tuple[str, str]:
    """Return the subject and HTML body greeting a newly registered user."""

    subject = "Welcome to Kickstart"
    html_content = "".join(
        (
            f"<p>Hi {escape(first_name)},</p>",
            "<p>Your account has been created successfully.</p>",
            f"<p><strong>Username:</strong> {escape(username)}</p>",
            "<p>If you did not request this account, please contact the administrator.</p>",
        )
    )
    return subject, html_content


__all__ = [
    "DeliveryResult",
    "NOT_CONFIGURED_ERROR",
    "build_welcome_email",
    "describe_sendgrid_error",
    "send_email",
]

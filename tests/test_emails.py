"""Tests for email queueing, delivery and the SendGrid adapter."""

from __future__ import annotations

import json
import types
from datetime import timedelta

import pytest

from kickstart.application.use_cases.emails import (
    deliver_email,
    queue_email,
    retry_failed_emails,
)
from kickstart.domain.entities import EmailNotification, EmailStatus, EmailType
from kickstart.infrastructure import email as email_module
from kickstart.infrastructure.repositories import EmailNotificationRepository
from kickstart.utils import now_in_app_timezone


def test_queue_email_stores_a_pending_notification(session, outbox) -> None:
    notification = queue_email(
        session, recipient="ada@example.com", subject="Hi", content="<p>Hello</p>"
    )

    assert notification.status is EmailStatus.PENDING
    assert notification.type is EmailType.GENERAL
    assert notification.sent_at is None
    assert outbox == []


def test_queue_email_with_send_now_delivers_immediately(session, outbox) -> None:
    notification = queue_email(
        session,
        recipient="ada@example.com",
        subject="Welcome",
        content="<p>Hello</p>",
        email_type=EmailType.WELCOME,
        send_now=True,
    )

    assert notification.status is EmailStatus.SENT
    assert notification.sent_at is not None
    assert outbox[0]["recipient"] == "ada@example.com"


def test_queue_email_rejects_invalid_recipient(session) -> None:
    with pytest.raises(ValueError):
        queue_email(session, recipient="not-an-address", subject="Hi", content="x")


def test_failed_delivery_records_the_error(session, monkeypatch) -> None:
    monkeypatch.setattr(
        email_module,
        "send_email",
        lambda *args: email_module.DeliveryResult(delivered=False, error="quota exceeded"),
    )
    notification = queue_email(session, recipient="a@example.com", subject="Hi", content="x")

    delivered = deliver_email(session, notification.id)

    assert delivered.status is EmailStatus.FAILED
    assert delivered.error == "quota exceeded"
    assert delivered.sent_at is None


def test_sent_emails_are_not_sent_twice(session, outbox) -> None:
    notification = queue_email(
        session, recipient="a@example.com", subject="Hi", content="x", send_now=True
    )

    again = deliver_email(session, notification.id)

    assert again.status is EmailStatus.SENT
    assert len(outbox) == 1


def test_retry_failed_emails_only_picks_old_failures(session, outbox) -> None:
    repository = EmailNotificationRepository(session)
    now = now_in_app_timezone()
    old = repository.create(
        EmailNotification(
            id=None,
            recipient="old@example.com",
            subject="Old",
            content="x",
            status=EmailStatus.FAILED,
            created_at=now - timedelta(hours=1),
            error="timeout",
        )
    )
    fresh = repository.create(
        EmailNotification(
            id=None,
            recipient="fresh@example.com",
            subject="Fresh",
            content="x",
            status=EmailStatus.FAILED,
            created_at=now,
            error="timeout",
        )
    )

    results = retry_failed_emails(session, older_than=timedelta(minutes=15))

    assert [item.id for item in results] == [old.id]
    assert repository.get(old.id).status is EmailStatus.SENT
    assert repository.get(old.id).error is None
    assert repository.get(fresh.id).status is EmailStatus.FAILED
    assert [item["recipient"] for item in outbox] == ["old@example.com"]


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class DummySettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())

    result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result.delivered is False
    assert result.error == email_module.NOT_CONFIGURED_ERROR
    assert result.attempted is False


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    class SuccessfulClient:
        def __init__(self, api_key: str):
            self.api_key = api_key

        def send(self, message):
            return types.SimpleNamespace(status_code=202, body=None)

    class DummySettings:
        sendgrid_api_key = "SG.fake"
        sendgrid_sender = "sender@example.com"

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", SuccessfulClient)

    result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result.delivered is True
    assert result.status_code == 202


def test_send_email_reports_unsuccessful_responses(monkeypatch, caplog) -> None:
    body = json.dumps({"errors": [{"message": "Sender not verified", "help": "https://help"}]})

    class RejectingClient:
        def __init__(self, api_key: str):
            pass

        def send(self, message):
            return types.SimpleNamespace(status_code=403, body=body)

    class DummySettings:
        sendgrid_api_key = "SG.fake"
        sendgrid_sender = "sender@example.com"

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result.delivered is False
    assert result.status_code == 403
    assert "Sender not verified (help: https://help)" in result.error
    assert "403" in caplog.text


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (None, None),
        (b"  ", None),
        ("plain failure", "plain failure"),
        ({"errors": [{"message": "bad key"}, "junk"]}, "bad key"),
        (["a", "b"], "a; b"),
    ],
)
def test_describe_sendgrid_error(body, expected) -> None:
    assert email_module.describe_sendgrid_error(body) == expected


def test_welcome_email_escapes_user_input() -> None:
    subject, html = email_module.build_welcome_email("<b>Eve</b>", "eve")

    assert subject == "Welcome to Kickstart"
    assert "&lt;b&gt;Eve&lt;/b&gt;" in html


def test_unconfigured_gateway_keeps_emails_out_of_the_retry_loop(session, monkeypatch) -> None:
    class DummySettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    repository = EmailNotificationRepository(session)
    queued = queue_email(
        session, recipient="new@example.com", subject="Hi", content="x", send_now=True
    )
    stale = repository.create(
        EmailNotification(
            id=None,
            recipient="stale@example.com",
            subject="Old",
            content="x",
            status=EmailStatus.FAILED,
            created_at=now_in_app_timezone() - timedelta(hours=1),
            error=email_module.NOT_CONFIGURED_ERROR,
        )
    )

    first_run = retry_failed_emails(session, older_than=timedelta(minutes=15))
    second_run = retry_failed_emails(session, older_than=timedelta(minutes=15))

    assert queued.status is EmailStatus.PENDING
    assert queued.error == email_module.NOT_CONFIGURED_ERROR
    assert [item.id for item in first_run] == [stale.id]
    assert first_run[0].status is EmailStatus.PENDING
    assert second_run == []
    assert repository.list_by_status(EmailStatus.FAILED) == []

"""Shared fixtures: an in-memory database and a stubbed email gateway."""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "UTC")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kickstart.infrastructure import email as email_module
from kickstart.infrastructure.database import Base, get_db, initialize_database


@pytest.fixture()
def engine():
    """Return an engine bound to a fresh in-memory database."""

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory) -> Session:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, str]]:
    """Capture outgoing emails instead of calling SendGrid."""

    sent: list[dict[str, str]] = []

    def fake_send_email(subject: str, html_content: str, recipient: str):
        sent.append({"subject": subject, "content": html_content, "recipient": recipient})
        return email_module.DeliveryResult(delivered=True, status_code=202)

    monkeypatch.setattr(email_module, "send_email", fake_send_email)
    return sent


@pytest.fixture()
def client(session_factory, outbox):
    """Return a test client whose requests use the in-memory database."""

    from fastapi.testclient import TestClient

    from main import create_app

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

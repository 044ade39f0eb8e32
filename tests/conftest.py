"""
Pytest configuration and fixtures.
"""

import os

# Must be set before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["VERIFICATION_SWEEP_ENABLED"] = "false"
os.environ["RESEND_API_KEY"] = "re_test_key"
os.environ["RESEND_DOMAIN"] = "mail.example.com"
os.environ["BASE_URL"] = "http://testserver"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest
from fastapi.testclient import TestClient

import main
from core.database import Base, SessionLocal, engine
from core.rate_limit import otp_limiter
from core.security import hash_password
from crud.account_crud import create_account
from crud.user_crud import create_user
from models.account import CREDENTIAL_PROVIDER
from schemas.account_schema import AccountCreate
from schemas.user_schema import UserCreate
from services import email_service

DEFAULT_PASSWORD = "Password@123"


@pytest.fixture(autouse=True)
def setup_database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_rate_limit():
    otp_limiter.reset()
    yield
    otp_limiter.reset()


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Capture outgoing email instead of calling Resend."""
    sent = []

    def fake_send_email(to, subject, html):
        sent.append({"to": to, "subject": subject, "html": html})

    monkeypatch.setattr(email_service, "send_email", fake_send_email)
    return sent


@pytest.fixture
def db(setup_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """API test client (lifespan not started, so no background sweeper)."""
    return TestClient(main.app)


@pytest.fixture
def make_user(db):
    """Factory creating a user with a password credential."""

    def _make_user(email="alice@example.com", name="Alice", password=DEFAULT_PASSWORD, verified=False):
        user = create_user(db, UserCreate(email=email, name=name, email_verified=verified))
        create_account(
            db,
            AccountCreate(
                user_id=user.id,
                account_id=user.id,
                provider_id=CREDENTIAL_PROVIDER,
                password=hash_password(password),
            ),
        )
        return user

    return _make_user


@pytest.fixture
def verified_user(make_user):
    return make_user(verified=True)


@pytest.fixture
def auth_headers(client, verified_user):
    """Bearer headers for a signed-in verified user."""
    response = client.post(
        "/api/auth/sign-in",
        json={"email": verified_user.email, "password": DEFAULT_PASSWORD},
    )
    assert response.status_code == 200
    token = response.json()["session"]["token"]
    return {"Authorization": f"Bearer {token}"}

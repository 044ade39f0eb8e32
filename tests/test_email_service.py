"""
Tests for the Resend email dispatcher.
"""

import pytest
import requests

from core.errors import EmailDeliveryError
from services import email_service
from services.email_service import send_email


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json})
        return FakeResponse(200, '{"id": "email_1"}')

    monkeypatch.setattr(email_service.requests, "post", fake_post)
    return calls


def test_send_email_builds_resend_request(captured):
    send_email("alice@example.com", "Hello", "<p>Hi</p>")

    assert len(captured) == 1
    call = captured[0]
    assert call["url"] == "https://api.resend.com/emails"
    assert call["headers"]["Authorization"] == "Bearer re_test_key"
    assert call["json"] == {
        "from": "Better Auth <no-reply@mail.example.com>",
        "to": ["alice@example.com"],
        "subject": "Hello",
        "html": "<p>Hi</p>",
    }


def test_send_email_rejected_by_provider(monkeypatch):
    monkeypatch.setattr(email_service.requests, "post", lambda *a, **kw: FakeResponse(422, "invalid"))

    with pytest.raises(EmailDeliveryError):
        send_email("alice@example.com", "Hello", "<p>Hi</p>")


def test_send_email_transport_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(email_service.requests, "post", boom)

    with pytest.raises(EmailDeliveryError):
        send_email("alice@example.com", "Hello", "<p>Hi</p>")


def test_verification_email_contains_code(outbox):
    email_service.send_verification_email("alice@example.com", "482913")

    assert outbox == [
        {
            "to": "alice@example.com",
            "subject": "Your Verification Code",
            "html": outbox[0]["html"],
        }
    ]
    assert "482913" in outbox[0]["html"]
    assert "10 minutes" in outbox[0]["html"]


def test_password_reset_email_contains_link(outbox):
    email_service.send_password_reset_email("alice@example.com", "http://testserver/reset/abc")

    assert outbox[0]["subject"] == "Password Reset Request"
    assert "http://testserver/reset/abc" in outbox[0]["html"]

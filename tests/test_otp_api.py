"""
Tests for the email verification endpoints.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.config import settings
from core.errors import EmailDeliveryError
from crud.user_crud import get_user_by_email
from crud.verification_crud import create_verification, list_by_identifier
from schemas.verification_schema import VerificationCreate
from services import email_service

EMAIL = "alice@example.com"


def _latest_code(db, email=EMAIL):
    rows = list_by_identifier(db, email)
    assert len(rows) == 1
    return rows[0].value


class TestVerifyOTP:
    def test_sign_up_then_verify_scenario(self, client, db, outbox):
        """Wrong code keeps the row; correct code verifies and clears it."""
        response = client.post(
            "/api/auth/sign-up",
            json={"email": EMAIL, "password": "Password@123", "name": "Alice"},
        )
        assert response.status_code == 200
        code = _latest_code(db)
        assert len(code) == 6 and code.isdigit()
        assert outbox[-1]["to"] == EMAIL

        wrong = "000000" if code != "000000" else "111111"
        response = client.post("/api/verify-otp", json={"email": EMAIL, "code": wrong})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid or expired verification code"}
        assert len(list_by_identifier(db, EMAIL)) == 1

        response = client.post("/api/verify-otp", json={"email": EMAIL, "code": code})
        assert response.status_code == 200
        assert response.json() == {"message": "Email verified successfully!", "success": True}

        db.expire_all()
        assert get_user_by_email(db, EMAIL).email_verified is True
        assert list_by_identifier(db, EMAIL) == []

    def test_expired_code_rejected(self, client, db, make_user):
        make_user(email=EMAIL)
        create_verification(
            db,
            VerificationCreate(
                identifier=EMAIL,
                value="123456",
                expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
            ),
        )

        response = client.post("/api/verify-otp", json={"email": EMAIL, "code": "123456"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid or expired verification code"

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "code": "123456"},
            {"email": EMAIL, "code": "123"},
            {"email": EMAIL},
        ],
    )
    def test_invalid_payload_is_400(self, client, payload):
        response = client.post("/api/verify-otp", json=payload)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_storage_failure_is_500(self, client, monkeypatch):
        from services.otp_service import OTPService

        def broken_validate(self, identifier, code):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(OTPService, "validate", broken_validate)

        response = client.post("/api/verify-otp", json={"email": EMAIL, "code": "123456"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to verify code"}


class TestResendOTP:
    def test_resend_for_unverified_user(self, client, db, make_user, outbox):
        make_user(email=EMAIL)

        response = client.post("/api/resend-otp", json={"email": EMAIL})

        assert response.status_code == 200
        assert response.json() == {"message": "Verification code resent successfully!", "success": True}
        code = _latest_code(db)
        assert code in outbox[-1]["html"]

    def test_resend_unknown_user_is_404(self, client):
        response = client.post("/api/resend-otp", json={"email": "nobody@example.com"})
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_resend_verified_user_is_400(self, client, db, verified_user, outbox):
        response = client.post("/api/resend-otp", json={"email": verified_user.email})
        assert response.status_code == 400
        assert response.json() == {"error": "Email already verified"}
        assert list_by_identifier(db, verified_user.email) == []
        assert outbox == []

    def test_resend_email_failure_is_500(self, client, make_user, monkeypatch):
        make_user(email=EMAIL)

        def failing_send(to, subject, html):
            raise EmailDeliveryError()

        monkeypatch.setattr(email_service, "send_email", failing_send)

        response = client.post("/api/resend-otp", json={"email": EMAIL})
        assert response.status_code == 500
        assert "error" in response.json()

    def test_resend_is_rate_limited_per_client(self, client, make_user):
        """Five requests per window, then 429; other clients are unaffected."""
        make_user(email=EMAIL)
        headers = {"x-forwarded-for": "203.0.113.7"}

        for _ in range(settings.OTP_RATE_LIMIT):
            response = client.post("/api/resend-otp", json={"email": EMAIL}, headers=headers)
            assert response.status_code == 200

        response = client.post("/api/resend-otp", json={"email": EMAIL}, headers=headers)
        assert response.status_code == 429
        assert "error" in response.json()

        response = client.post(
            "/api/resend-otp", json={"email": EMAIL}, headers={"x-forwarded-for": "198.51.100.2"}
        )
        assert response.status_code == 200


class TestVerificationStatus:
    def test_status_for_unverified_user(self, client, make_user):
        make_user(email=EMAIL)

        response = client.get(f"/api/verification-status/{EMAIL}")

        assert response.status_code == 200
        assert response.json() == {"emailVerified": False, "email": EMAIL}

    def test_status_for_verified_user(self, client, verified_user):
        response = client.get(f"/api/verification-status/{verified_user.email}")
        assert response.status_code == 200
        assert response.json()["emailVerified"] is True

    def test_status_unknown_user(self, client):
        response = client.get("/api/verification-status/nobody@example.com")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_status_matches_mixed_case_domain(self, client):
        """Lookup normalises the address the same way sign-up stored it."""
        response = client.post(
            "/api/auth/sign-up",
            json={"email": "Bob@Example.COM", "password": "Password@123", "name": "Bob"},
        )
        assert response.status_code == 200
        stored = response.json()["user"]["email"]

        response = client.get("/api/verification-status/Bob@Example.COM")

        assert response.status_code == 200
        assert response.json() == {"emailVerified": False, "email": stored}

    def test_status_invalid_email_is_400(self, client):
        response = client.get("/api/verification-status/not-an-email")
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid email address"}


class TestTestEmail:
    def test_sends_and_returns_code(self, client, db, outbox):
        response = client.post("/test-email", json={"email": EMAIL})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Test email sent successfully!"
        assert len(data["code"]) == 6
        assert data["code"] in outbox[-1]["html"]
        assert list_by_identifier(db, EMAIL) == []

    def test_send_failure_is_500(self, client, monkeypatch):
        def failing_send(to, subject, html):
            raise EmailDeliveryError()

        monkeypatch.setattr(email_service, "send_email", failing_send)

        response = client.post("/test-email", json={"email": EMAIL})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send test email"}

    def test_disabled_route_is_404(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENABLE_TEST_EMAIL_ROUTE", False)
        response = client.post("/test-email", json={"email": EMAIL})
        assert response.status_code == 404

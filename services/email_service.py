import logging

import requests

from core.config import settings
from core.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


def _sender() -> str:
    return f"{settings.EMAIL_FROM_NAME} <no-reply@{settings.RESEND_DOMAIN}>"


def send_email(to: str, subject: str, html: str) -> None:
    """
    Send a transactional email through the Resend REST API.

    Raises EmailDeliveryError on transport errors or non-2xx responses.
    """
    try:
        resp = requests.post(
            settings.RESEND_API_URL,
            headers={
                "Authorization": f"Bearer {settings.RESEND_API_KEY}",
                "Content-Type": "application/json",
            },
            json={
                "from": _sender(),
                "to": [to],
                "subject": subject,
                "html": html,
            },
            timeout=15,
        )
    except requests.RequestException as exc:
        logger.error("Error sending email to %s: %s", to, exc)
        raise EmailDeliveryError() from exc

    if resp.status_code >= 300:
        logger.error("Resend rejected email to %s (%s): %s", to, resp.status_code, resp.text)
        raise EmailDeliveryError()

    logger.info("Email sent successfully to %s", to)


def send_verification_email(to: str, code: str) -> None:
    subject = "Your Verification Code"
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #333;">Email Verification</h2>
      <p>Hello!</p>
      <p>Please use the following verification code to complete your email verification:</p>
      <div style="background-color: #f5f5f5; padding: 20px; text-align: center; margin: 20px 0;">
        <h1 style="color: #007bff; font-size: 32px; margin: 0; letter-spacing: 5px;">{code}</h1>
      </div>
      <p>This code will expire in {settings.OTP_EXPIRES_MINUTES} minutes.</p>
      <p>If you didn't request this verification, please ignore this email.</p>
      <hr style="margin: 30px 0; border: none; border-top: 1px solid #eee;">
      <p style="color: #666; font-size: 12px;">This is an automated message, please do not reply.</p>
    </div>
    """
    send_email(to, subject, html)


def send_password_reset_email(to: str, reset_link: str) -> None:
    subject = "Password Reset Request"
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #333;">Password Reset</h2>
      <p>Hello!</p>
      <p>You requested a password reset. Click the button below to reset your password:</p>
      <div style="text-align: center; margin: 30px 0;">
        <a href="{reset_link}" style="background-color: #007bff; color: white; padding: 12px 24px; text-decoration: none; border-radius: 5px; display: inline-block;">Reset Password</a>
      </div>
      <p>If the button doesn't work, copy and paste this link into your browser:</p>
      <p style="word-break: break-all; color: #007bff;">{reset_link}</p>
      <p>This link will expire in 1 hour.</p>
      <p>If you didn't request this password reset, please ignore this email.</p>
      <hr style="margin: 30px 0; border: none; border-top: 1px solid #eee;">
      <p style="color: #666; font-size: 12px;">This is an automated message, please do not reply.</p>
    </div>
    """
    send_email(to, subject, html)

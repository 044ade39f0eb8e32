import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from core.config import settings
from core.database import SessionLocal
from core.errors import AlreadyVerified, InvalidOrExpiredCode, UserNotFound
from crud.user_crud import get_user_by_email, mark_email_verified
from crud.verification_crud import create_verification, delete_by_identifier, delete_expired, get_valid
from schemas.verification_schema import VerificationCreate
from services import email_service

logger = logging.getLogger(__name__)


class OTPService:
    """Issues, validates and retires numeric email verification codes.

    At most one code per identifier is valid at a time: every issue deletes
    the identifier's previous rows before inserting the new one. Rate limiting
    happens in front of this class, never inside it.
    """

    def __init__(self, db: Session):
        self.db = db

    def generate_code(self) -> str:
        """Generate a code uniformly from the fixed-length decimal range, e.g. 100000-999999."""
        low = 10 ** (settings.OTP_LENGTH - 1)
        high = 10 ** settings.OTP_LENGTH - 1
        return str(low + secrets.randbelow(high - low + 1))

    def issue(self, identifier: str) -> str:
        """
        Replace any codes for ``identifier`` with a fresh one and email it.

        The code is returned for in-process callers only. Storage and delivery
        errors propagate.
        """
        code = self.generate_code()
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.OTP_EXPIRES_MINUTES)

        delete_by_identifier(self.db, identifier, commit=False)
        create_verification(
            self.db,
            VerificationCreate(identifier=identifier, value=code, expires_at=expires_at),
            commit=False,
        )
        self.db.commit()
        logger.info("Issued verification code for %s", identifier)

        email_service.send_verification_email(identifier, code)
        return code

    def validate(self, identifier: str, code: str) -> None:
        """
        Mark the user verified if ``code`` is the current unexpired code.

        Wrong and expired codes fail identically. On success every row for the
        identifier is removed, not only the matched one.
        """
        now = datetime.now(timezone.utc)
        record = get_valid(self.db, identifier, code, now)
        if not record:
            raise InvalidOrExpiredCode()

        try:
            mark_email_verified(self.db, identifier, commit=False)
            delete_by_identifier(self.db, identifier, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Email verified for %s", identifier)

    def resend(self, identifier: str) -> str:
        user = get_user_by_email(self.db, identifier)
        if not user:
            raise UserNotFound()
        if user.email_verified:
            raise AlreadyVerified()
        return self.issue(identifier)

    def sweep(self, now: datetime | None = None) -> int:
        """Delete every code whose expiry is at or before ``now``."""
        now = now or datetime.now(timezone.utc)
        return delete_expired(self.db, now)


def cleanup_expired_verifications() -> int:
    """Scheduler job: sweep expired codes, never raising so the job keeps running."""
    db = SessionLocal()
    try:
        deleted = OTPService(db).sweep()
        logger.info("Cleaned up %d expired verification codes", deleted)
        return deleted
    except Exception:
        logger.exception("Error cleaning up expired verifications")
        db.rollback()
        return 0
    finally:
        db.close()

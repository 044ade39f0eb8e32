import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.errors import InvalidInput, UserNotFound, error_boundary
from core.rate_limit import otp_rate_limit
from crud.user_crud import get_user_by_email
from schemas.otp_schema import (
    EmailRequest,
    OTPVerifyRequest,
    SuccessResponse,
    TestEmailResponse,
    VerificationStatusResponse,
)
from services import email_service
from services.otp_service import OTPService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Email Verification"])

# Same normalisation the request bodies get, so stored emails match
_email_adapter = TypeAdapter(EmailStr)


def get_otp_service(db: Session = Depends(get_db)) -> OTPService:
    return OTPService(db)


@router.post("/api/verify-otp", response_model=SuccessResponse)
def verify_otp(body: OTPVerifyRequest, otp: OTPService = Depends(get_otp_service)):
    with error_boundary(logger, "Failed to verify code"):
        otp.validate(body.email, body.code)
    return SuccessResponse(message="Email verified successfully!")


@router.post(
    "/api/resend-otp",
    response_model=SuccessResponse,
    dependencies=[Depends(otp_rate_limit)],
)
def resend_otp(body: EmailRequest, otp: OTPService = Depends(get_otp_service)):
    with error_boundary(logger, "Failed to resend verification code"):
        otp.resend(body.email)
    return SuccessResponse(message="Verification code resent successfully!")


@router.get("/api/verification-status/{email}", response_model=VerificationStatusResponse)
def verification_status(email: str, db: Session = Depends(get_db)):
    with error_boundary(logger, "Failed to check verification status"):
        try:
            email = _email_adapter.validate_python(email)
        except ValidationError as exc:
            raise InvalidInput("Invalid email address") from exc
        user = get_user_by_email(db, email)
        if not user:
            raise UserNotFound()
    return VerificationStatusResponse(email_verified=user.email_verified, email=email)


@router.post("/test-email", response_model=TestEmailResponse, tags=["Email"])
def test_email(body: EmailRequest, otp: OTPService = Depends(get_otp_service)):
    """Diagnostic: send a throwaway code and echo it back. Nothing is stored."""
    if not settings.ENABLE_TEST_EMAIL_ROUTE:
        raise HTTPException(status_code=404, detail="Not found")
    with error_boundary(logger, "Failed to send test email"):
        code = otp.generate_code()
        email_service.send_verification_email(body.email, code)
    return TestEmailResponse(message="Test email sent successfully!", code=code)

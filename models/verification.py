import uuid
from sqlalchemy import Column, String, DateTime, Index
from models.base import Base, TimestampMixin

class Verification(Base, TimestampMixin):
    """Short-lived secret bound to an identifier.

    Holds email OTP codes (identifier = email), password reset tokens
    (identifier = "reset-password:<token>") and OAuth state values.
    Rows are only ever inserted and deleted.
    """

    __tablename__ = "verification"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    identifier = Column(String(255), nullable=False)
    value = Column(String(255), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

Index("idx_verification_identifier", Verification.identifier)
Index("idx_verification_expires_at", Verification.expires_at)

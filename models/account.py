import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin

CREDENTIAL_PROVIDER = "credential"
GOOGLE_PROVIDER = "google"


class Account(Base, TimestampMixin):
    """A sign-in method linked to a user: a password credential or an OAuth provider."""

    __tablename__ = "account"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    account_id = Column(String(255), nullable=False)
    provider_id = Column(String(64), nullable=False)
    user_id = Column(String(64), ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    access_token = Column(String(2048), nullable=True)
    refresh_token = Column(String(2048), nullable=True)
    id_token = Column(String(4096), nullable=True)
    access_token_expires_at = Column(DateTime(timezone=True), nullable=True)
    scope = Column(String(512), nullable=True)
    # bcrypt hash, credential accounts only
    password = Column(String(255), nullable=True)

    user = relationship("User", back_populates="accounts")

Index("idx_account_userId", Account.user_id)
Index("idx_account_provider", Account.provider_id, Account.account_id, unique=True)

import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.database import get_db
from core.errors import Unauthorized, error_boundary
from services.auth_provider import AuthProvider, LocalAuthProvider

logger = logging.getLogger(__name__)


def get_auth_provider(db: Session = Depends(get_db)) -> AuthProvider:
    return LocalAuthProvider(db)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_current_session(
    authorization: Optional[str] = Header(None),
    provider: AuthProvider = Depends(get_auth_provider),
):
    """Resolve the bearer token to (user, session) or fail with 401."""
    token = extract_bearer_token(authorization)
    with error_boundary(logger, "Internal server error"):
        if not token:
            raise Unauthorized("Unauthorized")
        found = provider.get_session(token)
        if not found:
            raise Unauthorized("Unauthorized")
    return found


def get_current_user(current=Depends(get_current_session)):
    user, _ = current
    return user

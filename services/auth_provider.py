import logging
import urllib.parse
import uuid
from datetime import datetime, timedelta, timezone

import requests
from sqlalchemy.orm import Session

from core.config import settings
from core.errors import EmailNotVerified, InvalidCredentials, InvalidInput, InvalidToken, UserAlreadyExists
from core.security import generate_token, hash_password, verify_password
from crud.account_crud import create_account, get_account_by_provider, get_credential_account, set_password, update_account_tokens
from crud.session_crud import create_session, delete_session_by_token, delete_user_sessions, get_session_by_token
from crud.user_crud import create_user, get_user, get_user_by_email
from crud.verification_crud import (
    create_verification,
    delete_by_identifier,
    delete_verification,
    get_valid,
    get_valid_by_identifier,
)
from models.account import CREDENTIAL_PROVIDER, GOOGLE_PROVIDER
from schemas.account_schema import AccountCreate
from schemas.session_schema import SessionCreate
from schemas.user_schema import UserCreate
from schemas.verification_schema import VerificationCreate
from services import email_service
from services.otp_service import OTPService

logger = logging.getLogger(__name__)

RESET_PASSWORD_PREFIX = "reset-password:"
RESET_PASSWORD_EXPIRES = timedelta(hours=1)
OAUTH_STATE_IDENTIFIER = "oauth_state"
OAUTH_STATE_EXPIRES = timedelta(minutes=10)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


class AuthProvider:
    """Credential and session capability the HTTP layer depends on.

    Routers only rely on this contract: the inputs, the (user, session)
    results and the AppError subclasses raised.
    """

    def sign_up(self, email: str, password: str, name: str, ip_address=None, user_agent=None):
        raise NotImplementedError

    def sign_in(self, email: str, password: str, ip_address=None, user_agent=None):
        raise NotImplementedError

    def get_session(self, token: str):
        raise NotImplementedError

    def sign_out(self, token: str) -> bool:
        raise NotImplementedError

    def request_password_reset(self, email: str, redirect_to: str | None = None) -> None:
        raise NotImplementedError

    def check_reset_token(self, token: str) -> bool:
        raise NotImplementedError

    def reset_password(self, token: str, new_password: str) -> None:
        raise NotImplementedError

    def google_authorization_url(self, redirect_uri: str) -> str:
        raise NotImplementedError

    def google_callback(self, code: str, state: str, redirect_uri: str, ip_address=None, user_agent=None):
        raise NotImplementedError


class LocalAuthProvider(AuthProvider):
    """AuthProvider backed by the user/account/session/verification tables."""

    def __init__(self, db: Session):
        self.db = db

    def _issue_session(self, user, ip_address=None, user_agent=None):
        expires_at = datetime.now(timezone.utc) + timedelta(days=settings.SESSION_EXPIRES_DAYS)
        return create_session(
            self.db,
            payload=SessionCreate(
                user_id=user.id,
                token=generate_token(),
                expires_at=expires_at,
                ip_address=ip_address,
                user_agent=user_agent,
            ),
        )

    def sign_up(self, email, password, name, ip_address=None, user_agent=None):
        """
        Create an unverified user with a password credential and send an OTP.

        No session is returned: sign-in is refused until the email is verified.
        """
        if get_user_by_email(self.db, email):
            raise UserAlreadyExists()

        user = create_user(self.db, UserCreate(email=email, name=name), commit=False)
        create_account(
            self.db,
            AccountCreate(
                user_id=user.id,
                account_id=user.id,
                provider_id=CREDENTIAL_PROVIDER,
                password=hash_password(password),
            ),
            commit=False,
        )
        self.db.commit()
        self.db.refresh(user)
        logger.info("Created user %s", user.id)

        OTPService(self.db).issue(email)
        return user, None

    def sign_in(self, email, password, ip_address=None, user_agent=None):
        user = get_user_by_email(self.db, email)
        if not user:
            raise InvalidCredentials()
        account = get_credential_account(self.db, user.id)
        if not account or not verify_password(password, account.password):
            raise InvalidCredentials()
        if not user.email_verified:
            raise EmailNotVerified()
        return user, self._issue_session(user, ip_address, user_agent)

    def get_session(self, token):
        """Return (user, session) for a live token, else None."""
        s = get_session_by_token(self.db, token)
        if not s:
            return None
        exp = s.expires_at
        if exp.tzinfo is None:
            exp = exp.replace(tzinfo=timezone.utc)
        if exp < datetime.now(timezone.utc):
            return None
        user = get_user(self.db, s.user_id)
        if not user:
            return None
        return user, s

    def sign_out(self, token):
        return delete_session_by_token(self.db, token)

    def request_password_reset(self, email, redirect_to=None):
        user = get_user_by_email(self.db, email)
        if not user:
            # Same response for unknown emails
            logger.info("Password reset requested for unknown email")
            return

        token = generate_token(24)
        create_verification(
            self.db,
            VerificationCreate(
                identifier=f"{RESET_PASSWORD_PREFIX}{token}",
                value=user.id,
                expires_at=datetime.now(timezone.utc) + RESET_PASSWORD_EXPIRES,
            ),
        )
        base = settings.BASE_URL.rstrip("/")
        callback = urllib.parse.quote(redirect_to or settings.FRONTEND_URL, safe="")
        url = f"{base}/api/auth/reset-password/{token}?callbackURL={callback}"
        email_service.send_password_reset_email(user.email, url)

    def check_reset_token(self, token):
        now = datetime.now(timezone.utc)
        return get_valid_by_identifier(self.db, f"{RESET_PASSWORD_PREFIX}{token}", now) is not None

    def reset_password(self, token, new_password):
        identifier = f"{RESET_PASSWORD_PREFIX}{token}"
        record = get_valid_by_identifier(self.db, identifier, datetime.now(timezone.utc))
        if not record:
            raise InvalidToken()
        user = get_user(self.db, record.value)
        if not user:
            raise InvalidToken()

        password_hash = hash_password(new_password)
        account = get_credential_account(self.db, user.id)
        if account:
            set_password(self.db, account, password_hash, commit=False)
        else:
            create_account(
                self.db,
                AccountCreate(
                    user_id=user.id,
                    account_id=user.id,
                    provider_id=CREDENTIAL_PROVIDER,
                    password=password_hash,
                ),
                commit=False,
            )
        delete_by_identifier(self.db, identifier, commit=False)
        delete_user_sessions(self.db, user.id, commit=False)
        self.db.commit()
        logger.info("Password reset for user %s", user.id)

    def google_authorization_url(self, redirect_uri):
        """Create a state token and return the Google OAuth consent URL."""
        state = uuid.uuid4().hex
        create_verification(
            self.db,
            VerificationCreate(
                identifier=OAUTH_STATE_IDENTIFIER,
                value=state,
                expires_at=datetime.now(timezone.utc) + OAUTH_STATE_EXPIRES,
            ),
        )
        params = {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "access_type": "offline",
            "include_granted_scopes": "true",
            "state": state,
            "prompt": "consent",
        }
        return GOOGLE_AUTH_URL + "?" + urllib.parse.urlencode(params)

    def google_callback(self, code, state, redirect_uri, ip_address=None, user_agent=None):
        """
        Exchange the authorization code, upsert the user and link a google
        account, and return (user, session).
        """
        ver = get_valid(self.db, OAUTH_STATE_IDENTIFIER, state, datetime.now(timezone.utc))
        if not ver:
            raise InvalidToken("Invalid state")
        # One-time use
        delete_verification(self.db, ver.id)

        token_resp = requests.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": redirect_uri,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=15,
        )
        if token_resp.status_code != 200:
            raise InvalidInput("Token exchange failed")

        tokens = token_resp.json()
        access_token = tokens.get("access_token")
        if not access_token:
            raise InvalidInput("No access token returned")

        userinfo = requests.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=15,
        )
        if userinfo.status_code != 200:
            raise InvalidInput("Failed to fetch userinfo")

        info = userinfo.json()
        email = info.get("email")
        if not email or not info.get("sub"):
            raise InvalidInput("No email in userinfo")

        user = get_user_by_email(self.db, email)
        if not user:
            user = create_user(
                self.db,
                UserCreate(
                    email=email,
                    name=info.get("name") or "",
                    image=info.get("picture"),
                    email_verified=bool(info.get("email_verified", True)),
                ),
            )
            logger.info("Created user %s from Google", user.id)
        elif info.get("email_verified") and not user.email_verified:
            user.email_verified = True
            self.db.commit()

        expires_in = tokens.get("expires_in")
        account_payload = AccountCreate(
            user_id=user.id,
            account_id=str(info["sub"]),
            provider_id=GOOGLE_PROVIDER,
            access_token=access_token,
            refresh_token=tokens.get("refresh_token"),
            id_token=tokens.get("id_token"),
            access_token_expires_at=(
                datetime.now(timezone.utc) + timedelta(seconds=int(expires_in)) if expires_in else None
            ),
            scope=tokens.get("scope"),
        )
        account = get_account_by_provider(self.db, GOOGLE_PROVIDER, account_payload.account_id)
        if account:
            update_account_tokens(self.db, account, account_payload)
        else:
            create_account(self.db, account_payload)

        return user, self._issue_session(user, ip_address, user_agent)

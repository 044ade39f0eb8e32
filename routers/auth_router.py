import logging
import urllib.parse
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import RedirectResponse

from core.auth import extract_bearer_token, get_auth_provider
from core.config import settings
from core.errors import Unauthorized, error_boundary
from schemas.auth_schema import (
    AuthResponse,
    ForgetPasswordRequest,
    LoginUrlResponse,
    ResetPasswordRequest,
    SignInRequest,
    SignOutResponse,
    SignUpRequest,
    StatusResponse,
)
from schemas.session_schema import SessionResponse
from schemas.user_schema import UserResponse
from services.auth_provider import AuthProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _client_meta(request: Request):
    ip = request.client.host if request.client else None
    return ip, request.headers.get("user-agent")


def _auth_response(user, session) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        session=SessionResponse.model_validate(session) if session is not None else None,
    )


def _safe_callback(url: str) -> str:
    if url.startswith((settings.FRONTEND_URL, settings.BASE_URL)):
        return url
    return settings.FRONTEND_URL


@router.post("/sign-up", response_model=AuthResponse)
def sign_up(body: SignUpRequest, request: Request, provider: AuthProvider = Depends(get_auth_provider)):
    """
    Create an account and email a verification code. The session stays empty
    until the code is verified and the user signs in.
    """
    ip, ua = _client_meta(request)
    with error_boundary(logger, "Internal server error"):
        user, session = provider.sign_up(body.email, body.password, body.name, ip, ua)
    return _auth_response(user, session)


@router.post("/sign-in", response_model=AuthResponse)
def sign_in(body: SignInRequest, request: Request, provider: AuthProvider = Depends(get_auth_provider)):
    ip, ua = _client_meta(request)
    with error_boundary(logger, "Internal server error"):
        user, session = provider.sign_in(body.email, body.password, ip, ua)
    return _auth_response(user, session)


@router.get("/get-session", response_model=Optional[AuthResponse])
def get_session(
    authorization: Optional[str] = Header(None),
    provider: AuthProvider = Depends(get_auth_provider),
):
    token = extract_bearer_token(authorization)
    if not token:
        return None
    with error_boundary(logger, "Failed to get session"):
        found = provider.get_session(token)
    if not found:
        return None
    user, session = found
    return _auth_response(user, session)


@router.post("/sign-out", response_model=SignOutResponse)
def sign_out(
    authorization: Optional[str] = Header(None),
    provider: AuthProvider = Depends(get_auth_provider),
):
    token = extract_bearer_token(authorization)
    if not token:
        raise Unauthorized("Unauthorized")
    with error_boundary(logger, "Failed to sign out"):
        provider.sign_out(token)
    return SignOutResponse()


@router.post("/forget-password", response_model=StatusResponse)
def forget_password(body: ForgetPasswordRequest, provider: AuthProvider = Depends(get_auth_provider)):
    with error_boundary(logger, "Failed to send reset password email"):
        provider.request_password_reset(body.email, body.redirect_to)
    return StatusResponse()


@router.get("/reset-password/{token}")
def reset_password_callback(
    token: str,
    callbackURL: str = settings.FRONTEND_URL,
    provider: AuthProvider = Depends(get_auth_provider),
):
    """Link target of the reset email: bounce to the frontend with the token or an error."""
    callbackURL = _safe_callback(callbackURL)
    with error_boundary(logger, "Failed to check reset token"):
        valid = provider.check_reset_token(token)
    sep = "&" if "?" in callbackURL else "?"
    if not valid:
        return RedirectResponse(url=f"{callbackURL}{sep}error=INVALID_TOKEN", status_code=302)
    return RedirectResponse(url=f"{callbackURL}{sep}token={urllib.parse.quote(token)}", status_code=302)


@router.post("/reset-password", response_model=StatusResponse)
def reset_password(body: ResetPasswordRequest, provider: AuthProvider = Depends(get_auth_provider)):
    with error_boundary(logger, "Failed to reset password"):
        provider.reset_password(body.token, body.new_password)
    return StatusResponse()


@router.get("/sign-in/google", response_model=LoginUrlResponse)
def google_login_url(request: Request, provider: AuthProvider = Depends(get_auth_provider)):
    redirect_uri = str(request.url_for("google_callback"))
    with error_boundary(logger, "Failed to start Google sign-in"):
        url = provider.google_authorization_url(redirect_uri)
    return LoginUrlResponse(url=url)


@router.get("/callback/google")
def google_callback(code: str, state: str, request: Request, provider: AuthProvider = Depends(get_auth_provider)):
    """
    Handle Google OAuth callback, then redirect to FRONTEND_URL with the
    session token.
    """
    # Must match the redirect_uri used in the initial authorization request
    redirect_uri = str(request.url_for("google_callback"))
    ip, ua = _client_meta(request)
    with error_boundary(logger, "Google sign-in failed"):
        _, session = provider.google_callback(code, state, redirect_uri, ip, ua)

    fe = settings.FRONTEND_URL.rstrip('/')
    redirect_to = f"{fe}/auth/callback?token={urllib.parse.quote(session.token)}"
    return RedirectResponse(url=redirect_to, status_code=302)

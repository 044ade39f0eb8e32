import logging
from contextlib import contextmanager

from fastapi import HTTPException


class AppError(Exception):
    """Base for errors that map onto a JSON ``{"error": ...}`` response."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidInput(AppError):
    status_code = 400
    message = "Invalid input"


class UserAlreadyExists(AppError):
    status_code = 400
    message = "User already exists or invalid input"


class InvalidOrExpiredCode(AppError):
    status_code = 400
    message = "Invalid or expired verification code"


class AlreadyVerified(AppError):
    status_code = 400
    message = "Email already verified"


class InvalidToken(AppError):
    status_code = 400
    message = "Invalid token"


class InvalidCredentials(AppError):
    status_code = 401
    message = "Invalid email or password"


class Unauthorized(AppError):
    status_code = 401
    message = "Not authenticated"


class EmailNotVerified(AppError):
    status_code = 403
    message = "Email not verified"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class UserNotFound(NotFound):
    message = "User not found"


class RateLimited(AppError):
    status_code = 429
    message = "Too many requests, please try again later."


class EmailDeliveryError(AppError):
    message = "Failed to send email"


@contextmanager
def error_boundary(logger: logging.Logger, failure_message: str):
    """Map AppError to its HTTP status and anything unexpected to a logged 500."""
    try:
        yield
    except HTTPException:
        raise
    except AppError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    except Exception as exc:
        logger.exception(failure_message)
        raise HTTPException(status_code=500, detail=failure_message) from exc

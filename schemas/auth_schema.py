from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from schemas.user_schema import UserResponse
from schemas.session_schema import SessionResponse


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    name: str


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    """``session`` is null after sign-up: sessions start once the email is verified."""

    user: UserResponse
    session: SessionResponse | None = None


class ForgetPasswordRequest(BaseModel):
    email: EmailStr
    redirect_to: str | None = None

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


class ResetPasswordRequest(BaseModel):
    new_password: str = Field(min_length=8, max_length=128)
    token: str

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


class StatusResponse(BaseModel):
    status: bool = True


class SignOutResponse(BaseModel):
    success: bool = True


class LoginUrlResponse(BaseModel):
    url: str

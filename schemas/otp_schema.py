from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


class EmailRequest(BaseModel):
    email: EmailStr


class OTPVerifyRequest(BaseModel):
    email: EmailStr
    code: str = Field(min_length=6, max_length=6)


class SuccessResponse(BaseModel):
    message: str
    success: bool = True


class VerificationStatusResponse(BaseModel):
    email_verified: bool
    email: str

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


class TestEmailResponse(BaseModel):
    message: str
    code: str

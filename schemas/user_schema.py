from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    email: str
    name: str = ""
    image: str | None = None
    email_verified: bool = False


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    image: str | None = None
    email_verified: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

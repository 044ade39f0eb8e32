from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class SessionCreate(BaseModel):
    user_id: str
    token: str
    expires_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None


class SessionResponse(BaseModel):
    id: str
    token: str
    expires_at: datetime

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

from datetime import datetime
from pydantic import BaseModel


class AccountCreate(BaseModel):
    user_id: str
    account_id: str
    provider_id: str
    access_token: str | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    access_token_expires_at: datetime | None = None
    scope: str | None = None
    password: str | None = None

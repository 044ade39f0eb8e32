from datetime import datetime
from pydantic import BaseModel


class VerificationCreate(BaseModel):
    identifier: str
    value: str
    expires_at: datetime

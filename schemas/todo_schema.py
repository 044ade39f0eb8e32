from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class TodoCreate(BaseModel):
    """Client payload for creating a todo. Owner is inferred from auth."""
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    completed: bool = False


class TodoUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    completed: bool | None = None


class TodoResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str | None = None
    completed: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

DELETED_PLACEHOLDER = "[deleted]"


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    subreddit_name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=300)
    body: str = Field("", max_length=40000)


class PostEdit(BaseModel):
    """Schema for editing a post; both fields are replaced."""

    title: str = Field(..., min_length=1, max_length=300)
    body: str = Field("", max_length=40000)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    subreddit_name: str
    author: str
    title: str
    body: str
    score: int
    created_at: datetime
    edited_at: datetime | None = None
    deleted: bool

    @model_validator(mode="before")
    @classmethod
    def _mask_deleted(cls, data: object) -> object:
        if isinstance(data, dict):
            data = dict(data)
        else:
            data = {
                name: getattr(data, name)
                for name in cls.model_fields
                if hasattr(data, name)
            }

        if data.get("deleted"):
            data["title"] = DELETED_PLACEHOLDER
            data["body"] = DELETED_PLACEHOLDER
        return data

    model_config = ConfigDict(from_attributes=True)

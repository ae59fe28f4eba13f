"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from threadvote.schemas.post import DELETED_PLACEHOLDER


class CommentCreate(BaseModel):
    """Schema for creating a comment or a reply."""

    post_id: str
    parent_id: str | None = Field(None, description="Parent comment ID for replies")
    body: str = Field(..., min_length=1, max_length=10000)


class CommentEdit(BaseModel):
    body: str = Field(..., min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    """Flat comment as returned by author listings and mutations."""

    id: str
    post_id: str
    parent_id: str | None = None
    author: str
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
            data["body"] = DELETED_PLACEHOLDER
        return data

    model_config = ConfigDict(from_attributes=True)


class CommentTreeResponse(CommentResponse):
    """Comment with its replies nested in sort order."""

    children: list[CommentTreeResponse] = Field(default_factory=list)


CommentTreeResponse.model_rebuild()

"""Shared Pydantic schemas for listing requests."""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from threadvote.core.settings import settings


class SortBy(str, enum.Enum):
    """Sort keys shared by every listing and every comment tree level."""

    NEW = "NEW"
    OLD = "OLD"
    TOP = "TOP"


class ListingParams(BaseModel):
    """Page request for flat listings and root comments.

    Pages are zero-based. Without ``sort`` rows come back in storage order.
    """

    page: int = Field(0, ge=0, description="Zero-based page number")
    size: int = Field(
        default_factory=lambda: settings.default_page_size,
        ge=1,
        description="Page size",
    )
    sort: SortBy | None = Field(None, description="NEW, OLD or TOP")

    model_config = ConfigDict(frozen=True)

    @property
    def limit(self) -> int:
        return min(self.size, settings.max_page_size)

    @property
    def offset(self) -> int:
        return self.page * self.limit

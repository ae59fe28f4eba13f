# src/threadvote/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentEdit, CommentResponse, CommentTreeResponse
from .common import ListingParams, SortBy
from .post import PostCreate, PostEdit, PostResponse
from .vote import MyVoteResponse, VoteOutcomeResponse

__all__ = [
    "CommentCreate", "CommentEdit", "CommentResponse", "CommentTreeResponse",
    "ListingParams", "SortBy",
    "PostCreate", "PostEdit", "PostResponse",
    "MyVoteResponse", "VoteOutcomeResponse",
]

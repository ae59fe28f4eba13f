# src/threadvote/models/__init__.py
"""SQLAlchemy models for the Threadvote application."""

from .comment import Comment
from .post import Post
from .vote import CommentVote, PostVote, VoteType

__all__ = [
    "Comment",
    "Post",
    "CommentVote", "PostVote", "VoteType",
]

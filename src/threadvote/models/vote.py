# src/threadvote/models/vote.py
"""Models capturing voting interactions on posts and comments."""

from __future__ import annotations

import enum

from sqlalchemy import Enum, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from threadvote.db.session import Base
from threadvote.models.ids import ID_LENGTH, new_id


class VoteType(str, enum.Enum):
    """Direction of a single vote."""

    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"

    def opposite(self) -> VoteType:
        return _OPPOSITES[self]


_OPPOSITES = {
    VoteType.UPVOTE: VoteType.DOWNVOTE,
    VoteType.DOWNVOTE: VoteType.UPVOTE,
}

_VOTE_TYPE = Enum(VoteType, name="vote_type", native_enum=False, length=16)


class PostVote(Base):
    """Per-user vote on a post."""

    __tablename__ = "post_vote"
    __table_args__ = (
        # Exactly one vote per (post, voter).
        UniqueConstraint("post_id", "username", name="uq_post_vote_post_username"),
        Index("ix_post_vote_post_id_vote_type", "post_id", "vote_type"),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(Text, nullable=False)
    vote_type: Mapped[VoteType] = mapped_column(_VOTE_TYPE, nullable=False)

    @property
    def subject_id(self) -> str:
        return self.post_id


class CommentVote(Base):
    """Per-user vote on a comment."""

    __tablename__ = "comment_vote"
    __table_args__ = (
        UniqueConstraint("comment_id", "username", name="uq_comment_vote_comment_username"),
        Index("ix_comment_vote_comment_id_vote_type", "comment_id", "vote_type"),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    comment_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(Text, nullable=False)
    vote_type: Mapped[VoteType] = mapped_column(_VOTE_TYPE, nullable=False)

    @property
    def subject_id(self) -> str:
        return self.comment_id

# src/threadvote/models/comment.py
"""SQLAlchemy models for threaded comments."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadvote.db.session import Base
from threadvote.db.time import utcnow
from threadvote.models.ids import ID_LENGTH, new_id


class Comment(Base):
    """Comment on a post, optionally replying to another comment.

    Comments with ``parent_id = NULL`` are root comments of their post.
    """

    __tablename__ = "comment"
    __table_args__ = (
        Index("ix_comment_post_root", "post_id", "parent_id"),
        Index("ix_comment_parent_id", "parent_id"),
        Index("ix_comment_author", "author"),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("post.id"),
        nullable=False,
    )
    parent_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("comment.id"),
        nullable=True,
    )
    author: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    score: Mapped[int] = mapped_column(default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    edited_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    deleted: Mapped[bool] = mapped_column(default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Comment {self.id} post={self.post_id} parent={self.parent_id} score={self.score}>"

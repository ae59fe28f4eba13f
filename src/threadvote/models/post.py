# src/threadvote/models/post.py
"""SQLAlchemy models for posts."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadvote.db.session import Base
from threadvote.db.time import utcnow
from threadvote.models.ids import ID_LENGTH, new_id


class Post(Base):
    """Top-level content submitted to a subreddit.

    ``score`` caches the vote ledger aggregate and is only written by the
    score aggregator.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_subreddit_name", "subreddit_name"),
        Index("ix_post_author", "author"),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    subreddit_name: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    score: Mapped[int] = mapped_column(default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    edited_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Soft delete only; the row stays addressable.
    deleted: Mapped[bool] = mapped_column(default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Post {self.id} r/{self.subreddit_name} author={self.author} score={self.score}>"

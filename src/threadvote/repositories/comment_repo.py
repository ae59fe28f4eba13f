"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from threadvote.models.comment import Comment
from threadvote.repositories.listing import apply_page, apply_sort
from threadvote.schemas.common import ListingParams, SortBy

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, comment_id: str) -> Comment | None:
        return self.session.get(Comment, comment_id)

    def create(
        self,
        *,
        post_id: str,
        parent_id: str | None,
        author: str,
        body: str,
    ) -> Comment:
        """Insert a new comment with a zero score and return the persisted instance."""
        comment = Comment(
            post_id=post_id,
            parent_id=parent_id,
            author=author,
            body=body,
            score=0,
        )
        self.session.add(comment)
        self.session.flush()
        return comment

    def list_roots(self, post_id: str, params: ListingParams) -> list[Comment]:
        """Return one page of the post's root comments."""
        stmt = select(Comment).where(Comment.post_id == post_id, Comment.parent_id.is_(None))
        return list(self.session.scalars(apply_page(stmt, Comment, params)))

    def list_children(self, parent_id: str, sort: SortBy | None) -> list[Comment]:
        """Return every direct reply to ``parent_id``; replies are never paged."""
        stmt = select(Comment).where(Comment.parent_id == parent_id)
        return list(self.session.scalars(apply_sort(stmt, Comment, sort)))

    def list_by_author(self, author: str, params: ListingParams) -> list[Comment]:
        stmt = select(Comment).where(Comment.author == author)
        return list(self.session.scalars(apply_page(stmt, Comment, params)))

    def list_ids(self) -> list[str]:
        return list(self.session.scalars(select(Comment.id)))

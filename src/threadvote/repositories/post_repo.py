"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from threadvote.models.post import Post
from threadvote.repositories.listing import apply_page
from threadvote.schemas.common import ListingParams

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, subreddit_name: str, author: str, title: str, body: str) -> Post:
        """Insert a new post with a zero score and return the persisted instance."""
        post = Post(
            subreddit_name=subreddit_name,
            author=author,
            title=title,
            body=body,
            score=0,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def list_by_subreddit(self, subreddit_name: str, params: ListingParams) -> list[Post]:
        stmt = select(Post).where(Post.subreddit_name == subreddit_name)
        return list(self.session.scalars(apply_page(stmt, Post, params)))

    def list_by_author(self, author: str, params: ListingParams) -> list[Post]:
        stmt = select(Post).where(Post.author == author)
        return list(self.session.scalars(apply_page(stmt, Post, params)))

    def list_ids(self) -> list[str]:
        return list(self.session.scalars(select(Post.id)))

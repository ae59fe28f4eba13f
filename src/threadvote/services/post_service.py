"""Service-level operations for posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from threadvote.models.post import Post
from threadvote.repositories.post_repo import PostRepository
from threadvote.repositories.vote_repo import post_vote_ledger
from threadvote.schemas.common import ListingParams
from threadvote.schemas.post import PostCreate, PostEdit
from threadvote.services.subjects import SubjectService

logger = logging.getLogger(__name__)


class PostService(SubjectService[Post]):
    """Creates, edits, deletes, votes on and lists posts."""

    kind = "post"
    model = Post

    def __init__(self, session: Session) -> None:
        super().__init__(session, post_vote_ledger(session))
        self.posts = PostRepository(session)

    def create(self, username: str, data: PostCreate) -> Post:
        """Create a post authored by ``username``.

        The author's upvote is recorded right away, so the returned post
        has a score of 1.
        """
        post = self.posts.create(
            subreddit_name=data.subreddit_name,
            author=username,
            title=data.title,
            body=data.body,
        )
        logger.info("Created post %s in r/%s by %s", post.id, post.subreddit_name, username)
        return self._seed_author_vote(post)

    def edit(self, post_id: str, username: str, data: PostEdit) -> Post:
        post = self.get_owned(post_id, username)
        post.title = data.title
        post.body = data.body
        return self._mark_edited(post)

    def list_by_subreddit(self, subreddit_name: str, params: ListingParams) -> list[Post]:
        return self.posts.list_by_subreddit(subreddit_name, params)

    def list_by_author(self, username: str, params: ListingParams) -> list[Post]:
        return self.posts.list_by_author(username, params)

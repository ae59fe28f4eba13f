"""Service-level operations for comments."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from threadvote.models.comment import Comment
from threadvote.models.post import Post
from threadvote.repositories.comment_repo import CommentRepository
from threadvote.repositories.vote_repo import comment_vote_ledger
from threadvote.schemas.comment import CommentCreate, CommentEdit
from threadvote.schemas.common import ListingParams
from threadvote.services.comment_tree import CommentTree, CommentTreeAssembler
from threadvote.services.errors import NotFoundError
from threadvote.services.subjects import SubjectService

logger = logging.getLogger(__name__)


class CommentService(SubjectService[Comment]):
    """Creates, edits, deletes, votes on and lists comments."""

    kind = "comment"
    model = Comment

    def __init__(self, session: Session) -> None:
        super().__init__(session, comment_vote_ledger(session))
        self.comments = CommentRepository(session)
        self.trees = CommentTreeAssembler(self.comments)

    def create(self, username: str, data: CommentCreate) -> Comment:
        """Create a comment, or a reply when ``parent_id`` is set.

        Raises:
            NotFoundError: If the post is missing, or the parent comment is
                missing or belongs to another post.
        """
        if self.session.get(Post, data.post_id) is None:
            raise NotFoundError("post", data.post_id)

        if data.parent_id is not None:
            parent = self.comments.get_by_id(data.parent_id)
            # Keep every parent chain inside a single post.
            if parent is None or parent.post_id != data.post_id:
                raise NotFoundError(self.kind, data.parent_id)

        comment = self.comments.create(
            post_id=data.post_id,
            parent_id=data.parent_id,
            author=username,
            body=data.body,
        )
        logger.info("Created comment %s on post %s by %s", comment.id, data.post_id, username)
        return self._seed_author_vote(comment)

    def edit(self, comment_id: str, username: str, data: CommentEdit) -> Comment:
        comment = self.get_owned(comment_id, username)
        comment.body = data.body
        return self._mark_edited(comment)

    def tree_for_post(self, post_id: str, params: ListingParams) -> list[CommentTree]:
        return self.trees.build_tree(post_id, params)

    def list_by_author(self, username: str, params: ListingParams) -> list[Comment]:
        return self.comments.list_by_author(username, params)

"""Assembly of threaded comment trees.

Only root comments are paged. Every reply below a root is loaded, using
the root page's sort key at every depth, so a thread is never partially
shown.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from threadvote.models.comment import Comment
from threadvote.repositories.comment_repo import CommentRepository
from threadvote.schemas.common import ListingParams


@dataclass
class CommentTree:
    """Read-only projection of a comment and its ordered replies."""

    id: str
    post_id: str
    parent_id: str | None
    author: str
    body: str
    score: int
    created_at: datetime
    edited_at: datetime | None
    deleted: bool
    children: list[CommentTree] = field(default_factory=list)

    @classmethod
    def of(cls, comment: Comment) -> CommentTree:
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            author=comment.author,
            body=comment.body,
            score=comment.score,
            created_at=comment.created_at,
            edited_at=comment.edited_at,
            deleted=comment.deleted,
        )


class CommentTreeAssembler:
    """Builds comment trees for a post with one fetch per node."""

    def __init__(self, comments: CommentRepository) -> None:
        self.comments = comments

    def build_tree(self, post_id: str, params: ListingParams) -> list[CommentTree]:
        """Return one page of root comments with all of their replies attached.

        Uses an explicit stack instead of recursion so deep threads do not
        grow the Python call stack. Each node's children are appended in
        fetch order, which is the requested sort order.
        """
        roots = [CommentTree.of(c) for c in self.comments.list_roots(post_id, params)]

        pending = list(roots)
        while pending:
            node = pending.pop()
            children = [
                CommentTree.of(c) for c in self.comments.list_children(node.id, params.sort)
            ]
            node.children.extend(children)
            pending.extend(children)

        return roots

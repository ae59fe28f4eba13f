"""create posts, comments and vote ledgers

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-19 09:12:41.530114

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

vote_type = sa.Enum("UPVOTE", "DOWNVOTE", name="vote_type", native_enum=False, length=16)


def upgrade() -> None:
    """Create subject tables and their vote ledgers."""
    op.create_table(
        "post",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("subreddit_name", sa.Text(), nullable=False),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("edited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_subreddit_name", "post", ["subreddit_name"])
    op.create_index("ix_post_author", "post", ["author"])

    op.create_table(
        "comment",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("post_id", sa.String(length=32), nullable=False),
        sa.Column("parent_id", sa.String(length=32), nullable=True),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("edited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"]),
        sa.ForeignKeyConstraint(["parent_id"], ["comment.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comment_post_root", "comment", ["post_id", "parent_id"])
    op.create_index("ix_comment_parent_id", "comment", ["parent_id"])
    op.create_index("ix_comment_author", "comment", ["author"])

    op.create_table(
        "post_vote",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("post_id", sa.String(length=32), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("vote_type", vote_type, nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "username", name="uq_post_vote_post_username"),
    )
    op.create_index("ix_post_vote_post_id_vote_type", "post_vote", ["post_id", "vote_type"])

    op.create_table(
        "comment_vote",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("comment_id", sa.String(length=32), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("vote_type", vote_type, nullable=False),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "username", name="uq_comment_vote_comment_username"),
    )
    op.create_index(
        "ix_comment_vote_comment_id_vote_type", "comment_vote", ["comment_id", "vote_type"]
    )


def downgrade() -> None:
    """Drop vote ledgers and subject tables."""
    op.drop_index("ix_comment_vote_comment_id_vote_type", table_name="comment_vote")
    op.drop_table("comment_vote")
    op.drop_index("ix_post_vote_post_id_vote_type", table_name="post_vote")
    op.drop_table("post_vote")
    op.drop_index("ix_comment_author", table_name="comment")
    op.drop_index("ix_comment_parent_id", table_name="comment")
    op.drop_index("ix_comment_post_root", table_name="comment")
    op.drop_table("comment")
    op.drop_index("ix_post_author", table_name="post")
    op.drop_index("ix_post_subreddit_name", table_name="post")
    op.drop_table("post")

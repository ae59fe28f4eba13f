"""Vote ledger: one vote record per (subject, voter) pair."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import case, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session
from sqlalchemy.orm.exc import StaleDataError

from threadvote.models.vote import CommentVote, PostVote, VoteType
from threadvote.services.errors import AlreadyExistsError, StaleVoteError

__all__ = ["Tally", "VoteLedger", "comment_vote_ledger", "post_vote_ledger"]

VoteT = TypeVar("VoteT", PostVote, CommentVote)


@dataclass(frozen=True)
class Tally:
    """Grouped vote counts for a single subject."""

    upvotes: int = 0
    downvotes: int = 0

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes


class VoteLedger(Generic[VoteT]):
    """Durable store of votes for one subject kind.

    Args:
        session: Active SQLAlchemy session.
        model: Vote model class (``PostVote`` or ``CommentVote``).
        subject_column: Column on ``model`` holding the subject ID.
    """

    def __init__(
        self,
        session: Session,
        model: type[VoteT],
        subject_column: InstrumentedAttribute[str],
    ) -> None:
        self.session = session
        self.model = model
        self.subject_column = subject_column

    def find(self, subject_id: str, username: str) -> VoteT | None:
        """Return the voter's current vote on the subject, if any."""
        stmt = select(self.model).where(
            self.subject_column == subject_id,
            self.model.username == username,
        )
        return self.session.scalars(stmt).first()

    def new_vote(self, subject_id: str, username: str, vote_type: VoteType) -> VoteT:
        return self.model(
            **{self.subject_column.key: subject_id},
            username=username,
            vote_type=vote_type,
        )

    def put(self, vote: VoteT) -> VoteT:
        """Insert or update ``vote``.

        The write runs inside a savepoint so that a conflicting write
        leaves the caller's transaction intact.

        Raises:
            AlreadyExistsError: If another vote for the same pair was stored first.
            StaleVoteError: If ``vote`` was removed by another request after it was read.
        """
        try:
            with self.session.begin_nested():
                self.session.add(vote)
        except IntegrityError as err:
            raise AlreadyExistsError(
                f"Vote already exists for {vote.subject_id} by {vote.username}"
            ) from err
        except StaleDataError as err:
            raise StaleVoteError(
                f"Vote for {vote.subject_id} by {vote.username} changed concurrently"
            ) from err
        return vote

    def delete(self, vote: VoteT) -> None:
        """Remove ``vote`` by primary key.

        Raises:
            StaleVoteError: If the row was already removed by another request.
        """
        result = self.session.execute(delete(self.model).where(self.model.id == vote.id))
        if result.rowcount == 0:
            raise StaleVoteError(
                f"Vote for {vote.subject_id} by {vote.username} changed concurrently"
            )

    def aggregate(self, subject_id: str) -> Tally:
        """Count the subject's upvotes and downvotes in a single grouped query."""
        stmt = select(
            self._count_of(VoteType.UPVOTE),
            self._count_of(VoteType.DOWNVOTE),
        ).where(self.subject_column == subject_id)
        upvotes, downvotes = self.session.execute(stmt).one()
        return Tally(upvotes=int(upvotes), downvotes=int(downvotes))

    def _count_of(self, vote_type: VoteType) -> Any:
        return func.coalesce(
            func.sum(case((self.model.vote_type == vote_type, 1), else_=0)),
            0,
        )


def post_vote_ledger(session: Session) -> VoteLedger[PostVote]:
    return VoteLedger(session, PostVote, PostVote.post_id)


def comment_vote_ledger(session: Session) -> VoteLedger[CommentVote]:
    return VoteLedger(session, CommentVote, CommentVote.comment_id)

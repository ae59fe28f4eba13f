"""Lifecycle operations shared by posts and comments."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from threadvote.db.time import utcnow
from threadvote.models.vote import VoteType
from threadvote.repositories.vote_repo import VoteLedger
from threadvote.services.errors import NotAuthorError, NotFoundError
from threadvote.services.votes import ScoreAggregator, VoteOutcome, VoteToggleEngine

logger = logging.getLogger(__name__)

SubjectT = TypeVar("SubjectT")


class SubjectService(Generic[SubjectT]):
    """Base service for an entity that can be voted on.

    Subclasses set ``kind`` and ``model`` and provide their vote ledger.
    """

    kind: str = "subject"
    model: type[Any]

    def __init__(self, session: Session, ledger: VoteLedger[Any]) -> None:
        self.session = session
        self.ledger = ledger
        self.aggregator = ScoreAggregator(session, self.model, ledger, self.kind)
        self.toggle = VoteToggleEngine(ledger, self.aggregator)

    def get(self, subject_id: str) -> SubjectT:
        """Return the subject, including soft-deleted ones.

        Raises:
            NotFoundError: If no subject has this ID.
        """
        subject = self.session.get(self.model, subject_id)
        if subject is None:
            raise NotFoundError(self.kind, subject_id)
        return subject

    def get_owned(self, subject_id: str, username: str) -> SubjectT:
        """Return the subject if ``username`` authored it.

        Raises:
            NotFoundError: If no subject has this ID.
            NotAuthorError: If ``username`` is not the author.
        """
        subject = self.get(subject_id)
        if subject.author != username:
            raise NotAuthorError(self.kind, username, subject_id)
        return subject

    def _seed_author_vote(self, subject: SubjectT) -> SubjectT:
        # New subjects start at 0 and immediately carry their author's upvote.
        self.ledger.put(self.ledger.new_vote(subject.id, subject.author, VoteType.UPVOTE))
        self.session.commit()
        return self.aggregator.recompute_score(subject.id)

    def _mark_edited(self, subject: SubjectT) -> SubjectT:
        subject.edited_at = utcnow()
        self.session.commit()
        logger.info("Edited %s %s", self.kind, subject.id)
        return subject

    def delete(self, subject_id: str, username: str) -> None:
        """Soft-delete the subject; score and content stay stored."""
        subject = self.get_owned(subject_id, username)
        subject.deleted = True
        self.session.commit()
        logger.info("Deleted %s %s by %s", self.kind, subject_id, username)

    def vote(self, subject_id: str, vote_type: VoteType, username: str) -> VoteOutcome:
        """Apply a vote from any user; deleted subjects accept votes too."""
        self.get(subject_id)
        return self.toggle.apply_vote(subject_id, username, vote_type)

    def my_vote(self, subject_id: str, username: str) -> VoteType | None:
        self.get(subject_id)
        vote = self.ledger.find(subject_id, username)
        return vote.vote_type if vote is not None else None

    def recompute_score(self, subject_id: str) -> SubjectT:
        return self.aggregator.recompute_score(subject_id)

"""Vote toggling and score aggregation.

A vote request runs as two explicit steps: the ledger mutation is
committed first, then the subject's cached score is recomputed from the
ledger and committed. Recomputing is idempotent, so rerunning it after a
failure between the two steps converges without double counting.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from threadvote.models.vote import VoteType
from threadvote.repositories.vote_repo import VoteLedger
from threadvote.services.errors import AlreadyExistsError, NotFoundError, StaleVoteError

logger = logging.getLogger(__name__)


class VoteEffect(str, enum.Enum):
    """What a vote request did to the voter's ledger entry."""

    RECORDED = "RECORDED"
    OVERRIDDEN = "OVERRIDDEN"
    RETRACTED = "RETRACTED"


@dataclass(frozen=True)
class VoteOutcome:
    """Result of applying a vote intent."""

    effect: VoteEffect
    my_vote: VoteType | None
    score: int


class ScoreAggregator:
    """Recomputes a subject's net score from the vote ledger.

    Args:
        session: Active SQLAlchemy session.
        subject_model: ORM class carrying the ``score`` column.
        ledger: Vote ledger for the same subject kind.
        kind: Human-readable subject kind used in errors and logs.
    """

    def __init__(
        self,
        session: Session,
        subject_model: type[Any],
        ledger: VoteLedger[Any],
        kind: str,
    ) -> None:
        self.session = session
        self.subject_model = subject_model
        self.ledger = ledger
        self.kind = kind

    def recompute_score(self, subject_id: str) -> Any:
        """Write ``upvotes - downvotes`` onto the subject and persist it.

        Raises:
            NotFoundError: If the subject does not exist.
        """
        subject = self.session.get(self.subject_model, subject_id)
        if subject is None:
            raise NotFoundError(self.kind, subject_id)

        tally = self.ledger.aggregate(subject_id)
        subject.score = tally.score
        self.session.commit()
        logger.debug(
            "Recomputed %s %s score=%d (up=%d down=%d)",
            self.kind,
            subject_id,
            tally.score,
            tally.upvotes,
            tally.downvotes,
        )
        return subject


class VoteToggleEngine:
    """Applies the three-way vote toggle against the ledger.

    - no vote yet: record the requested vote
    - opposite vote: flip it to the requested type
    - same vote: retract it
    """

    def __init__(self, ledger: VoteLedger[Any], aggregator: ScoreAggregator) -> None:
        self.ledger = ledger
        self.aggregator = aggregator

    def apply_vote(self, subject_id: str, username: str, vote_type: VoteType) -> VoteOutcome:
        """Toggle ``username``'s vote on the subject, then refresh its score."""
        try:
            effect, my_vote = self._toggle(subject_id, username, vote_type)
        except (AlreadyExistsError, StaleVoteError):
            # Another request changed the pair after it was read; toggle against the stored state.
            logger.warning(
                "Concurrent vote on %s %s by %s, retrying against stored vote",
                self.aggregator.kind,
                subject_id,
                username,
            )
            effect, my_vote = self._toggle(subject_id, username, vote_type)
        self.ledger.session.commit()

        subject = self.aggregator.recompute_score(subject_id)
        logger.debug(
            "Vote %s on %s %s by %s: %s",
            vote_type.value,
            self.aggregator.kind,
            subject_id,
            username,
            effect.value,
        )
        return VoteOutcome(effect=effect, my_vote=my_vote, score=subject.score)

    def _toggle(
        self,
        subject_id: str,
        username: str,
        vote_type: VoteType,
    ) -> tuple[VoteEffect, VoteType | None]:
        existing = self.ledger.find(subject_id, username)
        if existing is None:
            self.ledger.put(self.ledger.new_vote(subject_id, username, vote_type))
            return VoteEffect.RECORDED, vote_type

        if existing.vote_type == vote_type.opposite():
            existing.vote_type = vote_type
            self.ledger.put(existing)
            return VoteEffect.OVERRIDDEN, vote_type

        self.ledger.delete(existing)
        return VoteEffect.RETRACTED, None

"""Tests for the vote ledger, toggle engine and score aggregator."""

import pytest
from sqlalchemy import delete, select

from threadvote.models import CommentVote, PostVote, VoteType
from threadvote.repositories.vote_repo import Tally
from threadvote.services.errors import NotFoundError
from threadvote.services.votes import VoteEffect


@pytest.fixture(params=["post", "comment"])
def voted(request, test_post):
    """Return ``(service, subject)`` for a fresh subject authored by alice."""
    if request.param == "post":
        return request.getfixturevalue("post_service"), test_post
    make_comment = request.getfixturevalue("make_comment")
    return request.getfixturevalue("comment_service"), make_comment(test_post)


def _voters(db_session, service, subject_id):
    ledger = service.ledger
    stmt = select(ledger.model).where(ledger.subject_column == subject_id)
    return {v.username: v.vote_type for v in db_session.scalars(stmt)}


def _remove_behind_session(db_session, service, vote):
    # Mimics another request deleting the row; the loaded instance stays in the session.
    model = service.ledger.model
    db_session.execute(
        delete(model)
        .where(model.id == vote.id)
        .execution_options(synchronize_session=False)
    )
    db_session.commit()


def _serve_first_read(monkeypatch, service, vote):
    real_find = service.ledger.find
    calls = {"n": 0}

    def find(subject_id, username):
        calls["n"] += 1
        if calls["n"] == 1:
            return vote
        return real_find(subject_id, username)

    monkeypatch.setattr(service.ledger, "find", find)
    return calls


def test_opposite_is_an_involution() -> None:
    assert VoteType.UPVOTE.opposite() is VoteType.DOWNVOTE
    assert VoteType.DOWNVOTE.opposite() is VoteType.UPVOTE
    for vote_type in VoteType:
        assert vote_type.opposite().opposite() is vote_type


def test_tally_score() -> None:
    assert Tally().score == 0
    assert Tally(upvotes=3, downvotes=5).score == -2


def test_created_post_has_author_upvote(db_session, test_post) -> None:
    """A new post starts at score 1 with a single upvote by its author."""
    assert test_post.score == 1
    votes = list(db_session.scalars(select(PostVote).where(PostVote.post_id == test_post.id)))
    assert [(v.username, v.vote_type) for v in votes] == [("alice", VoteType.UPVOTE)]


def test_created_comment_has_author_upvote(db_session, test_post, make_comment) -> None:
    comment = make_comment(test_post, author="bob")
    assert comment.score == 1
    votes = list(
        db_session.scalars(select(CommentVote).where(CommentVote.comment_id == comment.id))
    )
    assert [(v.username, v.vote_type) for v in votes] == [("bob", VoteType.UPVOTE)]


def test_first_vote_is_recorded(voted) -> None:
    service, subject = voted
    outcome = service.vote(subject.id, VoteType.UPVOTE, "bob")
    assert outcome.effect is VoteEffect.RECORDED
    assert outcome.my_vote is VoteType.UPVOTE
    assert outcome.score == 2
    assert service.get(subject.id).score == 2


def test_same_vote_twice_retracts(db_session, voted) -> None:
    """UP then UP again leaves no record and restores the starting score."""
    service, subject = voted
    before = subject.score

    service.vote(subject.id, VoteType.UPVOTE, "bob")
    outcome = service.vote(subject.id, VoteType.UPVOTE, "bob")

    assert outcome.effect is VoteEffect.RETRACTED
    assert outcome.my_vote is None
    assert outcome.score == before
    assert service.my_vote(subject.id, "bob") is None
    assert _voters(db_session, service, subject.id) == {"alice": VoteType.UPVOTE}


def test_opposite_vote_overrides(db_session, voted) -> None:
    """UP then DOWN leaves one DOWN record and moves the score by -2."""
    service, subject = voted
    up = service.vote(subject.id, VoteType.UPVOTE, "bob")
    down = service.vote(subject.id, VoteType.DOWNVOTE, "bob")

    assert down.effect is VoteEffect.OVERRIDDEN
    assert down.my_vote is VoteType.DOWNVOTE
    assert down.score - up.score == -2
    assert _voters(db_session, service, subject.id) == {
        "alice": VoteType.UPVOTE,
        "bob": VoteType.DOWNVOTE,
    }


def test_author_can_retract_own_upvote(voted) -> None:
    service, subject = voted
    outcome = service.vote(subject.id, VoteType.UPVOTE, "alice")
    assert outcome.effect is VoteEffect.RETRACTED
    assert outcome.score == 0


@pytest.mark.parametrize(
    "sequence",
    [
        [("bob", VoteType.UPVOTE)],
        [("bob", VoteType.DOWNVOTE), ("carol", VoteType.DOWNVOTE)],
        [("bob", VoteType.UPVOTE), ("bob", VoteType.DOWNVOTE), ("carol", VoteType.UPVOTE)],
        [("alice", VoteType.DOWNVOTE), ("bob", VoteType.DOWNVOTE), ("bob", VoteType.DOWNVOTE)],
    ],
)
def test_score_matches_ledger_after_every_vote(voted, sequence) -> None:
    service, subject = voted
    for username, vote_type in sequence:
        outcome = service.vote(subject.id, vote_type, username)
        tally = service.ledger.aggregate(subject.id)
        assert outcome.score == tally.score
        assert service.get(subject.id).score == tally.score


def test_comment_votes_are_separate_from_post_votes(
    post_service, comment_service, test_post, make_comment
) -> None:
    comment = make_comment(test_post)
    comment_service.vote(comment.id, VoteType.DOWNVOTE, "bob")

    assert comment_service.get(comment.id).score == 0
    assert post_service.get(test_post.id).score == 1
    assert post_service.my_vote(test_post.id, "bob") is None
    assert comment_service.my_vote(comment.id, "bob") is VoteType.DOWNVOTE


def test_vote_on_missing_subject(post_service, comment_service) -> None:
    with pytest.raises(NotFoundError):
        post_service.vote("missing", VoteType.UPVOTE, "bob")
    with pytest.raises(NotFoundError):
        comment_service.vote("missing", VoteType.UPVOTE, "bob")


def test_vote_on_deleted_post_is_allowed(post_service, test_post) -> None:
    post_service.delete(test_post.id, "alice")
    outcome = post_service.vote(test_post.id, VoteType.DOWNVOTE, "bob")
    assert outcome.effect is VoteEffect.RECORDED
    assert outcome.score == 0


def test_recompute_repairs_stale_score(db_session, post_service, test_post) -> None:
    """Recomputing is idempotent and restores the ledger aggregate."""
    post_service.vote(test_post.id, VoteType.UPVOTE, "bob")
    test_post.score = 42
    db_session.commit()

    assert post_service.recompute_score(test_post.id).score == 2
    assert post_service.recompute_score(test_post.id).score == 2


def test_recompute_missing_subject(post_service) -> None:
    with pytest.raises(NotFoundError):
        post_service.recompute_score("missing")


def test_concurrent_insert_falls_back_to_stored_vote(db_session, monkeypatch, voted) -> None:
    """A lost insert race is resolved against the row that won it."""
    service, subject = voted
    service.vote(subject.id, VoteType.UPVOTE, "bob")

    # The first read happened before the concurrent insert.
    calls = _serve_first_read(monkeypatch, service, None)

    outcome = service.vote(subject.id, VoteType.UPVOTE, "bob")

    assert calls["n"] == 2
    assert outcome.effect is VoteEffect.RETRACTED
    assert outcome.score == 1
    assert _voters(db_session, service, subject.id) == {"alice": VoteType.UPVOTE}


def test_override_of_concurrently_retracted_vote(db_session, monkeypatch, voted) -> None:
    """Flipping a vote another request already removed records a fresh vote."""
    service, subject = voted
    service.vote(subject.id, VoteType.UPVOTE, "bob")
    stale = service.ledger.find(subject.id, "bob")
    _remove_behind_session(db_session, service, stale)
    calls = _serve_first_read(monkeypatch, service, stale)

    outcome = service.vote(subject.id, VoteType.DOWNVOTE, "bob")

    assert calls["n"] == 2
    assert outcome.effect is VoteEffect.RECORDED
    assert outcome.my_vote is VoteType.DOWNVOTE
    assert outcome.score == 0
    assert _voters(db_session, service, subject.id) == {
        "alice": VoteType.UPVOTE,
        "bob": VoteType.DOWNVOTE,
    }


def test_retract_of_concurrently_retracted_vote(db_session, monkeypatch, voted) -> None:
    """Retracting a vote that is already gone toggles against the empty ledger."""
    service, subject = voted
    service.vote(subject.id, VoteType.UPVOTE, "bob")
    stale = service.ledger.find(subject.id, "bob")
    _remove_behind_session(db_session, service, stale)
    calls = _serve_first_read(monkeypatch, service, stale)

    outcome = service.vote(subject.id, VoteType.UPVOTE, "bob")

    assert calls["n"] == 2
    assert outcome.effect is VoteEffect.RECORDED
    assert outcome.score == 2
    assert service.get(subject.id).score == service.ledger.aggregate(subject.id).score

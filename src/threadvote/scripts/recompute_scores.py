"""Recompute cached scores from the vote ledgers.

Repairs scores left stale when a request failed between the vote write and
the score write. Recomputing is idempotent, so it is safe to rerun.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from threadvote.core.logging import configure_logging
from threadvote.core.settings import settings
from threadvote.db.session import SessionLocal
from threadvote.repositories.comment_repo import CommentRepository
from threadvote.repositories.post_repo import PostRepository
from threadvote.services.comment_service import CommentService
from threadvote.services.errors import NotFoundError
from threadvote.services.post_service import PostService
from threadvote.services.subjects import SubjectService

logger = logging.getLogger(__name__)


def recompute_all(
    db: Session,
    *,
    posts: bool = True,
    comments: bool = True,
) -> dict[str, int]:
    """Recompute every post and/or comment score; return how many changed per kind."""
    changed = {"post": 0, "comment": 0}
    targets: list[tuple[SubjectService, list[str]]] = []
    if posts:
        targets.append((PostService(db), PostRepository(db).list_ids()))
    if comments:
        targets.append((CommentService(db), CommentRepository(db).list_ids()))

    for service, subject_ids in targets:
        for subject_id in subject_ids:
            before = service.get(subject_id).score
            after = service.recompute_score(subject_id).score
            if before != after:
                logger.info(
                    "Repaired %s %s score %d -> %d", service.kind, subject_id, before, after
                )
                changed[service.kind] += 1
    return changed


def recompute_one(db: Session, subject_id: str) -> int:
    """Recompute a single post or comment score by ID."""
    for service in (PostService(db), CommentService(db)):
        try:
            return service.recompute_score(subject_id).score
        except NotFoundError:
            continue
    raise NotFoundError("subject", subject_id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Recompute cached vote scores")
    parser.add_argument("--posts", action="store_true", help="Only recompute post scores")
    parser.add_argument("--comments", action="store_true", help="Only recompute comment scores")
    parser.add_argument("--id", dest="subject_id", default=None, help="Recompute a single subject")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    db = SessionLocal()
    try:
        if args.subject_id:
            score = recompute_one(db, args.subject_id)
            print(f"[recompute_scores] {args.subject_id} score={score}")
            return
        everything = not (args.posts or args.comments)
        changed = recompute_all(
            db,
            posts=everything or args.posts,
            comments=everything or args.comments,
        )
        print(f"[recompute_scores] repaired posts={changed['post']} comments={changed['comment']}")
    except NotFoundError as exc:
        print(f"[recompute_scores] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()

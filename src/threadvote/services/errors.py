"""Domain errors raised by the Threadvote services.

The API layer maps each error class to an HTTP status. Only the vote
conflicts are retried, once, by the toggle engine.
"""

from __future__ import annotations


class ThreadvoteError(RuntimeError):
    """Base exception for user-facing domain failures."""


class NotFoundError(ThreadvoteError):
    """Raised when a post, comment or other lookup target is absent."""

    def __init__(self, kind: str, subject_id: str) -> None:
        self.kind = kind
        self.subject_id = subject_id
        super().__init__(f"{kind.capitalize()} not found with ID {subject_id}")


class NotAuthorError(ThreadvoteError):
    """Raised when someone other than the author tries to mutate a subject."""

    def __init__(self, kind: str, username: str, subject_id: str) -> None:
        self.kind = kind
        self.username = username
        self.subject_id = subject_id
        super().__init__(f"User {username} is not the author of {kind} with ID {subject_id}")


class AlreadyExistsError(ThreadvoteError):
    """Raised when an insert collides with an existing unique key."""


class StaleVoteError(ThreadvoteError):
    """Raised when a vote row changed or vanished after it was read."""

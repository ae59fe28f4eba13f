"""Identifier helpers shared by the ORM models."""

import uuid

ID_LENGTH = 32


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex

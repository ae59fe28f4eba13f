"""Bearer token helpers.

Identity is owned by an external provider; this module only reads the
username out of a signed JWT and can mint tokens for tooling and tests.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from threadvote.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded into a username."""


def create_access_token(username: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose username claim is ``username``."""
    to_encode: dict[str, object] = {"sub": username, settings.username_claim: username}
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_username(token: str) -> str:
    """Return the username carried by ``token``.

    Raises:
        InvalidTokenError: If the signature, expiry or username claim is invalid.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    username = payload.get(settings.username_claim) or payload.get("sub")
    if not isinstance(username, str) or not username:
        raise InvalidTokenError("Could not validate credentials")
    return username

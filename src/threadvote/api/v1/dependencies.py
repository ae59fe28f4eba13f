"""Shared API dependencies for authentication, paging and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from threadvote.core.security import InvalidTokenError, decode_username
from threadvote.db.session import get_db
from threadvote.schemas.common import ListingParams, SortBy
from threadvote.services.comment_service import CommentService
from threadvote.services.post_service import PostService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_username(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Return the username of the authenticated caller.

    Raises:
        HTTPException: If the bearer token is invalid or carries no username.
    """
    try:
        return decode_username(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_listing_params(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int | None = Query(None, ge=1, description="Page size"),
    sort: SortBy | None = Query(None, description="NEW, OLD or TOP"),
) -> ListingParams:
    """Collect paging query parameters into a ``ListingParams``."""
    if size is None:
        return ListingParams(page=page, sort=sort)
    return ListingParams(page=page, size=size, sort=sort)


def get_post_service(db: SessionDep) -> PostService:
    return PostService(db)


def get_comment_service(db: SessionDep) -> CommentService:
    return CommentService(db)


CurrentUsernameDep = Annotated[str, Depends(get_current_username)]
ListingDep = Annotated[ListingParams, Depends(get_listing_params)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]

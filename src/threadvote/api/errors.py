"""Translation of domain errors into HTTP responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from threadvote.services.errors import (
    AlreadyExistsError,
    NotAuthorError,
    NotFoundError,
    StaleVoteError,
    ThreadvoteError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[ThreadvoteError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotAuthorError: status.HTTP_403_FORBIDDEN,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    StaleVoteError: status.HTTP_409_CONFLICT,
}


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as ``{"detail": message}`` with its mapped status."""
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ThreadvoteError, handle_domain_error)

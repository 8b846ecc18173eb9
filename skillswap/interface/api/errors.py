"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from skillswap.domain.error import (
    ChannelNotOpenError,
    DataIntegrityError,
    DomainError,
    DuplicateDeclarationError,
    DuplicatePendingError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    NotParticipantError,
    SelfMatchError,
    StoreUnavailableError,
)
from skillswap.domain.repository import UnitOfWork

# Seconds clients should wait before retrying after a store outage
RETRY_AFTER_SECONDS = 5

# Ordered most specific first
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (SelfMatchError, status.HTTP_400_BAD_REQUEST),
    (DuplicatePendingError, status.HTTP_409_CONFLICT),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotParticipantError, status.HTTP_403_FORBIDDEN),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (ChannelNotOpenError, status.HTTP_409_CONFLICT),
    (DuplicateDeclarationError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DataIntegrityError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error, 500 when unmapped."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _abandon_request_work(request: Request) -> None:
    # Handlers run inside the request scope, which would otherwise commit
    container = getattr(request.state, "dishka_container", None)
    if container is None:
        return
    try:
        unit_of_work = await container.get(UnitOfWork)
        await unit_of_work.rollback()
    except SQLAlchemyError as e:
        logfire.warn("Rollback after domain error failed", error=str(e))


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error with its user-facing message.

    The request's writes and queued live pushes are abandoned first.
    """
    assert isinstance(exc, DomainError)
    status_code = status_for(exc)
    await _abandon_request_work(request)

    content: dict[str, object] = {
        "detail": exc.user_message,
        "error": type(exc).__name__,
    }
    headers: dict[str, str] = {}

    if isinstance(exc, DuplicatePendingError) and exc.existing_match_id is not None:
        content["match_id"] = str(exc.existing_match_id)
    if exc.retryable:
        headers["Retry-After"] = str(RETRY_AFTER_SECONDS)

    if status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Invalid input that passed request parsing, e.g. a malformed id."""
    logfire.warn("Validation error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the domain error mapping to the app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)

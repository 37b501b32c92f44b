"""
Error taxonomy for ingest, plus a reusable helper so routes stay thin.

Fetch and validation errors are fatal to an ingest run: nothing here retries or skips.
Store errors are SQLAlchemy's own and propagate unchanged.
"""
from __future__ import annotations

from typing import Any, Callable

from fastapi import HTTPException
from sqlalchemy.exc import OperationalError, SQLAlchemyError


class IngestError(Exception):
    """Base for every error raised by the ingest pipeline."""


class FetchError(IngestError):
    """Transport failure, non-2xx status, non-JSON body or missing envelope."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")


class PayloadValidationError(IngestError):
    """Upstream payload does not match the expected shape."""

    def __init__(self, shape: str, url: str | None, errors: list[dict[str, Any]]) -> None:
        self.shape = shape
        self.url = url
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ())) or '<root>'}: {e.get('msg', '')}" for e in errors
        )
        where = f" from {url}" if url else ""
        super().__init__(f"Invalid {shape} payload{where}: {details}")


class UnknownSessionError(IngestError):
    """Entry references a session id that no timetable in this run defined."""

    def __init__(self, timetable_id: int, session_id: int) -> None:
        self.timetable_id = timetable_id
        self.session_id = session_id
        super().__init__(f"Timetable {timetable_id} entry references unknown session {session_id}")


# ---------------------------------------------------------------------------
# Store errors -> HTTP for the read API
# ---------------------------------------------------------------------------

STATUS_SERVICE_UNAVAILABLE = 503  # database down or unreachable
STATUS_INTERNAL_ERROR = 500

MSG_STORE_UNAVAILABLE = "Timetable store is unavailable. Try again shortly."

# List of (predicate, status_code, detail). First match wins.
STORE_ERROR_RULES: list[tuple[Callable[[Exception], bool], int, str]] = [
    (lambda e: isinstance(e, OperationalError), STATUS_SERVICE_UNAVAILABLE, MSG_STORE_UNAVAILABLE),
]


def store_error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception from a store query into an HTTPException.
    Uses STORE_ERROR_RULES for known error types; otherwise returns 500 with the exception message.
    """
    for predicate, status_code, detail in STORE_ERROR_RULES:
        if predicate(exc):
            return HTTPException(status_code=status_code, detail=detail)
    if isinstance(exc, SQLAlchemyError):
        return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc.__class__.__name__))
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))

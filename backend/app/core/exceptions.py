"""
Application error taxonomy and the handlers that render it as JSON.
"""
import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.utils import format_error

logger = logging.getLogger(__name__)


class MoodJournalError(Exception):
    """Base error carrying the HTTP status it maps to."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class Unauthenticated(MoodJournalError):
    """No session, or the session is invalid, expired or revoked."""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class NotFound(MoodJournalError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UpstreamFailure(MoodJournalError):
    """The store or the identity provider failed."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


async def mood_journal_error_handler(request: Request, exc: MoodJournalError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Store error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=format_error(UpstreamFailure.message),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=format_error("Invalid request", jsonable_encoder(exc.errors())),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as an {"error": ...} body."""
    app.add_exception_handler(MoodJournalError, mood_journal_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

"""Application errors and their HTTP mapping.

Handlers raise one of these; the exception handler registered by
``register_exception_handlers`` turns it into ``{"error": <message>}``
with the matching status code.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class NotesApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(NotesApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(NotesApiError):
    # duplicate usernames are reported as a plain bad request
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(NotesApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(NotesApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(NotesApiError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(NotesApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def notes_api_error_handler(request: Request, exc: NotesApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotesApiError, notes_api_error_handler)

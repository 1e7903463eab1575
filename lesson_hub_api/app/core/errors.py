"""
Error types and their HTTP mapping.

Services raise the exceptions defined here instead of ``HTTPException``
so that they can be used outside of a request (seeding scripts,
tests).  ``register_exception_handlers`` turns them into JSON
responses carrying a human‑readable ``message`` field:

* ``ValidationError`` – malformed or missing client input (400)
* ``NotFoundError`` – a referenced lesson or order does not exist (404)
* ``StoreError`` – the document store failed (500)

Request body validation errors raised by FastAPI are reported as 400
as well, and any other exception is caught by a catch‑all handler
which answers 500 with a generic message.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class LessonHubError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        body.update(self.details)
        return body


class ValidationError(LessonHubError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(LessonHubError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(LessonHubError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    described = []
    for error in errors:
        # Drop the leading "body"/"query"/"path" location marker.
        loc = [str(part) for part in error.get("loc", ())[1:]]
        described.append({"field": ".".join(loc), "message": error.get("msg", "")})
    return described


def _summarise_validation_error(errors: List[Dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ())[1:]]
    field = ".".join(loc) or "body"
    if first.get("type") == "missing":
        return f"missing required field: {field}"
    return f"invalid value for {field}: {first.get('msg', '')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""

    @app.exception_handler(LessonHubError)
    async def handle_lesson_hub_error(request: Request, exc: LessonHubError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = list(exc.errors())
        message = _summarise_validation_error(errors)
        logger.info("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message, "errors": _describe_validation_errors(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(PyMongoError)
    async def handle_store_error(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Database error"},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )

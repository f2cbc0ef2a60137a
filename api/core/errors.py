"""
Error types and their HTTP mapping.

Every error body has the same shape: `{"message": "..."}`. Validation errors
also carry the offending fields under `errors`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """
    The persistence layer failed. `message` is safe to show to clients.
    """

    def __init__(self, message: str, *, operation: str, blog_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.blog_id = blog_id


class BlogNotFoundError(Exception):
    def __init__(self, blog_id: int) -> None:
        super().__init__(f"Blog {blog_id} not found.")
        self.blog_id = blog_id


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": str(err.get("msg", "")),
            "type": str(err.get("type", "")),
        }
        for err in exc.errors()
    ]


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    # The cause was logged where it was caught; keep this one short.
    logger.debug(
        "storage_error_response path=%s operation=%s blog_id=%s",
        request.url.path,
        exc.operation,
        exc.blog_id,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": exc.message},
    )


async def _not_found_handler(request: Request, exc: BlogNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Blog not found"},
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = _validation_details(exc)
    logger.info("invalid_request path=%s errors=%s", request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": details},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.add_exception_handler(BlogNotFoundError, _not_found_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

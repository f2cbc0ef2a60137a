"""
Blog business logic.

Each operation is one statement against the store. Driver failures become
`StorageError` (logged here with the operation and blog id); a missing row
becomes `BlogNotFoundError`. The HTTP mapping lives in `core/errors.py`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import asyncpg

from core import db
from core.errors import BlogNotFoundError, StorageError

from . import repository, schemas

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str, message: str, *, blog_id: int | None = None) -> Iterator[None]:
    try:
        yield
    except db.STORAGE_ERRORS as exc:
        logger.error(
            "blog_%s_failed blog_id=%s error=%s",
            operation,
            blog_id,
            exc,
            exc_info=True,
            extra={"operation": operation, "blog_id": blog_id},
        )
        raise StorageError(message, operation=operation, blog_id=blog_id) from exc


def _to_blog(row: dict[str, Any]) -> dict:
    return {
        "id": int(row["id"]),
        "title": str(row["title"]),
        "author": str(row["author"]),
        "url": str(row["url"]),
        "likes": int(row["likes"] or 0),
    }


async def create_blog(pool: asyncpg.Pool, request: schemas.BlogCreateRequest) -> dict:
    with _storage_errors("create", "Failed to create blog"):
        row = await repository.insert_blog(
            pool,
            title=request.title,
            author=request.author,
            url=request.url,
            likes=request.likes if request.likes is not None else 0,
        )
    if row is None:
        logger.error("blog_create_failed error=no row returned", extra={"operation": "create"})
        raise StorageError("Failed to create blog", operation="create")
    return _to_blog(row)


async def list_blogs(pool: asyncpg.Pool) -> list[dict]:
    with _storage_errors("list", "Failed to retrieve blogs"):
        rows = await repository.list_blogs(pool)
    return [_to_blog(row) for row in rows]


async def get_blog(pool: asyncpg.Pool, blog_id: int) -> dict:
    with _storage_errors("get", "Failed to retrieve blog", blog_id=blog_id):
        row = await repository.get_blog(pool, blog_id)
    if row is None:
        logger.debug("blog_not_found blog_id=%s", blog_id)
        raise BlogNotFoundError(blog_id)
    return _to_blog(row)


async def update_blog(pool: asyncpg.Pool, blog_id: int, request: schemas.BlogUpdateRequest) -> dict:
    with _storage_errors("update", "Failed to update blog", blog_id=blog_id):
        row = await repository.update_blog(
            pool,
            blog_id,
            title=request.title,
            author=request.author,
            url=request.url,
            likes=request.likes,
        )
    if row is None:
        logger.debug("blog_not_found blog_id=%s", blog_id)
        raise BlogNotFoundError(blog_id)
    return _to_blog(row)


async def delete_blog(pool: asyncpg.Pool, blog_id: int) -> bool:
    """
    Delete by id. Deleting an id that does not exist is not an error;
    the return value only says whether a row was removed.
    """
    with _storage_errors("delete", "Failed to delete blog", blog_id=blog_id):
        deleted = await repository.delete_blog(pool, blog_id)
    if not deleted:
        logger.debug("blog_delete_noop blog_id=%s", blog_id)
    return deleted > 0

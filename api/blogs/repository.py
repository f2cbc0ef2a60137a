"""
Blog persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from core import db

_COLUMNS = "id, title, author, url, likes"


async def insert_blog(
    pool: asyncpg.Pool,
    *,
    title: str,
    author: str,
    url: str,
    likes: int,
) -> dict | None:
    return await db.fetch_one(
        pool,
        f"""
        INSERT INTO blogs (title, author, url, likes)
        VALUES ($1, $2, $3, $4)
        RETURNING {_COLUMNS}
        """,
        title,
        author,
        url,
        likes,
    )


async def list_blogs(pool: asyncpg.Pool) -> list[dict]:
    return await db.fetch_all(
        pool,
        f"""
        SELECT {_COLUMNS}
        FROM blogs
        ORDER BY id ASC
        """,
    )


async def get_blog(pool: asyncpg.Pool, blog_id: int) -> dict | None:
    return await db.fetch_one(
        pool,
        f"""
        SELECT {_COLUMNS}
        FROM blogs
        WHERE id = $1
        """,
        blog_id,
    )


async def update_blog(
    pool: asyncpg.Pool,
    blog_id: int,
    *,
    title: str | None = None,
    author: str | None = None,
    url: str | None = None,
    likes: int | None = None,
) -> dict | None:
    """
    Overwrite the given columns; None keeps the stored value.
    Returns None when no row has this id.
    """
    return await db.fetch_one(
        pool,
        f"""
        UPDATE blogs
        SET title = COALESCE($2, title),
            author = COALESCE($3, author),
            url = COALESCE($4, url),
            likes = COALESCE($5::int, likes)
        WHERE id = $1
        RETURNING {_COLUMNS}
        """,
        blog_id,
        title,
        author,
        url,
        likes,
    )


async def delete_blog(pool: asyncpg.Pool, blog_id: int) -> int:
    return await db.execute(
        pool,
        """
        DELETE FROM blogs
        WHERE id = $1
        """,
        blog_id,
    )

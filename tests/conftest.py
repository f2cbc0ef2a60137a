"""Shared fixtures: fake pools and an in-memory blog store.

Nothing here talks to PostgreSQL. API tests swap the repository functions
for `InMemoryBlogStore` and override the pool dependency, so requests run
through the real router, service and error handlers.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from blogs import repository
from core import db
from main import create_app


class FakePool:
    """Records statements and returns canned results."""

    def __init__(self, *, row=None, rows=None, status="SELECT 0", error=None):
        self.row = row
        self.rows = rows or []
        self.status = status
        self.error = error
        self.calls = []

    async def _call(self, method, sql, args, result):
        self.calls.append((method, " ".join(sql.split()), args))
        if self.error is not None:
            raise self.error
        return result

    async def fetchrow(self, sql, *args):
        return await self._call("fetchrow", sql, args, self.row)

    async def fetch(self, sql, *args):
        return await self._call("fetch", sql, args, self.rows)

    async def execute(self, sql, *args):
        return await self._call("execute", sql, args, self.status)


class InMemoryBlogStore:
    """Stands in for `blogs.repository`, same signatures, dict rows."""

    def __init__(self):
        self.rows = {}
        self._ids = itertools.count(1)
        self.error = None

    def _check(self):
        if self.error is not None:
            raise self.error

    async def insert_blog(self, pool, *, title, author, url, likes):
        self._check()
        blog_id = next(self._ids)
        row = {"id": blog_id, "title": title, "author": author, "url": url, "likes": likes}
        self.rows[blog_id] = row
        return dict(row)

    async def list_blogs(self, pool):
        self._check()
        return [dict(self.rows[k]) for k in sorted(self.rows)]

    async def get_blog(self, pool, blog_id):
        self._check()
        row = self.rows.get(blog_id)
        return dict(row) if row is not None else None

    async def update_blog(self, pool, blog_id, *, title=None, author=None, url=None, likes=None):
        self._check()
        row = self.rows.get(blog_id)
        if row is None:
            return None
        changes = {"title": title, "author": author, "url": url, "likes": likes}
        row.update({k: v for k, v in changes.items() if v is not None})
        return dict(row)

    async def delete_blog(self, pool, blog_id):
        self._check()
        return 1 if self.rows.pop(blog_id, None) is not None else 0


@pytest.fixture
def store(monkeypatch):
    mem = InMemoryBlogStore()
    for name in ("insert_blog", "list_blogs", "get_blog", "update_blog", "delete_blog"):
        monkeypatch.setattr(repository, name, getattr(mem, name))
    return mem


@pytest.fixture
def fake_pool():
    return FakePool()


@pytest.fixture
def app(fake_pool):
    application = create_app()
    application.dependency_overrides[db.get_pool] = lambda: fake_pool
    return application


@pytest.fixture
def client(app, store):
    # No `with`: the lifespan (real pool) is skipped.
    return TestClient(app)

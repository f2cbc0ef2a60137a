"""
FastAPI router for blog endpoints.
"""

from __future__ import annotations

from typing import Annotated

import asyncpg
from fastapi import APIRouter, Depends, Path, status

from core import db

from . import schemas, service

router = APIRouter()

BlogId = Annotated[int, Path(ge=1, le=schemas.INT4_MAX)]


@router.post(
    "/blogs",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.BlogResponse,
)
async def create_blog(
    request: schemas.BlogCreateRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.create_blog(pool, request)


@router.get("/blogs", response_model=list[schemas.BlogResponse])
async def list_blogs(pool: asyncpg.Pool = Depends(db.get_pool)) -> list[dict]:
    return await service.list_blogs(pool)


@router.get("/blogs/{blog_id}", response_model=schemas.BlogResponse)
async def get_blog(
    blog_id: BlogId,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.get_blog(pool, blog_id)


@router.put("/blogs/{blog_id}", response_model=schemas.BlogResponse)
async def update_blog(
    blog_id: BlogId,
    request: schemas.BlogUpdateRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    return await service.update_blog(pool, blog_id, request)


@router.delete("/blogs/{blog_id}")
async def delete_blog(
    blog_id: BlogId,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> dict:
    # Idempotent: a missing id still answers 200 with an empty body.
    await service.delete_blog(pool, blog_id)
    return {}

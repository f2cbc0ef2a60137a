"""
Pydantic schemas for blog endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# PostgreSQL int4 upper bound; ids and likes are stored as INTEGER.
INT4_MAX = 2_147_483_647


def _reject_nul(value: str | None) -> str | None:
    # PostgreSQL text cannot hold NUL characters.
    if value is not None and "\x00" in value:
        raise ValueError("must not contain NUL characters")
    return value


class BlogCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    url: str
    # Omitted or null both mean zero likes.
    likes: int | None = Field(default=None, ge=0, le=INT4_MAX)

    @field_validator("title", "author", "url")
    @classmethod
    def reject_nul(cls, value: str | None) -> str | None:
        return _reject_nul(value)


class BlogUpdateRequest(BaseModel):
    """
    Partial update: a field that is missing or null keeps its stored value.
    """

    title: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, min_length=1)
    url: str | None = None
    likes: int | None = Field(default=None, ge=0, le=INT4_MAX)

    @field_validator("title", "author", "url")
    @classmethod
    def reject_nul(cls, value: str | None) -> str | None:
        return _reject_nul(value)


class BlogResponse(BaseModel):
    id: int
    title: str
    author: str
    url: str
    likes: int

"""Pydantic request/response schemas for admin Posts API."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..common import CamelModel
from ...domain.enums import PostStatus

SLUG_PATTERN = r"^[a-z0-9-]+$"


class PostCreateIn(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN, max_length=200)
    excerpt: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    status: PostStatus = PostStatus.DRAFT
    author_id: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    target_keyword: Optional[str] = None
    secondary_keywords: List[str] = Field(default_factory=list)


class PostUpdateIn(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN, max_length=200)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    status: Optional[PostStatus] = None
    author_id: Optional[str] = None
    category_id: Optional[str] = None
    tags: Optional[List[str]] = None
    target_keyword: Optional[str] = None
    secondary_keywords: Optional[List[str]] = None


class PublishIn(CamelModel):
    publish: bool


class PostOut(CamelModel):
    id: str
    slug: str
    title: str
    excerpt: str
    content: str
    status: str
    author_id: str
    category_id: str
    tags: List[str]
    target_keyword: Optional[str]
    secondary_keywords: List[str]
    word_count: int
    reading_time: int
    publish_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

"""Pydantic request/response schemas for the public Comments API."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from ..common import CamelModel


class CommentCreateIn(CamelModel):
    # presence is checked by the submission pipeline, after the honeypot
    post_slug: Optional[str] = None
    author_name: Optional[str] = Field(default=None, max_length=100)
    author_email: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    website: Optional[str] = None
    parent_id: Optional[str] = None


class CommentCreatedOut(CamelModel):
    id: str
    post_slug: str
    author_name: str
    content: str
    status: str
    spam_score: float
    parent_id: Optional[str]
    created_at: datetime


class ReplyOut(CamelModel):
    id: str
    author_name: str
    content: str
    created_at: datetime


class CommentThreadOut(ReplyOut):
    replies: List[ReplyOut] = Field(default_factory=list)

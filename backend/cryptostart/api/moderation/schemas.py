"""Pydantic schemas for admin comment moderation."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common import CamelModel


class CommentStatusIn(CamelModel):
    status: str


class CommentAdminOut(CamelModel):
    id: str
    post_slug: str
    author_name: str
    author_email: str
    content: str
    status: str
    spam_score: float
    ip_address: str
    parent_id: Optional[str]
    created_at: datetime
    modified_at: Optional[datetime]
    modified_by: Optional[str]

"""Pydantic schemas for authors and categories."""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field

from ..common import CamelModel

SLUG_PATTERN = r"^[a-z0-9-]+$"


class CategoryIn(CamelModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    icon: str = "📚"
    color: Optional[str] = None
    order: int = 0


class CategoryUpdateIn(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    order: Optional[int] = None


class CategoryOut(CamelModel):
    id: str
    slug: str
    name: str
    description: Optional[str]
    icon: str
    color: Optional[str]
    order: int


class AuthorIn(CamelModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, pattern=SLUG_PATTERN)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    social_links: Dict[str, Any] = Field(default_factory=dict)


class AuthorUpdateIn(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    social_links: Optional[Dict[str, Any]] = None


class AuthorOut(CamelModel):
    id: str
    slug: str
    name: str
    bio: Optional[str]
    avatar: Optional[str]
    social_links: Dict[str, Any]

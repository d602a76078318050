"""Domain dataclasses for posts as seen by the content scorers (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(slots=True)
class AuthorInfo:
    name: str
    bio: Optional[str] = None
    image: Optional[str] = None
    twitter: Optional[str] = None


@dataclass(slots=True)
class BlogPost:
    title: str
    slug: str
    content: str = ""
    category: str = ""
    tags: List[str] = field(default_factory=list)
    author: AuthorInfo = field(default_factory=lambda: AuthorInfo(name=""))
    published_at: Optional[datetime] = None
    target_keyword: Optional[str] = None
    secondary_keywords: List[str] = field(default_factory=list)

    @property
    def keywords(self) -> List[str]:
        kws = [self.target_keyword] if self.target_keyword else []
        return kws + [k for k in self.secondary_keywords if k and k not in kws]

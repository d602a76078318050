"""String enums shared by ORM models, services and schemas."""
from __future__ import annotations

from enum import Enum


class CommentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    SPAM = "SPAM"


# statuses a moderator may set by hand
MODERATION_STATUSES = frozenset({CommentStatus.APPROVED, CommentStatus.REJECTED, CommentStatus.SPAM})


class PostStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Role(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    AUTHOR = "AUTHOR"

"""Comment and spam audit log ORM models."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, utcnow
from ...domain.enums import CommentStatus


class CommentModel(Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    post_slug: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(100), nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=CommentStatus.PENDING.value, index=True)
    spam_score: Mapped[float] = mapped_column(Float, default=0.0)
    ip_address: Mapped[str] = mapped_column(String(64), default="", index=True)
    user_agent: Mapped[str] = mapped_column(String(500), default="")
    parent_id: Mapped[Optional[str]] = mapped_column(ForeignKey("comments.id", ondelete="CASCADE"), default=None)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    modified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), default=None)
    modified_by: Mapped[Optional[str]] = mapped_column(String(36), default=None)


class SpamLogModel(Base):
    __tablename__ = "spam_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), default="")
    ip_address: Mapped[str] = mapped_column(String(64), default="")
    reason: Mapped[str] = mapped_column(String(50), nullable=False)
    severity: Mapped[str] = mapped_column(String(10), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, default=None)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

"""Repositories for comments and the spam audit log."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from ..base import utcnow
from ..models.comment import CommentModel, SpamLogModel
from ...domain.enums import CommentStatus


class CommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: str) -> Optional[CommentModel]:
        return self.session.get(CommentModel, comment_id)

    def create(self, **fields: Any) -> CommentModel:
        entity = CommentModel(id=str(uuid.uuid4()), **fields)
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def count_recent(self, ip: str, email: str, since: datetime) -> int:
        """Comments from this IP or email created at or after ``since``."""
        stmt = (
            select(func.count())
            .select_from(CommentModel)
            .where(or_(CommentModel.ip_address == ip, CommentModel.author_email == email))
            .where(CommentModel.created_at >= since)
        )
        return self.session.scalar(stmt) or 0

    def list_approved_threads(self, post_slug: str) -> List[Dict[str, Any]]:
        """Approved top-level comments (newest first) with approved replies (oldest first)."""
        approved = CommentStatus.APPROVED.value
        parents = self.session.scalars(
            select(CommentModel)
            .where(CommentModel.post_slug == post_slug, CommentModel.status == approved)
            .where(CommentModel.parent_id.is_(None))
            .order_by(CommentModel.created_at.desc())
        ).all()
        if not parents:
            return []

        parent_ids = [p.id for p in parents]
        replies = self.session.scalars(
            select(CommentModel)
            .where(CommentModel.parent_id.in_(parent_ids), CommentModel.status == approved)
            .order_by(CommentModel.created_at.asc())
        ).all()
        by_parent: Dict[str, List[CommentModel]] = {}
        for r in replies:
            by_parent.setdefault(r.parent_id, []).append(r)

        return [{"comment": p, "replies": by_parent.get(p.id, [])} for p in parents]

    def list(self, *, status: str | None = None, page: int = 1, limit: int = 20) -> Tuple[Sequence[CommentModel], int]:
        base = select(CommentModel)
        if status:
            base = base.where(CommentModel.status == status)
        total = self.session.scalar(select(func.count()).select_from(base.subquery())) or 0
        stmt = base.order_by(CommentModel.created_at.desc()).offset((page - 1) * limit).limit(limit)
        return self.session.scalars(stmt).all(), total

    def update_status(self, comment_id: str, status: str, modified_by: str | None) -> Optional[CommentModel]:
        entity = self.get(comment_id)
        if not entity:
            return None
        entity.status = status
        entity.modified_at = utcnow()
        entity.modified_by = modified_by
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def delete_with_replies(self, comment_id: str) -> int:
        """Hard-delete a comment and every comment whose parent it is."""
        result = self.session.execute(
            delete(CommentModel).where(
                or_(CommentModel.id == comment_id, CommentModel.parent_id == comment_id)
            )
        )
        self.session.commit()
        return result.rowcount or 0


class SpamLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, email: str, ip_address: str, reason: str, severity: str, content: str | None = None) -> SpamLogModel:
        entity = SpamLogModel(
            id=str(uuid.uuid4()),
            email=email,
            ip_address=ip_address,
            reason=reason,
            severity=severity,
            content=content,
        )
        self.session.add(entity)
        self.session.commit()
        return entity

    def list(self, limit: int = 100) -> Sequence[SpamLogModel]:
        stmt = select(SpamLogModel).order_by(SpamLogModel.created_at.desc()).limit(limit)
        return self.session.scalars(stmt).all()

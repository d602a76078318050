"""SQLAlchemy-backed Post repository."""
from __future__ import annotations

import uuid
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from ..base import utcnow
from ..models.post import PostModel
from ...content.text_metrics import count_words, reading_time
from ...domain.enums import PostStatus
from ...domain.post import AuthorInfo, BlogPost


def _to_dc(m: PostModel) -> BlogPost:
    social = (m.author.social_links or {}) if m.author else {}
    return BlogPost(
        title=m.title,
        slug=m.slug,
        content=m.content or "",
        category=m.category.slug if m.category else "",
        tags=list(m.tags or []),
        author=AuthorInfo(
            name=m.author.name if m.author else "",
            bio=m.author.bio if m.author else None,
            image=m.author.avatar if m.author else None,
            twitter=social.get("twitter"),
        ),
        published_at=m.publish_date or m.created_at,
        target_keyword=m.target_keyword,
        secondary_keywords=list(m.secondary_keywords or []),
    )


def _apply_content_metrics(m: PostModel) -> None:
    m.word_count = count_words(m.content)
    m.reading_time = reading_time(m.word_count)


class PostRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        page: int = 1,
        limit: int = 20,
        status: str | None = None,
        category_id: str | None = None,
        search: str | None = None,
    ) -> Tuple[Sequence[PostModel], int]:
        stmt: Select = select(PostModel)
        if status:
            stmt = stmt.where(PostModel.status == status)
        if category_id:
            stmt = stmt.where(PostModel.category_id == category_id)
        if search:
            like = f"%{search.lower()}%"
            stmt = stmt.where(or_(func.lower(PostModel.title).like(like), func.lower(PostModel.slug).like(like)))

        total = self.session.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        stmt = stmt.order_by(PostModel.created_at.desc()).offset((page - 1) * limit).limit(limit)
        return self.session.scalars(stmt).all(), total

    def list_published(self, limit: int = 1000) -> List[BlogPost]:
        stmt = (
            select(PostModel)
            .where(PostModel.status == PostStatus.PUBLISHED.value)
            .order_by(PostModel.publish_date.desc())
            .limit(limit)
        )
        return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get(self, post_id: str) -> Optional[PostModel]:
        return self.session.get(PostModel, post_id)

    def get_by_slug(self, slug: str) -> Optional[PostModel]:
        stmt = select(PostModel).where(PostModel.slug == slug).limit(1)
        return self.session.scalars(stmt).first()

    def get_published(self, slug: str) -> Optional[BlogPost]:
        m = self.get_by_slug(slug)
        if not m or m.status != PostStatus.PUBLISHED.value:
            return None
        return _to_dc(m)

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        stmt = select(PostModel.id).where(PostModel.slug == slug)
        if exclude_id:
            stmt = stmt.where(PostModel.id != exclude_id)
        return self.session.scalars(stmt).first() is not None

    def create(self, **fields: Any) -> PostModel:
        m = PostModel(id=str(uuid.uuid4()), **fields)
        if m.status == PostStatus.PUBLISHED.value and m.publish_date is None:
            m.publish_date = utcnow()
        _apply_content_metrics(m)
        self.session.add(m)
        self.session.commit()
        self.session.refresh(m)
        return m

    def update(self, post_id: str, **fields: Any) -> Optional[PostModel]:
        m = self.session.get(PostModel, post_id)
        if not m:
            return None
        for k, v in fields.items():
            if hasattr(m, k):
                setattr(m, k, v)
        if "content" in fields:
            _apply_content_metrics(m)
        self.session.commit()
        self.session.refresh(m)
        return m

    def set_published(self, post_id: str, publish: bool) -> Optional[PostModel]:
        m = self.session.get(PostModel, post_id)
        if not m:
            return None
        m.status = PostStatus.PUBLISHED.value if publish else PostStatus.DRAFT.value
        if publish:
            m.publish_date = utcnow()
        self.session.commit()
        self.session.refresh(m)
        return m

    def delete(self, post_id: str) -> bool:
        m = self.session.get(PostModel, post_id)
        if not m:
            return False
        self.session.delete(m)
        self.session.commit()
        return True

    def count_by_author(self, author_id: str) -> int:
        stmt = select(func.count()).select_from(PostModel).where(PostModel.author_id == author_id)
        return self.session.scalar(stmt) or 0

    def count_by_category(self, category_id: str) -> int:
        stmt = select(func.count()).select_from(PostModel).where(PostModel.category_id == category_id)
        return self.session.scalar(stmt) or 0

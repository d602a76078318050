"""Repositories for authors and categories (CRUD)."""
from __future__ import annotations

import uuid
from typing import Any, Generic, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models.taxonomy import AuthorModel, CategoryModel

M = TypeVar("M", AuthorModel, CategoryModel)


class _SlugRepository(Generic[M]):
    model: Type[M]

    def __init__(self, session: Session) -> None:
        self.session = session

    def _order(self):
        return self.model.name.asc()

    def list(self, *, page: int = 1, limit: int = 20) -> Tuple[Sequence[M], int]:
        total = self.session.scalar(select(func.count()).select_from(self.model)) or 0
        stmt = select(self.model).order_by(self._order()).offset((page - 1) * limit).limit(limit)
        return self.session.scalars(stmt).all(), total

    def get(self, entity_id: str) -> Optional[M]:
        return self.session.get(self.model, entity_id)

    def get_by_slug(self, slug: str) -> Optional[M]:
        stmt = select(self.model).where(self.model.slug == slug)
        return self.session.scalars(stmt).first()

    def create(self, **fields: Any) -> M:
        entity = self.model(id=str(uuid.uuid4()), **fields)
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def update(self, entity_id: str, **fields: Any) -> Optional[M]:
        entity = self.get(entity_id)
        if not entity:
            return None
        for k, v in fields.items():
            if hasattr(entity, k):
                setattr(entity, k, v)
        self.session.commit()
        self.session.refresh(entity)
        return entity

    def delete(self, entity_id: str) -> bool:
        entity = self.get(entity_id)
        if not entity:
            return False
        self.session.delete(entity)
        self.session.commit()
        return True


class AuthorRepository(_SlugRepository[AuthorModel]):
    model = AuthorModel


class CategoryRepository(_SlugRepository[CategoryModel]):
    model = CategoryModel

    def _order(self):
        return CategoryModel.order.asc()

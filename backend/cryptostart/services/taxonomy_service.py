"""Author and category services."""
from __future__ import annotations

from typing import Any, Sequence, Tuple

from sqlalchemy.orm import Session

from ..db.models.taxonomy import AuthorModel, CategoryModel
from ..db.repositories.post_repo import PostRepository
from ..db.repositories.taxonomy_repo import AuthorRepository, CategoryRepository
from ..errors import Conflict, NotFound


class _TaxonomyService:
    kind = "entity"

    def __init__(self, repo, posts: PostRepository) -> None:
        self.repo = repo
        self.posts = posts

    def list(self, page: int = 1, limit: int = 20) -> Tuple[Sequence[Any], int]:
        return self.repo.list(page=page, limit=limit)

    def get(self, entity_id: str):
        entity = self.repo.get(entity_id)
        if not entity:
            raise NotFound(f"{self.kind.capitalize()} {entity_id} not found")
        return entity

    def create(self, **fields: Any):
        if self.repo.get_by_slug(fields["slug"]):
            raise Conflict("Slug already exists")
        return self.repo.create(**fields)

    def update(self, entity_id: str, **fields: Any):
        slug = fields.get("slug")
        if slug:
            existing = self.repo.get_by_slug(slug)
            if existing and existing.id != entity_id:
                raise Conflict("Slug already exists")
        entity = self.repo.update(entity_id, **fields)
        if not entity:
            raise NotFound(f"{self.kind.capitalize()} {entity_id} not found")
        return entity

    def _post_count(self, entity_id: str) -> int:
        raise NotImplementedError

    def delete(self, entity_id: str) -> bool:
        self.get(entity_id)
        if self._post_count(entity_id):
            raise Conflict(f"{self.kind.capitalize()} still has posts")
        return self.repo.delete(entity_id)


class AuthorService(_TaxonomyService):
    kind = "author"

    def __init__(self, session: Session) -> None:
        super().__init__(AuthorRepository(session), PostRepository(session))

    def _post_count(self, entity_id: str) -> int:
        return self.posts.count_by_author(entity_id)

    def post_count(self, author: AuthorModel) -> int:
        return self.posts.count_by_author(author.id)


class CategoryService(_TaxonomyService):
    kind = "category"

    def __init__(self, session: Session) -> None:
        super().__init__(CategoryRepository(session), PostRepository(session))

    def _post_count(self, entity_id: str) -> int:
        return self.posts.count_by_category(entity_id)

    def post_count(self, category: CategoryModel) -> int:
        return self.posts.count_by_category(category.id)

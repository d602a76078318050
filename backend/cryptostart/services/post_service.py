"""Post service encapsulating admin business rules."""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from loguru import logger
from sqlalchemy.orm import Session

from ..content.text_metrics import slugify
from ..db.models.post import PostModel
from ..db.repositories.post_repo import PostRepository
from ..db.repositories.taxonomy_repo import AuthorRepository, CategoryRepository
from ..errors import Conflict, NotFound, ValidationFailed


class PostService:
    def __init__(self, session: Session) -> None:
        self.repo = PostRepository(session)
        self.authors = AuthorRepository(session)
        self.categories = CategoryRepository(session)

    def list_posts(
        self,
        page: int = 1,
        limit: int = 20,
        status: str | None = None,
        category_id: str | None = None,
        search: str | None = None,
    ) -> Tuple[Sequence[PostModel], int]:
        return self.repo.list(page=page, limit=limit, status=status, category_id=category_id, search=search)

    def _check_references(self, fields: dict[str, Any]) -> None:
        if "author_id" in fields and not self.authors.get(fields["author_id"]):
            raise ValidationFailed("Invalid authorId", details=[{"field": "author_id", "message": "Unknown author"}])
        if "category_id" in fields and not self.categories.get(fields["category_id"]):
            raise ValidationFailed(
                "Invalid categoryId", details=[{"field": "category_id", "message": "Unknown category"}]
            )

    def create_post(self, **fields: Any) -> PostModel:
        fields["slug"] = fields.get("slug") or slugify(fields["title"])
        if not fields["slug"]:
            raise ValidationFailed(
                "Slug cannot be empty",
                details=[{"field": "slug", "message": "Title has no characters usable in a slug"}],
            )
        self._check_references(fields)
        if self.repo.slug_exists(fields["slug"]):
            raise Conflict("Slug already exists")
        post = self.repo.create(**fields)
        logger.info("Created post {} ({})", post.slug, post.status)
        return post

    def get_post(self, post_id: str) -> PostModel:
        post = self.repo.get(post_id) or self.repo.get_by_slug(post_id)
        if not post:
            raise NotFound(f"Post {post_id} not found")
        return post

    def update_post(self, post_id: str, **fields: Any) -> PostModel:
        self._check_references(fields)
        if fields.get("slug") and self.repo.slug_exists(fields["slug"], exclude_id=post_id):
            raise Conflict("Slug already exists")
        post = self.repo.update(post_id, **fields)
        if not post:
            raise NotFound(f"Post {post_id} not found")
        return post

    def publish(self, post_id: str, publish: bool) -> PostModel:
        post = self.repo.set_published(post_id, publish)
        if not post:
            raise NotFound(f"Post {post_id} not found")
        logger.info("Post {} is now {}", post.slug, post.status)
        return post

    def delete_post(self, post_id: str) -> bool:
        if not self.repo.delete(post_id):
            raise NotFound(f"Post {post_id} not found")
        logger.info("Deleted post {}", post_id)
        return True

    def get_by_slug(self, slug: str) -> Optional[PostModel]:
        return self.repo.get_by_slug(slug)

from __future__ import annotations

import pytest

from cryptostart import create_app
from cryptostart.auth.jwt import issue_token
from cryptostart.config import TestConfig
from cryptostart.content.catalog import ContentCatalog
from cryptostart.db.base import Base
from cryptostart.db.repositories.post_repo import PostRepository
from cryptostart.db.repositories.taxonomy_repo import AuthorRepository, CategoryRepository
from cryptostart.db.session import get_db


@pytest.fixture
def app():
    app = create_app(TestConfig())
    with app.app_context():
        db = get_db()
        Base.metadata.create_all(db.engine)
    yield app
    with app.app_context():
        get_db().dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog() -> ContentCatalog:
    return ContentCatalog.load()


@pytest.fixture
def auth_header(app):
    """Build an Authorization header for a user holding the given roles."""

    def _make(*roles: str, user_id: str = "user-1") -> dict:
        with app.app_context():
            token = issue_token(user_id, list(roles))
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(auth_header):
    return auth_header("ADMIN", user_id="admin-1")


@pytest.fixture
def taxonomy(app):
    """One author and one category; returns their ids."""
    with app.app_context():
        session = get_db().session()
        author = AuthorRepository(session).create(
            slug="satoshi",
            name="Satoshi",
            bio="Writes about Bitcoin since 2013.",
            avatar="https://example.com/satoshi.png",
            social_links={"twitter": "@satoshi"},
        )
        category = CategoryRepository(session).create(slug="bitcoin", name="Bitcoin", order=1)
        return {"author_id": author.id, "category_id": category.id}


@pytest.fixture
def make_post(app, taxonomy):
    """Persist a post and return its id."""

    def _make(slug: str, title: str, content: str, status: str = "PUBLISHED", **fields) -> str:
        with app.app_context():
            post = PostRepository(get_db().session()).create(
                slug=slug,
                title=title,
                excerpt=fields.pop("excerpt", title),
                content=content,
                status=status,
                author_id=fields.pop("author_id", taxonomy["author_id"]),
                category_id=fields.pop("category_id", taxonomy["category_id"]),
                **fields,
            )
            return post.id

    return _make

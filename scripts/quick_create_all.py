"""Create all tables and seed the default categories for a quick dev setup (NOT for production)."""
from __future__ import annotations

from cryptostart import create_app
from cryptostart.db.base import Base
from cryptostart.db.models import comment, post, taxonomy, user  # noqa: F401
from cryptostart.db.repositories.taxonomy_repo import CategoryRepository
from cryptostart.db.session import get_db

DEFAULT_CATEGORIES = [
    {"slug": "bitcoin", "name": "Bitcoin", "icon": "₿", "color": "#f7931a", "order": 1},
    {"slug": "ethereum", "name": "Ethereum", "icon": "Ξ", "color": "#627eea", "order": 2},
    {"slug": "defi", "name": "DeFi", "icon": "🏦", "color": "#10b981", "order": 3},
    {"slug": "crypto-security", "name": "Crypto Security", "icon": "🔐", "color": "#ef4444", "order": 4},
    {"slug": "investing-and-strategy", "name": "Investing & Strategy", "icon": "📈", "color": "#8b5cf6", "order": 5},
    {"slug": "web3-and-innovation", "name": "Web3 & Innovation", "icon": "🌐", "color": "#06b6d4", "order": 6},
]


def main() -> None:
    app = create_app()
    with app.app_context():
        db = get_db()
        assert db.engine is not None
        Base.metadata.create_all(db.engine)
        print("Tables created.")

        categories = CategoryRepository(db.session())
        for fields in DEFAULT_CATEGORIES:
            if categories.get_by_slug(fields["slug"]) is None:
                categories.create(**fields)
                print(f"Seeded category {fields['slug']}")


if __name__ == "__main__":
    main()

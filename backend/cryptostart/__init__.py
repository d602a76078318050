"""Application factory and blueprint registration."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from .config import BaseConfig
from .content.catalog import ContentCatalog
from .db.session import Database
from .api.health.routes import bp as health_bp
from .api.auth.routes import bp as auth_bp
from .api.users.routes import bp as users_bp
from .api.comments.routes import bp as comments_bp
from .api.posts.routes import bp as posts_bp
from .api.moderation.routes import bp as moderation_bp
from .api.admin_posts.routes import bp as admin_posts_bp
from .api.taxonomy.routes import authors_bp, categories_bp
from .api.dashboards.routes import bp as dashboards_bp
from .docs.routes import bp as docs_bp
from .errors import register_error_handlers
from .log import configure_logging, install_request_logging


def create_app(config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application."""
    config = config or BaseConfig()
    configure_logging(config.LOG_LEVEL)

    app = Flask(__name__)
    app.config.from_object(config)
    CORS(app, resources={r"/api/*": {"origins": config.CORS_ORIGINS}})

    # Explicitly constructed collaborators, reachable through app.extensions
    Database().init_app(app)
    app.extensions["content_catalog"] = ContentCatalog.load(config.CONTENT_DATA_DIR)

    # Register blueprints
    app.register_blueprint(health_bp, url_prefix="/api/health")
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(comments_bp, url_prefix="/api/comments")
    app.register_blueprint(posts_bp, url_prefix="/api/posts")
    app.register_blueprint(moderation_bp, url_prefix="/api/admin/comments")
    app.register_blueprint(admin_posts_bp, url_prefix="/api/admin/posts")
    app.register_blueprint(authors_bp, url_prefix="/api/admin/authors")
    app.register_blueprint(categories_bp, url_prefix="/api/admin/categories")
    app.register_blueprint(dashboards_bp, url_prefix="/api/admin")
    app.register_blueprint(docs_bp)

    # Global error handlers
    register_error_handlers(app)
    install_request_logging(app)
    return app

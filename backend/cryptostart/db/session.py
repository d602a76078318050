"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

from flask import Flask, current_app
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool


class Database:
    def __init__(self) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]

    def init_app(self, app: Flask) -> None:
        url: str = app.config["DATABASE_URL"]
        echo: bool = app.config.get("SQL_ECHO", False)

        if url.startswith("sqlite"):
            # single shared connection so an in-memory database survives across sessions
            self.engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                future=True,
            )
        else:
            self.engine = create_engine(
                url,
                echo=echo,
                pool_pre_ping=True,
                pool_size=app.config.get("POOL_SIZE", 10),
                max_overflow=app.config.get("MAX_OVERFLOW", 20),
                future=True,
            )
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False, future=True)
        )

        app.extensions["database"] = self

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()

    def session(self) -> Session:
        assert self.Session is not None, "DB session is not initialized"
        return self.Session()

    def ping(self) -> bool:
        if self.engine is None:
            return False
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        if self.Session is not None:
            self.Session.remove()
        if self.engine is not None:
            self.engine.dispose()


def get_db() -> Database:
    """Database bound to the current application."""
    return current_app.extensions["database"]

"""Health check endpoints."""
from __future__ import annotations

import os
from datetime import datetime, timezone

from flask import Blueprint
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from ...db.session import get_db
from ...errors import ok


bp = Blueprint("health", __name__)

_ENV_KEYS = ("DATABASE_URL", "JWT_SECRET", "SECRET_KEY", "SITE_URL")


@bp.get("/")
def alive():
    try:
        database = "connected" if get_db().ping() else "disconnected"
    except SQLAlchemyError as e:
        logger.warning("Health check database ping failed: {}", e)
        database = "disconnected"
    return ok({
        "status": "ok" if database == "connected" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
        # presence only, never values
        "env": {key: bool(os.getenv(key)) for key in _ENV_KEYS},
    })

"""Auth blueprint: exchange credentials for a Bearer token."""
from __future__ import annotations

from flask import Blueprint
from loguru import logger

from ..common import json_body
from ...auth.jwt import issue_token
from ...db.session import get_db
from ...errors import ok
from ...services.user_service import UserService
from .schemas import TokenIn


bp = Blueprint("auth", __name__)


@bp.post("/token")
def create_token():
    payload = TokenIn.model_validate(json_body())
    user = UserService(get_db().session()).authenticate(payload.email, payload.password)
    logger.info("Issued token for user {}", user.id)
    return ok({"accessToken": issue_token(user.id, list(user.roles or [])), "tokenType": "Bearer", "roles": user.roles})

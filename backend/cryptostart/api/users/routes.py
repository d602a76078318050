"""Users blueprint (CRUD, admins only)."""
from __future__ import annotations

from flask import Blueprint, g

from ..common import json_body
from ...auth.jwt import require_permission
from ...auth.permissions import Permission
from ...db.session import get_db
from ...errors import NotFound, ok
from ...services.user_service import UserService
from .schemas import UserCreateIn, UserUpdateIn, UserOut


bp = Blueprint("users", __name__)


def _service() -> UserService:
    return UserService(get_db().session())


@bp.get("/")
@require_permission(Permission.MANAGE_USERS)
def list_users():
    svc = _service()
    items = [UserOut.model_validate(u).model_dump() for u in svc.list_users()]
    return ok(items)


@bp.post("/")
@require_permission(Permission.MANAGE_USERS)
def create_user():
    payload = UserCreateIn.model_validate(json_body())
    svc = _service()
    user = svc.create_user(email=payload.email, name=payload.name, password=payload.password, roles=payload.roles)
    return ok(UserOut.model_validate(user).model_dump(), 201)


@bp.get("/<user_id>")
@require_permission(Permission.MANAGE_USERS)
def get_user(user_id: str):
    svc = _service()
    user = svc.get_user(user_id)
    if not user:
        raise NotFound(f"User {user_id} not found")
    return ok(UserOut.model_validate(user).model_dump())


@bp.put("/<user_id>")
@require_permission(Permission.MANAGE_USERS)
def update_user(user_id: str):
    payload = UserUpdateIn.model_validate(json_body())
    svc = _service()
    user = svc.update_user(user_id, name=payload.name, roles=payload.roles, password=payload.password)
    if not user:
        raise NotFound(f"User {user_id} not found")
    return ok(UserOut.model_validate(user).model_dump())


@bp.delete("/<user_id>")
@require_permission(Permission.MANAGE_USERS)
def delete_user(user_id: str):
    deleted = _service().delete_user(user_id, acting_user_id=g.session.user_id)
    return ok({"deleted": deleted})

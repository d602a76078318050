"""Admin authors and categories blueprints (CRUD)."""
from __future__ import annotations

from typing import Callable, Type

from flask import Blueprint

from ..common import CamelModel, json_body, page_args, pagination
from ...auth.jwt import require_permission
from ...auth.permissions import Permission
from ...db.session import get_db
from ...errors import ok
from ...services.taxonomy_service import AuthorService, CategoryService
from .schemas import AuthorIn, AuthorOut, AuthorUpdateIn, CategoryIn, CategoryOut, CategoryUpdateIn


def _make_blueprint(
    name: str,
    plural: str,
    service_cls: Callable,
    create_in: Type[CamelModel],
    update_in: Type[CamelModel],
    out: Type[CamelModel],
) -> Blueprint:
    bp = Blueprint(name, __name__)

    def _service():
        return service_cls(get_db().session())

    def _dump(svc, entity) -> dict:
        data = out.model_validate(entity).out()
        data["postCount"] = svc.post_count(entity)
        return data

    @bp.get("/", endpoint="list")
    @require_permission(Permission.EDIT_OWN_POST)
    def list_entities():
        page, limit = page_args()
        svc = _service()
        items, total = svc.list(page=page, limit=limit)
        return ok({plural: [_dump(svc, e) for e in items], "pagination": pagination(total, page, limit)})

    @bp.post("/", endpoint="create")
    @require_permission(Permission.EDIT_ALL_POSTS)
    def create_entity():
        payload = create_in.model_validate(json_body())
        svc = _service()
        return ok(_dump(svc, svc.create(**payload.model_dump())), 201)

    @bp.get("/<entity_id>", endpoint="get")
    @require_permission(Permission.EDIT_OWN_POST)
    def get_entity(entity_id: str):
        svc = _service()
        return ok(_dump(svc, svc.get(entity_id)))

    @bp.put("/<entity_id>", endpoint="update")
    @require_permission(Permission.EDIT_ALL_POSTS)
    def update_entity(entity_id: str):
        payload = update_in.model_validate(json_body())
        fields = {k: v for k, v in payload.model_dump().items() if v is not None}
        svc = _service()
        return ok(_dump(svc, svc.update(entity_id, **fields)))

    @bp.delete("/<entity_id>", endpoint="delete")
    @require_permission(Permission.DELETE_POST)
    def delete_entity(entity_id: str):
        return ok({"deleted": _service().delete(entity_id)})

    return bp


authors_bp = _make_blueprint("authors", "authors", AuthorService, AuthorIn, AuthorUpdateIn, AuthorOut)
categories_bp = _make_blueprint(
    "categories", "categories", CategoryService, CategoryIn, CategoryUpdateIn, CategoryOut
)

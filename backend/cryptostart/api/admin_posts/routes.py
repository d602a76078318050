"""Admin posts blueprint (CRUD + publish)."""
from __future__ import annotations

from flask import Blueprint, request

from ..common import json_body, page_args, pagination
from ...auth.jwt import require_permission
from ...auth.permissions import Permission
from ...db.session import get_db
from ...errors import ok
from ...services.post_service import PostService
from .schemas import PostCreateIn, PostOut, PostUpdateIn, PublishIn


bp = Blueprint("admin_posts", __name__)


def _service() -> PostService:
    return PostService(get_db().session())


@bp.get("/")
@require_permission(Permission.EDIT_ALL_POSTS)
def list_posts():
    page, limit = page_args()
    status = request.args.get("status")
    status = status.upper() if status and status.lower() != "all" else None
    posts, total = _service().list_posts(
        page=page,
        limit=limit,
        status=status,
        category_id=request.args.get("category"),
        search=request.args.get("search"),
    )
    return ok({
        "posts": [PostOut.model_validate(p).out() for p in posts],
        "pagination": pagination(total, page, limit),
    })


@bp.post("/")
@require_permission(Permission.CREATE_POST)
def create_post():
    payload = PostCreateIn.model_validate(json_body())
    fields = payload.model_dump()
    fields["status"] = payload.status.value
    post = _service().create_post(**fields)
    return ok(PostOut.model_validate(post).out(), 201)


@bp.get("/<post_id>")
@require_permission(Permission.EDIT_ALL_POSTS)
def get_post(post_id: str):
    return ok(PostOut.model_validate(_service().get_post(post_id)).out())


@bp.put("/<post_id>")
@require_permission(Permission.EDIT_ALL_POSTS)
def update_post(post_id: str):
    payload = PostUpdateIn.model_validate(json_body())
    fields = {k: v for k, v in payload.model_dump().items() if v is not None}
    if payload.status is not None:
        fields["status"] = payload.status.value
    post = _service().update_post(post_id, **fields)
    return ok(PostOut.model_validate(post).out())


@bp.post("/<post_id>/publish")
@require_permission(Permission.PUBLISH_POST)
def publish_post(post_id: str):
    payload = PublishIn.model_validate(json_body())
    post = _service().publish(post_id, payload.publish)
    return ok({"id": post.id, "status": post.status, "publishDate": post.publish_date.isoformat() if post.publish_date else None})


@bp.delete("/<post_id>")
@require_permission(Permission.DELETE_POST)
def delete_post(post_id: str):
    return ok({"deleted": _service().delete_post(post_id)})

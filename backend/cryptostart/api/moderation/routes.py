"""Admin comment moderation blueprint."""
from __future__ import annotations

from flask import Blueprint, current_app, g, request

from ..common import json_body, page_args, pagination
from ...auth.jwt import require_permission
from ...auth.permissions import Permission
from ...content.catalog import get_catalog
from ...content.spam import SpamClassifier
from ...db.session import get_db
from ...errors import ok
from ...services.comment_service import CommentService
from .schemas import CommentAdminOut, CommentStatusIn


bp = Blueprint("moderation", __name__)

PAGE_SIZE = 20


def _service() -> CommentService:
    return CommentService(
        get_db().session(),
        SpamClassifier(get_catalog().spam_keywords),
        spam_threshold=current_app.config["SPAM_THRESHOLD"],
    )


@bp.get("/")
@require_permission(Permission.MODERATE_COMMENTS)
def list_comments():
    status = request.args.get("status")
    status = status.upper() if status and status.lower() != "all" else None
    page, _ = page_args(PAGE_SIZE)
    comments, total = _service().list_for_moderation(status, page, PAGE_SIZE)
    return ok({
        "comments": [CommentAdminOut.model_validate(c).out() for c in comments],
        "pagination": pagination(total, page, PAGE_SIZE),
    })


@bp.patch("/<comment_id>")
@require_permission(Permission.MODERATE_COMMENTS)
def moderate_comment(comment_id: str):
    payload = CommentStatusIn.model_validate(json_body())
    comment = _service().moderate(comment_id, payload.status.upper(), g.session.user_id)
    return ok(CommentAdminOut.model_validate(comment).out())


@bp.delete("/<comment_id>")
@require_permission(Permission.MODERATE_COMMENTS)
def delete_comment(comment_id: str):
    _service().delete(comment_id)
    return "", 204

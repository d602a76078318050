"""Public comments blueprint: submission and approved listing."""
from __future__ import annotations

from flask import Blueprint, current_app, request

from ..common import client_ip, json_body
from ...content.catalog import get_catalog
from ...content.spam import SpamClassifier
from ...db.session import get_db
from ...errors import ValidationFailed, ok
from ...services.comment_service import CommentService, CommentSubmission, HoneypotTriggered
from .schemas import CommentCreatedOut, CommentCreateIn, CommentThreadOut, ReplyOut


bp = Blueprint("comments", __name__)


def _service() -> CommentService:
    cfg = current_app.config
    return CommentService(
        get_db().session(),
        SpamClassifier(get_catalog().spam_keywords),
        rate_limit=cfg["COMMENT_RATE_LIMIT"],
        rate_window_minutes=cfg["COMMENT_RATE_WINDOW_MINUTES"],
        spam_threshold=cfg["SPAM_THRESHOLD"],
    )


@bp.post("/")
def submit_comment():
    payload = CommentCreateIn.model_validate(json_body())
    submission = CommentSubmission(
        post_slug=payload.post_slug,
        author_name=payload.author_name,
        author_email=payload.author_email,
        content=payload.content,
        website=payload.website,
        parent_id=payload.parent_id,
        ip_address=client_ip(),
        user_agent=request.headers.get("User-Agent", ""),
    )
    svc = _service()
    try:
        comment = svc.submit(submission)
    except HoneypotTriggered:
        # bots get a success answer and nothing is stored
        return ok({"message": "Comment submitted", "success": True}, 201)
    return ok(CommentCreatedOut.model_validate(comment).out(), 201)


@bp.get("/")
def list_comments():
    post_slug = request.args.get("postSlug") or request.args.get("post_slug")
    if not post_slug:
        raise ValidationFailed(
            "postSlug parameter required", details=[{"field": "postSlug", "message": "Field required"}]
        )
    threads = _service().approved_threads(post_slug)
    items = []
    for t in threads:
        item = CommentThreadOut.model_validate(t["comment"]).out()
        item["replies"] = [ReplyOut.model_validate(r).out() for r in t["replies"]]
        items.append(item)
    return ok(items)

"""Public post helpers: generated FAQ and quick answer for rendering."""
from __future__ import annotations

from flask import Blueprint, current_app

from ...content.catalog import get_catalog
from ...db.session import get_db
from ...errors import ok
from ...services.scoring_service import ScoringService


bp = Blueprint("posts", __name__)


@bp.get("/<slug>/faq")
def post_faq(slug: str):
    svc = ScoringService(get_db().session(), get_catalog(), current_app.config["SITE_DOMAIN"])
    return ok(svc.faq_for_post(slug))

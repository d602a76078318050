"""Admin scoring dashboards: AI optimization and SEO metrics."""
from __future__ import annotations

from flask import Blueprint, current_app

from ...auth.jwt import require_permission
from ...auth.permissions import Permission
from ...content.catalog import get_catalog
from ...db.session import get_db
from ...errors import ok
from ...services.scoring_service import ScoringService


bp = Blueprint("dashboards", __name__)


def _service() -> ScoringService:
    return ScoringService(get_db().session(), get_catalog(), current_app.config["SITE_DOMAIN"])


@bp.get("/ai-optimization/scores")
@require_permission(Permission.VIEW_ANALYTICS)
def ai_optimization_scores():
    return ok(_service().ai_optimization_scores())


@bp.get("/seo/metrics")
@require_permission(Permission.VIEW_ANALYTICS)
def seo_metrics():
    return ok(_service().seo_metrics())


@bp.get("/seo/posts/<slug>")
@require_permission(Permission.VIEW_ANALYTICS)
def seo_post(slug: str):
    return ok(_service().seo_for_post(slug))

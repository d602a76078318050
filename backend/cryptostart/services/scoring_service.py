"""Dashboard scoring over the published post corpus.

Nothing is cached: every call reloads the posts and recomputes all scores,
including the quadratic link-suggestion pass.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from ..content.ai_optimization import extract_quick_answer, generate_faq_from_post, score_post
from ..content.catalog import ContentCatalog
from ..content.expansion import analyze_all_for_expansion
from ..content.link_suggestions import flatten_suggestions, generate_linking_suggestions_for_all
from ..content.seo_analyzer import analyze_seo
from ..db.repositories.post_repo import PostRepository
from ..domain.post import BlogPost
from ..errors import NotFound

CORPUS_LIMIT = 1000


class ScoringService:
    def __init__(self, session: Session, catalog: ContentCatalog, site_domain: str) -> None:
        self.posts = PostRepository(session)
        self.catalog = catalog
        self.site_domain = site_domain

    def _corpus(self) -> List[BlogPost]:
        return self.posts.list_published(limit=CORPUS_LIMIT)

    def _published(self, slug: str) -> BlogPost:
        post = self.posts.get_published(slug)
        if post is None:
            raise NotFound(f"Post {slug} not found")
        return post

    def ai_optimization_scores(self, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        rows = []
        for post in self._corpus():
            result = score_post(post, now=now)
            rows.append(
                {
                    "slug": post.slug,
                    "title": post.title,
                    "score": result.overall,
                    "hasQuickAnswer": result.has_quick_answer,
                    # FAQ schema is emitted for every post page regardless of the tag-based sub-score
                    "hasFAQ": True,
                    "citableSentences": result.citable_sentences,
                    "authorBio": bool(post.author.bio),
                    "recommendations": result.recommendations,
                }
            )
        logger.debug("Scored {} posts for AI optimization", len(rows))
        return rows

    def seo_metrics(self) -> Dict[str, Any]:
        posts = self._corpus()
        if not posts:
            return {
                "totalPosts": 0,
                "avgWordCount": 0,
                "postsUnder1500Words": 0,
                "avgInternalLinks": 0,
                "avgExternalLinks": 0,
                "contentExpansionOpportunities": [],
                "linkingSuggestions": [],
            }

        analyses = [analyze_seo(p.content, p.tags, self.site_domain) for p in posts]
        total = len(posts)
        opportunities = analyze_all_for_expansion(
            posts, self.catalog.expansion_suggestions, self.catalog.fallback_suggestions
        )
        suggestions = flatten_suggestions(generate_linking_suggestions_for_all(posts))

        return {
            "totalPosts": total,
            "avgWordCount": round(sum(a.word_count for a in analyses) / total),
            "postsUnder1500Words": sum(1 for a in analyses if a.word_count < 1500),
            "avgInternalLinks": round(sum(a.internal_link_count for a in analyses) / total, 1),
            "avgExternalLinks": round(sum(a.external_link_count for a in analyses) / total, 1),
            "contentExpansionOpportunities": [o.to_dict() for o in opportunities],
            "linkingSuggestions": [s.to_dict() for s in suggestions],
        }

    def seo_for_post(self, slug: str) -> Dict[str, Any]:
        post = self._published(slug)
        analysis = analyze_seo(post.content, post.keywords or post.tags, self.site_domain)
        return {"slug": post.slug, "title": post.title, **analysis.to_dict()}

    def faq_for_post(self, slug: str) -> Dict[str, Any]:
        post = self._published(slug)
        faqs = generate_faq_from_post(post, self.catalog.faq_items)
        return {
            "slug": post.slug,
            "quickAnswer": extract_quick_answer(post.content),
            "faq": [f.to_dict() for f in faqs],
        }

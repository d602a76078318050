"""Internal-linking suggestions from title, tag and category similarity."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence, Set

from .text_metrics import strip_diacritics
from ..domain.post import BlogPost

MIN_RELEVANCE = 0.15
MAX_SUGGESTIONS = 5
TITLE_WEIGHT = 0.5
TAG_WEIGHT = 0.3
CATEGORY_WEIGHT = 0.2
# already weighted once before CATEGORY_WEIGHT applies; effective bonus is 0.06
SAME_CATEGORY_INDICATOR = 0.3

_TOKEN_SPLIT = re.compile(r"[\s\-.,!?;:()]+")


@dataclass(frozen=True, slots=True)
class LinkingSuggestion:
    source_slug: str
    source_title: str
    target_slug: str
    target_title: str
    anchor_text: str
    relevance_score: float
    reason: str

    def to_dict(self) -> dict:
        return {
            "sourceSlug": self.source_slug,
            "sourceTitle": self.source_title,
            "targetSlug": self.target_slug,
            "targetTitle": self.target_title,
            "anchorText": self.anchor_text,
            "relevanceScore": self.relevance_score,
            "reason": self.reason,
        }


def tokenize(text: str | None) -> List[str]:
    if not text:
        return []
    normalized = strip_diacritics(text.lower())
    return [tok for tok in _TOKEN_SPLIT.split(normalized) if len(tok) > 3]


def title_similarity(a: str | None, b: str | None) -> float:
    """Jaccard similarity of the two titles' token sets."""
    tokens_a: Set[str] = set(tokenize(a))
    tokens_b: Set[str] = set(tokenize(b))
    if not tokens_a or not tokens_b:
        return 0.0
    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


def shared_tags(source: BlogPost, target: BlogPost) -> List[str]:
    target_tags = set(target.tags or [])
    return [tag for tag in dict.fromkeys(source.tags or []) if tag in target_tags]


def tag_overlap(source: BlogPost, target: BlogPost) -> float:
    largest = max(len(set(source.tags or [])), len(set(target.tags or [])))
    if largest == 0:
        return 0.0
    return len(shared_tags(source, target)) / largest


def relevance(source: BlogPost, target: BlogPost) -> float:
    same_category = SAME_CATEGORY_INDICATOR if source.category == target.category else 0.0
    return (
        title_similarity(source.title, target.title) * TITLE_WEIGHT
        + tag_overlap(source, target) * TAG_WEIGHT
        + same_category * CATEGORY_WEIGHT
    )


def _reason(source: BlogPost, target: BlogPost, common: Sequence[str]) -> str:
    if common:
        return f"Shares tags: {', '.join(common)}"
    if source.category == target.category:
        return f"Same category: {source.category}"
    return "Similar topic detected"


def find_linking_opportunities(candidates: Iterable[BlogPost], target: BlogPost) -> List[LinkingSuggestion]:
    """Top candidates that should link to ``target``."""
    suggestions: List[LinkingSuggestion] = []
    for source in candidates:
        if source.slug == target.slug:
            continue
        score = relevance(source, target)
        if score <= MIN_RELEVANCE:
            continue
        suggestions.append(
            LinkingSuggestion(
                source_slug=source.slug,
                source_title=source.title,
                target_slug=target.slug,
                target_title=target.title,
                anchor_text=target.title,
                relevance_score=score,
                reason=_reason(source, target, shared_tags(source, target)),
            )
        )
    suggestions.sort(key=lambda s: s.relevance_score, reverse=True)
    return suggestions[:MAX_SUGGESTIONS]


def generate_linking_suggestions_for_all(posts: Sequence[BlogPost]) -> Dict[str, List[LinkingSuggestion]]:
    """Pairwise over the whole corpus; quadratic in the number of posts."""
    return {
        post.slug: find_linking_opportunities([p for p in posts if p.slug != post.slug], post)
        for post in posts
    }


def flatten_suggestions(by_slug: Mapping[str, Sequence[LinkingSuggestion]]) -> List[LinkingSuggestion]:
    flat = [s for group in by_slug.values() for s in group]
    flat.sort(key=lambda s: s.relevance_score, reverse=True)
    return flat

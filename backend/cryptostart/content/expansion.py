"""Find posts that are too short and suggest what to add."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence

from .text_metrics import count_words
from ..domain.post import BlogPost

TARGET_WORDS = 1500


@dataclass(slots=True)
class ExpansionOpportunity:
    slug: str
    title: str
    current_word_count: int
    target_word_count: int
    word_gap: int
    priority: str
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "currentWordCount": self.current_word_count,
            "targetWordCount": self.target_word_count,
            "wordGap": self.word_gap,
            "priority": self.priority,
            "suggestions": list(self.suggestions),
        }


def classify(word_count: int) -> tuple[str, int]:
    """Priority and target word count for an under-length post."""
    if word_count < 800:
        return "high", 2000
    if word_count < 1200:
        return "medium", TARGET_WORDS
    return "low", TARGET_WORDS


def analyze_for_expansion(
    post: BlogPost,
    suggestions_by_category: Mapping[str, Sequence[str]],
    fallback: Sequence[str] = (),
) -> Optional[ExpansionOpportunity]:
    current = count_words(post.content)
    if current >= TARGET_WORDS:
        return None

    priority, target = classify(current)
    suggestions = suggestions_by_category.get(post.category) or fallback
    return ExpansionOpportunity(
        slug=post.slug,
        title=post.title,
        current_word_count=current,
        target_word_count=target,
        word_gap=target - current,
        priority=priority,
        suggestions=list(suggestions)[:3],
    )


def analyze_all_for_expansion(
    posts: Iterable[BlogPost],
    suggestions_by_category: Mapping[str, Sequence[str]],
    fallback: Sequence[str] = (),
) -> List[ExpansionOpportunity]:
    """High priority first, then the largest word gap."""
    found = [analyze_for_expansion(p, suggestions_by_category, fallback) for p in posts]
    opportunities = [o for o in found if o is not None]
    return sorted(opportunities, key=lambda o: (o.priority != "high", -o.word_gap))

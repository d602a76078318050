"""AI search optimization scoring.

Scores how easily answer engines (ChatGPT, Claude, Perplexity) can lift and
cite a post: a quotable opening paragraph, FAQ coverage, Q&A structure,
author E-E-A-T signals and fact-dense sentences. Five sub-scores add up to
an overall 0..100 score.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Mapping, Optional

from .catalog import FAQItem
from .text_metrics import extract_headings
from ..domain.post import BlogPost

QUICK_ANSWER_MAX_CHARS = 300
SNIPPET_MIN_WORDS = 30
SNIPPET_MAX_WORDS = 70
FRESHNESS_WINDOW = timedelta(days=90)
MAX_FAQ_ITEMS = 3

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_EMPHASIS = re.compile(r"[*_~`]")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+|\n+")
_CITABLE_SPLIT = re.compile(r"[.!?\n]+")
_DIGIT = re.compile(r"[0-9]")
_PROPER_NOUN = re.compile(r"[A-Z][a-z]+")
QUESTION_WORDS = ("what ", "how ", "why ", "como ", "o que ", "por que ")


@dataclass(slots=True)
class AIOptimizationScore:
    overall: int
    has_quick_answer: bool
    answer_word_count: int
    has_faq_schema: bool
    has_proper_headings: bool
    citable_sentences: int
    sub_scores: Dict[str, int] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall,
            "hasQuickAnswer": self.has_quick_answer,
            "answerWordCount": self.answer_word_count,
            "hasFAQSchema": self.has_faq_schema,
            "hasProperHeadings": self.has_proper_headings,
            "citableSentences": self.citable_sentences,
            "subScores": dict(self.sub_scores),
            "recommendations": list(self.recommendations),
        }


def extract_quick_answer(content: str | None) -> Optional[str]:
    """First real paragraph, stripped of emphasis and capped at 300 chars."""
    if not content:
        return None
    for raw in _PARAGRAPH_BREAK.split(content):
        paragraph = raw.strip()
        if len(paragraph) <= 20 or paragraph.startswith(("#", "!")):
            continue
        text = _EMPHASIS.sub("", paragraph).strip()
        if len(text) > QUICK_ANSWER_MAX_CHARS:
            return text[: QUICK_ANSWER_MAX_CHARS - 3] + "..."
        return text
    return None


def _sentences(content: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_END.split(content) if s and s.strip()]


def count_qa_sentences(content: str | None) -> int:
    if not content:
        return 0
    count = 0
    for sentence in _sentences(content):
        lowered = sentence.lower()
        if sentence.endswith("?") or any(word in lowered for word in QUESTION_WORDS):
            count += 1
    return count


def has_well_structured_qa(content: str | None) -> bool:
    return len(extract_headings(content)) >= 3 and count_qa_sentences(content) >= 2


def count_citable_sentences(content: str | None) -> int:
    """Sentences of 8-25 words mentioning a number or a capitalized name."""
    if not content:
        return 0
    count = 0
    for sentence in _CITABLE_SPLIT.split(content):
        words = len(sentence.split())
        if 8 <= words <= 25 and (_DIGIT.search(sentence) or _PROPER_NOUN.search(sentence)):
            count += 1
    return count


def _is_recent(published_at: datetime | None, now: datetime) -> bool:
    if published_at is None:
        return False
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    return published_at > now - FRESHNESS_WINDOW


def score_post(post: BlogPost, now: datetime | None = None) -> AIOptimizationScore:
    now = now or datetime.now(timezone.utc)
    content = post.content or ""

    quick_answer = extract_quick_answer(content)
    answer_words = len(quick_answer.split()) if quick_answer else 0
    quick_answer_score = 0
    if quick_answer:
        quick_answer_score = 20 if SNIPPET_MIN_WORDS <= answer_words <= SNIPPET_MAX_WORDS else 15

    # tags stand in for generated FAQ coverage
    has_faq = bool(post.tags)
    faq_score = 25 if has_faq else 0

    well_structured = has_well_structured_qa(content)
    structure_score = 20 if well_structured else 10

    has_bio = bool(post.author.bio)
    has_image = bool(post.author.image)
    recent = _is_recent(post.published_at, now)
    authority_score = (8 if has_bio else 0) + (6 if has_image else 0) + (6 if recent else 0)

    citable = count_citable_sentences(content)
    citability_score = min(citable * 2, 15)

    total = quick_answer_score + faq_score + structure_score + authority_score + citability_score
    overall = max(0, min(round(total), 100))

    recommendations: List[str] = []
    if not quick_answer:
        recommendations.append('Add a clear "definition" or summary paragraph at the start (40-60 words).')
    if not well_structured:
        recommendations.append("Use more H2/H3 headings and structure content with clear Q&A style.")
    if not has_bio:
        recommendations.append("Ensure the author has a detailed bio for E-E-A-T signals.")
    if citable < 5:
        recommendations.append("Add more specific statistics, dates, or named entities to make content more citable.")
    if answer_words > 0 and not (SNIPPET_MIN_WORDS <= answer_words <= SNIPPET_MAX_WORDS):
        recommendations.append(
            f"The first paragraph has {answer_words} words. Aim for 40-60 for better AI extraction."
        )

    return AIOptimizationScore(
        overall=overall,
        has_quick_answer=quick_answer is not None,
        answer_word_count=answer_words,
        has_faq_schema=has_faq,
        has_proper_headings=well_structured,
        citable_sentences=citable,
        sub_scores={
            "quickAnswer": quick_answer_score,
            "faq": faq_score,
            "structure": structure_score,
            "authority": authority_score,
            "citability": citability_score,
        },
        recommendations=recommendations,
    )


def generate_faq_from_post(post: BlogPost, faq_items: Mapping[str, FAQItem]) -> List[FAQItem]:
    """Category FAQ first, then tag matches, at most three unique questions."""
    faqs: List[FAQItem] = []
    category_item = faq_items.get(post.category)
    if category_item is not None:
        faqs.append(category_item)

    for tag in post.tags or []:
        if len(faqs) >= MAX_FAQ_ITEMS:
            break
        item = faq_items.get(tag.lower())
        if item is not None and all(f.question != item.question for f in faqs):
            faqs.append(item)
    return faqs

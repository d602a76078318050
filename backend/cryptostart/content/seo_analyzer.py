"""Post-level SEO health score."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .text_metrics import (
    DEFAULT_SITE_DOMAIN,
    count_images,
    count_words,
    extract_headings,
    extract_links,
    reading_time,
)

BASE_SCORE = 50
MAX_RECOMMENDATIONS = 5


@dataclass(slots=True)
class SEOAnalysis:
    word_count: int
    reading_time: int
    heading_count: int
    internal_link_count: int
    external_link_count: int
    image_count: int
    score: int
    keyword_density: Dict[str, float] = field(default_factory=dict)
    heading_hierarchy: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "wordCount": self.word_count,
            "readingTime": self.reading_time,
            "headingCount": self.heading_count,
            "internalLinkCount": self.internal_link_count,
            "externalLinkCount": self.external_link_count,
            "imageCount": self.image_count,
            "keywordDensity": dict(self.keyword_density),
            "headingHierarchy": list(self.heading_hierarchy),
            "recommendations": list(self.recommendations),
            "score": self.score,
        }


def keyword_density(content: str | None, keywords: Iterable[str], word_count: int) -> Dict[str, float]:
    """Occurrences of each keyword per 100 words."""
    text = (content or "").lower()
    density: Dict[str, float] = {}
    for keyword in keywords:
        if not keyword:
            continue
        pattern = re.compile(rf"\b{re.escape(keyword.lower())}\b")
        hits = len(pattern.findall(text))
        density[keyword] = hits / (word_count / 100) if word_count > 0 else 0.0
    return density


def analyze_seo(
    content: str | None,
    keywords: Iterable[str] = (),
    site_domain: str = DEFAULT_SITE_DOMAIN,
) -> SEOAnalysis:
    words = count_words(content)
    headings = extract_headings(content)
    links = extract_links(content, site_domain)
    images = count_images(content)
    density = keyword_density(content, keywords, words)

    recommendations: List[str] = []
    if words < 1500:
        recommendations.append(f"Expand content to 1500+ words (current: {words})")
    if len(headings) < 3:
        recommendations.append("Add more H2/H3 headings for structure")
    if images < 3:
        recommendations.append("Add at least 3 relevant images")
    if len(links.internal) < 3:
        recommendations.append("Add at least 3 internal links")
    if len(links.external) < 5:
        recommendations.append("Add at least 5 external references")
    for keyword, value in density.items():
        if 0 < value < 1:
            recommendations.append(f'Keyword "{keyword}" density is low ({value:.2f}%)')
        if value > 3:
            recommendations.append(f'Keyword "{keyword}" density is high ({value:.2f}%) - consider reducing')

    score = BASE_SCORE
    if words >= 1500:
        score += 15
    if words >= 2000:
        score += 5
    if len(headings) >= 3:
        score += 10
    if images >= 3:
        score += 10
    if len(links.internal) >= 3:
        score += 10
    if len(links.external) >= 5:
        score += 10

    return SEOAnalysis(
        word_count=words,
        reading_time=reading_time(words),
        heading_count=len(headings),
        internal_link_count=len(links.internal),
        external_link_count=len(links.external),
        image_count=images,
        score=min(score, 100),
        keyword_density=density,
        heading_hierarchy=[h.text for h in headings],
        recommendations=recommendations[:MAX_RECOMMENDATIONS],
    )

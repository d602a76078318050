"""Word counts, reading time, headings, links and images of markdown-like text.

Every function here is total: empty or malformed input yields empty/zero
results, never an exception.
"""
from __future__ import annotations

import math
import re
import unicodedata
from dataclasses import dataclass, field
from typing import List

DEFAULT_SITE_DOMAIN = "thecryptostart.com"
WORDS_PER_MINUTE = 200

_MARKDOWN_CHARS = re.compile(r"[#*_~\[\]()>]")
_WORD = re.compile(r"\b[-?a-zA-Z0-9_'\"]+\b", re.ASCII)
_HEADING = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)
_LINK = re.compile(r"(?<!!)\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+\"[^\"]*\")?\s*\)")
_MD_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_HTML_IMAGE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str
    anchor: str


@dataclass(slots=True)
class LinkSet:
    internal: List[str] = field(default_factory=list)
    external: List[str] = field(default_factory=list)


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(text: str) -> str:
    """Lowercase, accent-free, hyphen-separated slug."""
    s = strip_diacritics(text or "").lower()
    s = re.sub(r"[^a-z0-9\s-]", "", s).strip()
    s = re.sub(r"[\s-]+", "-", s)
    return s.strip("-")


def count_words(content: str | None) -> int:
    if not content:
        return 0
    return len(_WORD.findall(_MARKDOWN_CHARS.sub("", content)))


def reading_time(word_count: int) -> int:
    """Minutes at 200 wpm, never less than one."""
    return max(1, math.ceil(max(word_count, 0) / WORDS_PER_MINUTE))


def extract_headings(content: str | None) -> List[Heading]:
    if not content:
        return []
    headings: List[Heading] = []
    seen: dict[str, int] = {}
    for match in _HEADING.finditer(content):
        text = match.group(2).strip().rstrip("#").strip()
        if not text:
            continue
        base = slugify(text) or "section"
        anchor = base
        if base in seen:
            seen[base] += 1
            anchor = f"{base}-{seen[base]}"
        else:
            seen[base] = 0
        headings.append(Heading(level=len(match.group(1)), text=text, anchor=anchor))
    return headings


def is_internal_url(url: str, site_domain: str = DEFAULT_SITE_DOMAIN) -> bool:
    return url.startswith("/") or (bool(site_domain) and site_domain in url)


def extract_links(content: str | None, site_domain: str = DEFAULT_SITE_DOMAIN) -> LinkSet:
    links = LinkSet()
    if not content:
        return links
    for match in _LINK.finditer(content):
        url = match.group(2)
        if is_internal_url(url, site_domain):
            links.internal.append(url)
        elif url.startswith("http"):
            links.external.append(url)
    return links


def count_images(content: str | None) -> int:
    if not content:
        return 0
    return len(_MD_IMAGE.findall(content)) + len(_HTML_IMAGE.findall(content))

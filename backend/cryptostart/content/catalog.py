"""Immutable content configuration loaded once at startup.

The FAQ map, spam keyword list and expansion-suggestion table live as JSON
files under ``content/data`` (or ``CONTENT_DATA_DIR``).
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Tuple

from flask import current_app
from loguru import logger

DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(frozen=True, slots=True)
class FAQItem:
    question: str
    answer: str

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer}


@dataclass(frozen=True)
class ContentCatalog:
    faq_items: Mapping[str, FAQItem]
    spam_keywords: Tuple[str, ...]
    expansion_suggestions: Mapping[str, Tuple[str, ...]]
    fallback_suggestions: Tuple[str, ...]

    @classmethod
    def load(cls, data_dir: str | Path | None = None) -> "ContentCatalog":
        base = Path(data_dir) if data_dir else DATA_DIR
        faq_raw = _read_json(base / "faq_items.json")
        keywords_raw = _read_json(base / "spam_keywords.json")
        expansion_raw = _read_json(base / "expansion_suggestions.json")

        faq = {key.lower(): FAQItem(**item) for key, item in faq_raw.items()}
        keywords = tuple(dict.fromkeys(k.lower() for k in keywords_raw if k))
        suggestions = {
            key: tuple(items) for key, items in expansion_raw.get("categories", {}).items()
        }
        catalog = cls(
            faq_items=MappingProxyType(faq),
            spam_keywords=keywords,
            expansion_suggestions=MappingProxyType(suggestions),
            fallback_suggestions=tuple(expansion_raw.get("fallback", [])),
        )
        logger.debug(
            "Content catalog loaded from {}: {} FAQ entries, {} spam keywords",
            base, len(faq), len(keywords),
        )
        return catalog


def _read_json(path: Path):
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def get_catalog() -> ContentCatalog:
    """Catalog bound to the current application."""
    return current_app.extensions["content_catalog"]

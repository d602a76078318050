"""Rule-based comment spam scoring and the comment rate limiter."""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Tuple

from loguru import logger

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_URL = re.compile(r"https?://")
_UPPER = re.compile(r"[A-Z]")
_REPEATED_CHAR = re.compile(r"(.)\1{4,}")
_SUSPICIOUS_EMAIL = re.compile(r"@(?:test|fake)", re.IGNORECASE)

MIN_LENGTH = 5
MAX_LENGTH = 2000


def is_valid_email(email: str | None) -> bool:
    return bool(email) and _EMAIL.match(email) is not None


class SpamClassifier:
    """Sums independent weighted signals into a 0..1 spam likelihood."""

    KEYWORD_WEIGHT = 0.15

    def __init__(self, keywords: Iterable[str]) -> None:
        self.keywords: Tuple[str, ...] = tuple(dict.fromkeys(k.lower() for k in keywords if k))

    def score(self, content: str | None, author_email: str | None = "") -> float:
        content = content or ""
        author_email = author_email or ""
        total = 0.0

        length = len(content)
        if length < MIN_LENGTH:
            total += 0.5
        if length > MAX_LENGTH:
            total += 0.3

        lowered = content.lower()
        total += self.KEYWORD_WEIGHT * sum(1 for kw in self.keywords if kw in lowered)

        links = len(_URL.findall(content))
        if links > 2:
            total += 0.3
        if links > 5:
            total += 0.4

        if length > 20:
            caps_ratio = len(_UPPER.findall(content)) / length
            if caps_ratio > 0.3:
                total += 0.15
            if caps_ratio > 0.5:
                total += 0.25

        exclamations = content.count("!")
        if exclamations > 3:
            total += 0.1
        if exclamations > 10:
            total += 0.3
        if content.count("?") > 5:
            total += 0.1

        if _REPEATED_CHAR.search(content):
            total += 0.2

        if _SUSPICIOUS_EMAIL.search(author_email):
            total += 0.4

        return min(round(total, 4), 1.0)


RecentCounter = Callable[[str, str, datetime], int]


class RateLimiter:
    """Sliding-window limit on comments per IP or email.

    ``counter(ip, email, since)`` returns how many comments match either key
    since the given instant. Backing-store failures fail open.
    """

    def __init__(self, counter: RecentCounter, limit: int = 5, window: timedelta = timedelta(minutes=60)) -> None:
        self.counter = counter
        self.limit = limit
        self.window = window

    def allowed(self, ip: str, email: str, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        try:
            count = self.counter(ip, email, now - self.window)
        except Exception as exc:
            logger.warning("Rate limit check failed, allowing submission: {}", exc)
            return True
        return count < self.limit

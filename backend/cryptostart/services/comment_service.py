"""Comment submission pipeline and moderation rules."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger
from sqlalchemy.orm import Session

from ..content.spam import RateLimiter, SpamClassifier, is_valid_email
from ..db.models.comment import CommentModel
from ..db.repositories.comment_repo import CommentRepository, SpamLogRepository
from ..domain.enums import MODERATION_STATUSES, CommentStatus, Severity
from ..errors import NotFound, RateLimited, ValidationFailed

REQUIRED_FIELDS = ("post_slug", "author_name", "author_email", "content")
AUDIT_CONTENT_CHARS = 500


class HoneypotTriggered(Exception):
    """The hidden form field was filled in; the submission came from a bot."""


@dataclass
class CommentSubmission:
    post_slug: Optional[str] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    content: Optional[str] = None
    website: Optional[str] = None
    parent_id: Optional[str] = None
    ip_address: str = "127.0.0.1"
    user_agent: str = ""


class CommentService:
    def __init__(
        self,
        session: Session,
        classifier: SpamClassifier,
        *,
        rate_limit: int = 5,
        rate_window_minutes: int = 60,
        spam_threshold: float = 0.7,
    ) -> None:
        self.session = session
        self.repo = CommentRepository(session)
        self.audit = SpamLogRepository(session)
        self.classifier = classifier
        self.spam_threshold = spam_threshold
        self.limiter = RateLimiter(
            self._count_recent, limit=rate_limit, window=timedelta(minutes=rate_window_minutes)
        )

    def _count_recent(self, ip: str, email: str, since) -> int:
        try:
            return self.repo.count_recent(ip, email, since)
        except Exception:
            self.session.rollback()
            raise

    def _log_spam(self, email: str, ip: str, reason: str, severity: Severity, content: str | None = None) -> None:
        logger.warning("Spam signal {} ({}) from {} / {}", reason, severity.value, email, ip)
        self.audit.create(email=email, ip_address=ip, reason=reason, severity=severity.value, content=content)

    def submit(self, data: CommentSubmission) -> CommentModel:
        """Run the submission pipeline; the comment is stored even when it is spam."""
        email = (data.author_email or "").strip()

        if data.website and data.website.strip():
            self._log_spam(email, data.ip_address, "honeypot", Severity.HIGH)
            raise HoneypotTriggered()

        missing = [f for f in REQUIRED_FIELDS if not (getattr(data, f) or "").strip()]
        if missing:
            raise ValidationFailed(
                "Missing required fields",
                details=[{"field": f, "message": "Field required"} for f in missing],
            )

        if not is_valid_email(email):
            self._log_spam(email, data.ip_address, "invalid_email", Severity.MEDIUM)
            raise ValidationFailed(
                "Invalid email address",
                details=[{"field": "author_email", "message": "Invalid email address"}],
            )

        if not self.limiter.allowed(data.ip_address, email.lower()):
            self._log_spam(email, data.ip_address, "rate_limit", Severity.MEDIUM)
            raise RateLimited("Too many comments. Please try again later.")

        post_slug = data.post_slug.strip()
        if data.parent_id:
            parent = self.repo.get(data.parent_id)
            if parent is None or parent.post_slug != post_slug:
                raise ValidationFailed(
                    "Invalid parent comment",
                    details=[{"field": "parent_id", "message": "Unknown parent comment for this post"}],
                )

        content = data.content.strip()
        spam_score = self.classifier.score(content, email)
        is_spam = spam_score > self.spam_threshold
        if is_spam:
            self._log_spam(email, data.ip_address, "spam_keywords", Severity.HIGH, content[:AUDIT_CONTENT_CHARS])

        comment = self.repo.create(
            post_slug=post_slug,
            author_name=data.author_name.strip(),
            author_email=email.lower(),
            content=content,
            status=(CommentStatus.SPAM if is_spam else CommentStatus.PENDING).value,
            spam_score=spam_score,
            ip_address=data.ip_address,
            user_agent=data.user_agent[:500],
            parent_id=data.parent_id or None,
        )
        logger.info("Comment {} on {} stored as {} (spam score {})", comment.id, post_slug, comment.status, spam_score)
        return comment

    def approved_threads(self, post_slug: str) -> List[Dict[str, Any]]:
        return self.repo.list_approved_threads(post_slug)

    def list_for_moderation(self, status: str | None, page: int, limit: int = 20) -> Tuple[Sequence[CommentModel], int]:
        return self.repo.list(status=status, page=page, limit=limit)

    def moderate(self, comment_id: str, status: str, moderator_id: str | None) -> CommentModel:
        if status not in {s.value for s in MODERATION_STATUSES}:
            raise ValidationFailed(
                "Invalid status",
                details=[{"field": "status", "message": "Must be one of APPROVED, REJECTED, SPAM"}],
            )
        comment = self.repo.update_status(comment_id, status, moderator_id)
        if comment is None:
            raise NotFound(f"Comment {comment_id} not found")
        logger.info("Comment {} set to {} by {}", comment_id, status, moderator_id)
        return comment

    def delete(self, comment_id: str) -> int:
        if self.repo.get(comment_id) is None:
            raise NotFound(f"Comment {comment_id} not found")
        deleted = self.repo.delete_with_replies(comment_id)
        logger.info("Deleted comment {} and replies ({} rows)", comment_id, deleted)
        return deleted

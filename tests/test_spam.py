from datetime import datetime, timedelta, timezone

import pytest

from cryptostart.content.spam import RateLimiter, SpamClassifier, is_valid_email


@pytest.fixture
def classifier(catalog):
    return SpamClassifier(catalog.spam_keywords)


def test_clean_comment_scores_zero(classifier):
    assert classifier.score("Great article about the Bitcoin halving, thanks for sharing.", "reader@example.com") == 0.0


def test_very_short_comment(classifier):
    assert classifier.score("hi", "reader@example.com") == pytest.approx(0.5)


def test_keyword_counted_once_per_distinct_keyword(classifier):
    assert classifier.score("casino casino casino is a nice place to be", "reader@example.com") == pytest.approx(0.15)


def test_suspicious_email_domain(classifier):
    assert classifier.score("A perfectly normal comment about Ethereum.", "joe@test.com") == pytest.approx(0.4)
    assert classifier.score("A perfectly normal comment about Ethereum.", "joe@FakeMail.com") == pytest.approx(0.4)


def test_repeated_characters(classifier):
    assert classifier.score("Sooooo good article about staking", "reader@example.com") == pytest.approx(0.2)


def test_uppercase_ratio(classifier):
    assert classifier.score("THIS IS A VERY LOUD COMMENT ABOUT BITCOIN", "reader@example.com") == pytest.approx(0.4)


def test_viagra_links_and_exclamations_reach_spam(classifier):
    links = " ".join(f"https://spam{i}.example.com" for i in range(6))
    content = f"Cheap viagra here {links} " + "!" * 12
    score = classifier.score(content, "reader@example.com")
    assert score >= 0.85
    assert score > 0.7


@pytest.mark.parametrize(
    "content,email",
    [
        ("", ""),
        ("x", "bot@test.com"),
        ("CASINO VIAGRA LOTTERY FREE MONEY CLICK HERE!!!!!!!!!!!! " + "https://a.b " * 10, "spam@fake.io"),
        ("a" * 5000, None),
    ],
)
def test_score_always_in_unit_interval(classifier, content, email):
    assert 0.0 <= classifier.score(content, email) <= 1.0


@pytest.mark.parametrize(
    "email,valid",
    [("reader@example.com", True), ("no-at-sign", False), ("a@b", False), ("with space@x.com", False), ("", False)],
)
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid


def test_rate_limiter_allows_below_limit():
    limiter = RateLimiter(lambda ip, email, since: 4, limit=5)
    assert limiter.allowed("1.2.3.4", "a@b.com")


def test_rate_limiter_rejects_at_limit():
    limiter = RateLimiter(lambda ip, email, since: 5, limit=5)
    assert not limiter.allowed("1.2.3.4", "a@b.com")


def test_rate_limiter_window_start():
    seen = {}

    def counter(ip, email, since):
        seen["since"] = since
        return 0

    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    RateLimiter(counter, window=timedelta(minutes=60)).allowed("1.2.3.4", "a@b.com", now=now)
    assert seen["since"] == now - timedelta(minutes=60)


def test_rate_limiter_fails_open():
    def broken(ip, email, since):
        raise RuntimeError("database unreachable")

    assert RateLimiter(broken).allowed("1.2.3.4", "a@b.com")

import pytest

from cryptostart.content.link_suggestions import (
    find_linking_opportunities,
    flatten_suggestions,
    generate_linking_suggestions_for_all,
    relevance,
    title_similarity,
    tokenize,
)
from cryptostart.domain.post import BlogPost


def _post(slug, title, category="bitcoin", tags=None):
    return BlogPost(title=title, slug=slug, category=category, tags=tags or [])


def test_tokenize_drops_short_tokens_and_diacritics():
    assert tokenize("Segurança em Cripto: o Guia (2024)") == ["seguranca", "cripto", "guia", "2024"]
    assert tokenize(None) == []


def test_title_similarity_identical_and_disjoint():
    assert title_similarity("Bitcoin Halving Explained", "Bitcoin Halving Explained") == 1.0
    assert title_similarity("Bitcoin Mining", "Ethereum Staking") == 0.0
    assert title_similarity("A to Z", "A to Z") == 0.0


def test_relevance_is_symmetric():
    a = _post("a", "Bitcoin Wallet Guide", tags=["bitcoin", "wallets", "security"])
    b = _post("b", "Hardware Wallet Security", category="crypto-security", tags=["security"])
    assert relevance(a, b) == pytest.approx(relevance(b, a))


def test_same_category_alone_is_below_threshold():
    target = _post("t", "Lightning Network")
    source = _post("s", "Mining Pools")
    assert relevance(source, target) == pytest.approx(0.06)
    assert find_linking_opportunities([source], target) == []


def test_shared_tag_reason():
    target = _post("t", "Lightning Network", tags=["bitcoin"])
    source = _post("s", "Mining Pools", category="other", tags=["bitcoin"])
    [suggestion] = find_linking_opportunities([source], target)
    assert suggestion.relevance_score == pytest.approx(0.3)
    assert suggestion.reason == "Shares tags: bitcoin"
    assert suggestion.anchor_text == "Lightning Network"
    assert (suggestion.source_slug, suggestion.target_slug) == ("s", "t")


def test_same_category_and_similar_topic_reasons():
    target = _post("t", "Bitcoin Wallet Security")
    same_category = _post("s1", "Bitcoin Wallet Guide")
    other_category = _post("s2", "Bitcoin Wallet Guide", category="defi")
    by_slug = {s.source_slug: s for s in find_linking_opportunities([same_category, other_category], target)}
    assert by_slug["s1"].reason == "Same category: bitcoin"
    assert by_slug["s1"].relevance_score == pytest.approx(0.31)
    assert by_slug["s2"].reason == "Similar topic detected"
    assert by_slug["s2"].relevance_score == pytest.approx(0.25)


def test_top_five_sorted_and_self_excluded():
    target = _post("t", "Bitcoin Basics", tags=["bitcoin", "beginners"])
    candidates = [target] + [
        _post(f"s{i}", "Bitcoin Basics Part" if i % 2 else "Topic", category="other", tags=["bitcoin", "beginners"])
        for i in range(7)
    ]
    result = find_linking_opportunities(candidates, target)
    assert len(result) == 5
    assert all(s.source_slug != "t" for s in result)
    scores = [s.relevance_score for s in result]
    assert scores == sorted(scores, reverse=True)


def test_generate_for_all_and_flatten():
    posts = [
        _post("a", "Bitcoin Wallet Guide", tags=["wallets"]),
        _post("b", "Bitcoin Wallet Security", tags=["wallets"]),
        _post("c", "Yield Farming", category="defi"),
    ]
    by_slug = generate_linking_suggestions_for_all(posts)
    assert set(by_slug) == {"a", "b", "c"}
    assert [s.source_slug for s in by_slug["a"]] == ["b"]
    assert by_slug["c"] == []

    flat = flatten_suggestions(by_slug)
    assert len(flat) == 2
    assert flat[0].relevance_score >= flat[1].relevance_score
    assert set(flat[0].to_dict()) == {
        "sourceSlug", "sourceTitle", "targetSlug", "targetTitle", "anchorText", "relevanceScore", "reason"
    }

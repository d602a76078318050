import pytest

from cryptostart.content.text_metrics import (
    count_images,
    count_words,
    extract_headings,
    extract_links,
    reading_time,
    slugify,
)


def test_count_words_empty_and_none():
    assert count_words("") == 0
    assert count_words(None) == 0


def test_count_words_ignores_markdown_characters():
    assert count_words("Hello world") == 2
    assert count_words("# Title\n\n**bold** text > quoted") == 4


@pytest.mark.parametrize("words,minutes", [(0, 1), (1, 1), (200, 1), (201, 2), (450, 3), (1000, 5)])
def test_reading_time(words, minutes):
    assert reading_time(words) == minutes


def test_extract_headings_levels_and_duplicate_anchors():
    content = "# Intro\ntext\n## Setup\n### Setup\n## Setup"
    headings = extract_headings(content)
    assert [h.level for h in headings] == [1, 2, 3, 2]
    assert [h.anchor for h in headings] == ["intro", "setup", "setup-1", "setup-2"]
    assert headings[1].text == "Setup"


def test_extract_headings_strips_diacritics_in_anchor():
    assert extract_headings("## Segurança Básica")[0].anchor == "seguranca-basica"


def test_extract_headings_requires_space_after_hashes():
    assert extract_headings("#hashtag\nplain line") == []


def test_extract_links_classifies_internal_and_external():
    content = (
        "[a](/blog/x) [b](https://thecryptostart.com/y) [c](https://bitcoin.org) "
        "[d](mailto:someone@example.com) ![img](https://img.example.com/a.png)"
    )
    links = extract_links(content, "thecryptostart.com")
    assert links.internal == ["/blog/x", "https://thecryptostart.com/y"]
    assert links.external == ["https://bitcoin.org"]


def test_extract_links_empty():
    links = extract_links("")
    assert links.internal == [] and links.external == []


def test_count_images_markdown_and_html():
    assert count_images("![a](x.png) text <IMG src='y.png'> <img/>") == 3
    assert count_images(None) == 0


def test_slugify():
    assert slugify("Hello, World!  Again") == "hello-world-again"
    assert slugify("Bitcoin é ótimo -- sério") == "bitcoin-e-otimo-serio"
    assert slugify("") == ""

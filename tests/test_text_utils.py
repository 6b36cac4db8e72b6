"""Slug, excerpt and meta description helpers."""

import pytest

from craftboard.shared.utils.text import TextUtils


@pytest.mark.parametrize(
    "title, slug",
    [
        ("Hello World", "hello-world"),
        ("  Hello   World  ", "hello-world"),
        ("Zombies & Skeletons!", "zombies-skeletons"),
        ("snake_case_title", "snake-case-title"),
        ("--dashes--", "dashes"),
        ("!!!", "untitled"),
        ("", "untitled"),
    ],
)
def test_slugify(title, slug):
    assert TextUtils.slugify(title) == slug


def test_slug_with_counter():
    assert TextUtils.slug_with_counter("hello-world", 2) == "hello-world-2"


def test_strip_html():
    assert TextUtils.strip_html("<p>Fish &amp; chips</p><br/>tonight") == "Fish & chips tonight"


def test_has_text():
    assert TextUtils.has_text("<p>hi</p>") is True
    assert TextUtils.has_text("<p> </p><br>") is False


def test_truncate_keeps_short_text():
    assert TextUtils.truncate("short", 10) == "short"


def test_truncate_cuts_at_word_boundary():
    text = "word " * 50

    result = TextUtils.truncate(text, 160)

    assert len(result) <= 160
    assert result.endswith("...")
    assert not result[:-3].endswith(" ")


def test_truncate_cuts_mid_word_without_late_space():
    assert TextUtils.truncate("a" * 50, 10) == "aaaaaaa..."


def test_meta_description_prefers_excerpt():
    assert TextUtils.generate_meta_description("<p>Body</p>", "Excerpt") == "Excerpt"
    assert TextUtils.generate_meta_description("<p>Body</p>") == "Body"
    assert TextUtils.generate_meta_description("") == ""


def test_meta_description_length():
    assert len(TextUtils.generate_meta_description("x " * 500)) <= 160


def test_generate_excerpt_length():
    assert len(TextUtils.generate_excerpt("<p>" + "lorem ipsum " * 100 + "</p>")) <= 300

import re

import pytest

from blog_api.utils.slugify import (
    MAX_SLUG_LENGTH,
    category_slug,
    generate_unique_slug,
    slugify,
    tag_slug,
)

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


@pytest.mark.parametrize(
    "title",
    [
        "Hello World",
        "  Leading and trailing  ",
        "Python 3.12 -- What's New?!",
        "---dashes---everywhere---",
        "Ünïcödé Çhäracters ünd more",
        "tabs\tand\nnewlines",
        "a" * 250,
        ("word " * 60).strip(),
        "Mixed_CASE_with_underscores",
    ],
)
def test_slugify_output_is_url_safe(title):
    slug = slugify(title)
    assert len(slug) <= MAX_SLUG_LENGTH
    assert SLUG_RE.match(slug)


def test_slugify_examples():
    assert slugify("Hello World") == "hello-world"
    assert slugify("  Hello,   World!  ") == "hello-world"
    assert slugify("C++ & Rust: a comparison") == "c-rust-a-comparison"


def test_slugify_never_ends_with_hyphen_after_truncation():
    title = "x" * 99 + " tail"
    slug = slugify(title)
    assert slug == "x" * 99
    assert not slug.endswith("-")


def test_slugify_of_symbols_only_is_empty():
    assert slugify("!!! ???") == ""


def test_category_slug_keeps_other_characters():
    assert category_slug("Tech  News") == "tech-news"
    assert category_slug("C# Tips") == "c#-tips"


def test_tag_slug():
    assert tag_slug("Machine Learning!") == "machine-learning"
    assert tag_slug("a -- b") == "a-b"


def test_unique_slug_returns_base_when_free():
    assert generate_unique_slug("Hello World", lambda s: False) == "hello-world"


def test_unique_slug_appends_counter():
    taken = {"hello-world", "hello-world-1"}
    assert generate_unique_slug("Hello World", lambda s: s in taken) == "hello-world-2"


def test_unique_slug_falls_back_to_timestamp_after_max_attempts():
    calls = []

    def always_taken(slug):
        calls.append(slug)
        return True

    slug = generate_unique_slug("Hello World", always_taken)

    assert len(calls) == 100
    assert calls[0] == "hello-world"
    assert calls[-1] == "hello-world-99"
    assert re.match(r"^hello-world-\d{13}$", slug)


def test_unique_slug_falls_back_to_timestamp_on_lookup_error():
    def broken(slug):
        raise ConnectionError("database unavailable")

    assert re.match(r"^hello-world-\d{13}$", generate_unique_slug("Hello World", broken))


def test_unique_slug_for_unsluggable_title():
    assert generate_unique_slug("???", lambda s: False) == "post"

"""Unit tests for slug generation and filename identity parsing."""

from __future__ import annotations

import re

import pytest

from mdsite.slugs import (
    generate_slug,
    get_order_and_slug_from_filename,
    get_slug_from_filename,
)

SLUG_SHAPE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@pytest.mark.parametrize(
    "text",
    ["Hello World", "  --Leading and trailing--  ", "C# & .NET 8", "a__b..c", "Already-a-slug"],
)
def test_generate_slug_shape_and_idempotence(text: str) -> None:
    """Slugs use only lowercase alphanumerics and single inner hyphens."""
    slug = generate_slug(text)
    assert SLUG_SHAPE.match(slug), f"unexpected slug shape {slug!r} for {text!r}"
    assert generate_slug(slug) == slug, "slugging a slug must not change it"


def test_generate_slug_folds_accents() -> None:
    assert generate_slug("Crème Brûlée") == "creme-brulee"


def test_generate_slug_without_alphanumerics_is_empty() -> None:
    assert generate_slug("!!! ???") == ""


def test_order_and_slug_from_prefixed_filename() -> None:
    assert get_order_and_slug_from_filename("02-guide.md") == (2, "guide")


def test_order_defaults_to_zero_without_prefix() -> None:
    assert get_order_and_slug_from_filename("guide.md") == (0, "guide")


def test_folder_content_uses_folder_name() -> None:
    assert get_order_and_slug_from_filename("03-deep-dive/index.md") == (3, "deep-dive")
    assert get_slug_from_filename("01-biography/index.mdx") == "biography"


def test_blog_slug_strips_date_prefix() -> None:
    assert get_slug_from_filename("2024-01-15-my-post.md") == "my-post"


def test_dated_name_is_not_an_order() -> None:
    """A date prefix must not be read as order 2024."""
    assert get_order_and_slug_from_filename("2024-01-15-my-post.md") == (0, "my-post")

"""Unit tests for heading scanning and table-of-contents building."""

from __future__ import annotations

from mdsite.markdown_parser import (
    AnchorRegistry,
    Heading,
    assign_anchor_ids,
    build_toc_hierarchy,
    extract_toc,
    scan_headings,
)


def _shape(items: list) -> list[tuple[str, list]]:
    return [(item.text, _shape(item.children)) for item in items]


def test_flat_headings_fold_into_tree() -> None:
    """Level 2 headings nest under the preceding level 1 heading."""
    headings = [Heading(1, "A"), Heading(2, "B"), Heading(2, "C"), Heading(1, "D")]
    toc = build_toc_hierarchy(assign_anchor_ids(headings))
    assert _shape(toc) == [("A", [("B", []), ("C", [])]), ("D", [])]


def test_duplicate_heading_text_gets_suffixes() -> None:
    toc = extract_toc("## Intro\n\n## Intro\n")
    assert [item.id for item in toc] == ["intro", "intro-1"]


def test_registry_avoids_collisions_with_literal_suffixes() -> None:
    """A heading literally named 'intro-1' must not collide with a generated suffix."""
    registry = AnchorRegistry()
    ids = [registry.anchor_for(text) for text in ("Intro", "Intro 1", "Intro")]
    assert ids == ["intro", "intro-1", "intro-2"]


def test_headings_in_code_fences_are_ignored() -> None:
    text = "# Real\n```\n# not a heading\n```\n## Also real\n"
    assert [heading.text for heading in scan_headings(text)] == ["Real", "Also real"]


def test_max_depth_drops_deeper_headings() -> None:
    """With max depth 2 an H3 is absent from the tree, not flattened."""
    toc = extract_toc("# A\n## B\n### C\n", max_depth=2)
    assert _shape(toc) == [("A", [("B", [])])]


def test_hash_without_space_is_not_a_heading() -> None:
    assert scan_headings("#hashtag\n# Heading #\n") == [Heading(1, "Heading")]

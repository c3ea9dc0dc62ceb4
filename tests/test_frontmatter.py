"""Unit tests for frontmatter extraction and serialisation."""

from __future__ import annotations

import datetime as dt

from mdsite.frontmatter import FrontmatterData, dump_frontmatter, extract_frontmatter
from mdsite.generators.metadata import metadata_from_header
from mdsite.parser import read_header


def test_extract_frontmatter_reads_known_keys() -> None:
    """Known camelCase keys map onto FrontmatterData fields."""
    raw = (
        "---\n"
        "title: Hello\n"
        "publishDate: 2024-03-01\n"
        "tags: [python, yaml]\n"
        "showInMenu: false\n"
        "menuTitle: Hi\n"
        "tocDepth: 2\n"
        "---\n"
        "\n"
        "# Body\n"
    )
    result = extract_frontmatter(raw)
    assert result.status == "ok"
    assert result.data.title == "Hello"
    assert result.data.publish_date == dt.datetime(2024, 3, 1, tzinfo=dt.UTC)
    assert result.data.tags == ["python", "yaml"]
    assert result.data.show_in_menu is False
    assert result.data.menu_title == "Hi"
    assert result.data.toc_depth == 2
    assert result.body == "# Body\n"


def test_missing_frontmatter_keeps_whole_body() -> None:
    result = extract_frontmatter("# Just markdown\n")
    assert result.status == "missing"
    assert result.data == FrontmatterData()
    assert result.body == "# Just markdown\n"


def test_malformed_frontmatter_is_flagged() -> None:
    """Broken YAML is reported as malformed instead of raising."""
    result = extract_frontmatter("---\ntitle: [unclosed\n---\nBody\n")
    assert result.is_malformed
    assert result.error
    assert result.body == "Body\n"


def test_impossible_publish_date_is_malformed() -> None:
    """A timestamp-shaped value with an invalid month is flagged, not raised."""
    result = extract_frontmatter("---\ntitle: A\npublishDate: 2024-13-45\n---\nBody\n")
    assert result.is_malformed
    assert result.error
    assert result.body == "Body\n"


def test_non_mapping_frontmatter_is_malformed() -> None:
    assert extract_frontmatter("---\n- a\n- b\n---\nBody\n").is_malformed


def test_comma_separated_tags_are_split() -> None:
    result = extract_frontmatter("---\ntags: a, b, a\n---\n")
    assert result.data.tags == ["a", "b"]


def test_frontmatter_round_trips_into_metadata_record() -> None:
    """Title, tags and publish date survive dump, extract and metadata projection."""
    published = dt.datetime(2024, 1, 10, 9, 30, tzinfo=dt.UTC)
    data = FrontmatterData(
        title="Release notes",
        description="What changed",
        tags=["release", "notes"],
        publish_date=published,
    )
    raw = dump_frontmatter(data, "Some body text.\n")

    header = read_header("blog", "2024-01-10-release-notes.md", raw)
    record = metadata_from_header(header)

    assert record.title == "Release notes"
    assert record.description == "What changed"
    assert record.tags == ["release", "notes"]
    assert record.publish_date == published
    payload = record.to_dict()
    assert payload["publishDate"] == published.isoformat()
    assert payload["tags"] == ["release", "notes"]

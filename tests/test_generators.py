"""Tests for the build-time index, sitemap, search and feed generators."""

from __future__ import annotations

import datetime as dt
import json
import threading
import typing as typ
import xml.etree.ElementTree as ET

import pytest

from mdsite.generators import (
    ContentIndexWriter,
    ContentMetadataGenerator,
    NavigationIndexGenerator,
    RssFeedGenerator,
    SearchIndexGenerator,
    SitemapGenerator,
    route_for,
)
from mdsite.models import ContentIndex, ContentMetadataIndex, NavigationIndex
from mdsite.scanner import ContentScanner, GenerationCancelled

from .conftest import frontmatter_file

if typ.TYPE_CHECKING:
    from pathlib import Path

SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


@pytest.fixture
def populated(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> ContentIndex:
    """Write a small site covering every category and return its index."""
    (site_root / "site.config.json").write_text(
        json.dumps({"contentSections": [{"folder": "tutorials", "route": "learn"}]}),
        encoding="utf-8",
    )
    write_content(
        "blog/2024-01-01-a.md",
        frontmatter_file("Older post.", title="A", publishDate="2024-01-01", tags="[x]"),
    )
    write_content(
        "blog/2024-01-10-b.md",
        frontmatter_file("Newer post.", title="B", publishDate="2024-01-10", author="Sam"),
    )
    write_content("blog/2024-02-01-broken.md", "---\ntitle: [oops\n---\nBody\n")
    write_content(
        "projects/02-beta/index.md",
        frontmatter_file(title="Beta", menuTitle="β", showInHeader="true"),
    )
    write_content("projects/01-alpha.md", frontmatter_file(title="Alpha", url="https://a.example"))
    write_content("docs/01-intro.md", frontmatter_file(title="Intro"))
    write_content("docs/02-setup.md", frontmatter_file(title="Setup", parent="intro"))
    write_content("articles/01-hidden.md", frontmatter_file(title="Hidden", showInMenu="false"))
    write_content("features/01-fast.md", frontmatter_file(title="Fast", icon="bolt"))
    write_content("tutorials/01-basics.md", frontmatter_file(title="Basics"))
    return ContentScanner(site_root / "content").scan()


def test_content_index_is_written_inside_content_dir(
    site_root: Path, populated: ContentIndex
) -> None:
    path = ContentIndexWriter(site_root / "content").write(populated)
    assert path == site_root / "content" / "index.json"
    written = ContentIndex.from_dict(json.loads(path.read_text(encoding="utf-8")))
    assert written == populated
    assert not list((site_root / "content").glob(".index.json.*")), "temp file left behind"


def test_navigation_index_orders_items_and_keeps_flags(
    site_root: Path, populated: ContentIndex
) -> None:
    """Menus are ordered by filename prefix and skip malformed files."""
    path = NavigationIndexGenerator(site_root / "content", site_root).generate(populated)
    index = NavigationIndex.from_dict(json.loads(path.read_text(encoding="utf-8")))

    assert [item.slug for item in index.projects] == ["alpha", "beta"]
    assert index.projects[1].display_title == "β"
    assert index.projects[1].show_in_header is True
    assert [item.slug for item in index.docs] == ["intro", "setup"]
    assert index.articles[0].show_in_menu is False
    assert [item.slug for item in index.sections["tutorials"]] == ["basics"]


def test_metadata_index_sorts_blog_newest_first(
    site_root: Path, populated: ContentIndex
) -> None:
    path = ContentMetadataGenerator(site_root / "content", site_root).generate(populated)
    payload = json.loads(path.read_text(encoding="utf-8"))
    index = ContentMetadataIndex.from_dict(payload)

    assert [post.slug for post in index.blog] == ["b", "a"], "broken post must be skipped"
    assert index.blog[0].author == "Sam"
    assert index.blog[1].tags == ["x"]
    assert index.docs[1].parent_slug == "intro"
    assert index.features[0].icon == "bolt"
    assert index.projects[0].url == "https://a.example"
    assert payload["blog"][0]["publishDate"].startswith("2024-01-10")


def test_search_index_uses_routes_and_plain_text(
    site_root: Path, populated: ContentIndex
) -> None:
    generator = SearchIndexGenerator(
        site_root / "content", site_root, routes={"tutorials": "learn"}
    )
    entries = json.loads(generator.generate(populated).read_text(encoding="utf-8"))
    by_url = {entry["url"]: entry for entry in entries}

    assert "/blog/b" in by_url
    assert by_url["/project/alpha"]["type"] == "project"
    assert by_url["/learn/basics"]["title"] == "Basics"
    assert by_url["/blog/b"]["content"] == "Newer post."
    assert not any(entry["type"] == "features" for entry in entries)


def test_search_entries_truncate_long_bodies(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    write_content("articles/01-long.md", frontmatter_file("word " * 200, title="Long"))
    index = ContentScanner(site_root / "content").scan()
    [entry] = SearchIndexGenerator(site_root / "content", site_root).build(index)
    assert len(entry.content) == 503
    assert entry.content.endswith("...")


def test_route_for_defaults() -> None:
    assert route_for("articles") == "article"
    assert route_for("docs") == "docs"
    assert route_for("guides") == "guides"


def test_sitemap_lists_pages_and_robots_points_at_it(
    site_root: Path, populated: ContentIndex
) -> None:
    sitemap_path, robots_path = SitemapGenerator(
        site_root / "content",
        site_root,
        "https://example.org/",
        routes={"tutorials": "learn"},
    ).generate(populated)

    root = ET.fromstring(sitemap_path.read_text(encoding="utf-8"))
    locs = [node.text for node in root.findall("sm:url/sm:loc", SITEMAP_NS)]
    assert locs[0] == "https://example.org/"
    assert "https://example.org/blog" in locs
    assert "https://example.org/docs/setup" in locs
    assert "https://example.org/learn/basics" in locs
    assert "Sitemap: https://example.org/sitemap.xml" in robots_path.read_text(encoding="utf-8")


def test_rss_feed_lists_newest_posts_first(site_root: Path, populated: ContentIndex) -> None:
    path = RssFeedGenerator(
        site_root / "content", site_root, "https://example.org", "Example"
    ).generate(populated, now=dt.datetime(2024, 3, 1, tzinfo=dt.UTC))

    channel = ET.fromstring(path.read_text(encoding="utf-8")).find("channel")
    assert channel is not None
    assert channel.findtext("title") == "Example"
    assert channel.findtext("lastBuildDate") == "Fri, 01 Mar 2024 00:00:00 GMT"
    items = channel.findall("item")
    assert [item.findtext("link") for item in items] == [
        "https://example.org/blog/b",
        "https://example.org/blog/a",
    ]
    assert items[0].findtext("pubDate") == "Wed, 10 Jan 2024 00:00:00 GMT"


def test_impossible_dates_skip_only_their_file(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    """A post with an invalid publish date is dropped while its category still builds."""
    write_content("blog/2024-01-10-good.md", frontmatter_file(title="Good", publishDate="2024-01-10"))
    write_content("blog/2024-01-11-bad.md", frontmatter_file(title="Bad", publishDate="2024-13-45"))
    index = ContentScanner(site_root / "content").scan()

    path = ContentMetadataGenerator(site_root / "content", site_root).generate(index)
    metadata = ContentMetadataIndex.from_dict(json.loads(path.read_text(encoding="utf-8")))
    assert [post.slug for post in metadata.blog] == ["good"]

    feed = RssFeedGenerator(
        site_root / "content", site_root, "https://example.org", "Example"
    ).generate(index, now=dt.datetime(2024, 3, 1, tzinfo=dt.UTC))
    channel = ET.fromstring(feed.read_text(encoding="utf-8")).find("channel")
    assert channel is not None
    assert [item.findtext("link") for item in channel.findall("item")] == [
        "https://example.org/blog/good"
    ]


def test_generators_stop_when_cancelled(site_root: Path, populated: ContentIndex) -> None:
    cancel = threading.Event()
    cancel.set()
    generator = NavigationIndexGenerator(site_root / "content", site_root)
    with pytest.raises(GenerationCancelled):
        generator.generate(populated, cancel)
    assert not (site_root / "navigation-index.json").exists()

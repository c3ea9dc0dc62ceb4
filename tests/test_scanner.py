"""Tests for content scanning and site configuration loading."""

from __future__ import annotations

import json
import threading
import typing as typ

import pytest

from mdsite.config import SiteConfigError, load_site_config
from mdsite.scanner import ContentScanner, GenerationCancelled

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_site_config(site_root: Path, payload: object) -> Path:
    path = site_root / "site.config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_folder_and_file_entries_sort_ascending(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    """A folder with index.md and a flat file scan in ascending order."""
    write_content("docs/02-b.md", "# B\n")
    write_content("docs/01-a/index.md", "# A\n")
    write_content("docs/01-a/diagram.png", "not markdown")

    index = ContentScanner(site_root / "content").scan()

    assert index.docs == ("01-a/index.md", "02-b.md")


def test_compressed_sidecars_and_index_less_folders_are_skipped(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    write_content("articles/01-a.md", "A\n")
    write_content("articles/01-a.md.gz", "compressed")
    write_content("articles/02-assets/logo.svg", "<svg/>")
    write_content("articles/03-b.mdx", "B\n")

    index = ContentScanner(site_root / "content").scan()

    assert index.articles == ("01-a.md", "03-b.mdx")


def test_blog_sorts_descending(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    write_content("blog/2024-01-01-a.md", "A\n")
    write_content("blog/2024-01-10-b.md", "B\n")

    index = ContentScanner(site_root / "content").scan()

    assert index.blog == ("2024-01-10-b.md", "2024-01-01-a.md")


def test_missing_categories_are_empty(site_root: Path) -> None:
    index = ContentScanner(site_root / "content").scan()
    assert index.total_files() == 0
    assert index.to_dict()["sections"] == {}


def test_configured_sections_are_scanned(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    """Sections come from site.config.json; fixed-name and missing folders are skipped."""
    _write_site_config(
        site_root,
        {
            "siteName": "Example",
            "contentSections": [
                {"folder": "tutorials", "route": "learn"},
                {"folder": "Docs"},
                {"folder": "missing"},
            ],
        },
    )
    write_content("tutorials/02-next.md", "Next\n")
    write_content("tutorials/01-first.md", "First\n")

    index = ContentScanner(site_root / "content").scan()

    assert dict(index.sections) == {"tutorials": ("01-first.md", "02-next.md")}
    assert index.files_for("tutorials") == ("01-first.md", "02-next.md")


def test_invalid_site_config_means_no_sections(
    site_root: Path, write_content: typ.Callable[[str, str], Path]
) -> None:
    (site_root / "site.config.json").write_text("{not json", encoding="utf-8")
    write_content("tutorials/01-first.md", "First\n")

    index = ContentScanner(site_root / "content").scan()

    assert dict(index.sections) == {}


def test_cancelled_scan_raises(site_root: Path) -> None:
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(GenerationCancelled):
        ContentScanner(site_root / "content").scan(cancel)


def test_load_site_config_reads_sections(site_root: Path) -> None:
    path = _write_site_config(
        site_root,
        {"baseUrl": "https://example.org", "contentSections": [{"folder": "guides"}]},
    )
    config = load_site_config(path)
    assert config.base_url == "https://example.org"
    assert config.content_sections[0].route == "guides", "route defaults to the folder"
    assert config.content_sections[0].display_title == "Guides"


def test_load_site_config_errors(site_root: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_site_config(site_root / "absent.json")
    bad = _write_site_config(site_root, {"contentSections": {"folder": "x"}})
    with pytest.raises(SiteConfigError, match="must be a list"):
        load_site_config(bad)

"""Tests for the generation pipeline and the CLI wrapped around it."""

from __future__ import annotations

import json
import typing as typ

import msgspec.json as msgspec_json
import pytest

from mdsite import cli
from mdsite.config import GeneratorConfig, SiteConfigError
from mdsite.generators import SitemapGenerator
from mdsite.pipeline import ContentGenerator

from .conftest import frontmatter_file

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def small_site(site_root: Path, write_content: typ.Callable[[str, str], Path]) -> Path:
    write_content("blog/2024-01-01-a.md", frontmatter_file(title="A", publishDate="2024-01-01"))
    write_content("docs/01-intro.md", frontmatter_file(title="Intro"))
    (site_root / "site.config.json").write_text(
        json.dumps({"siteName": "Example", "baseUrl": "https://example.org"}),
        encoding="utf-8",
    )
    return site_root


def test_run_writes_every_enabled_artifact(small_site: Path) -> None:
    config = GeneratorConfig(content_path=small_site / "content", output_path=small_site)

    report = ContentGenerator(config).run()

    assert report.succeeded
    written = {path.relative_to(small_site).as_posix() for path in report.outputs}
    assert written == {
        "content/index.json",
        "navigation-index.json",
        "content-metadata.json",
        "sitemap.xml",
        "robots.txt",
        "search-index.json",
        "feed.xml",
    }
    assert report.content_index is not None
    assert report.content_index.docs == ("01-intro.md",)
    assert "https://example.org/blog/a" in (small_site / "sitemap.xml").read_text(encoding="utf-8")


def test_disabled_steps_are_skipped(small_site: Path) -> None:
    config = GeneratorConfig(
        content_path=small_site / "content",
        output_path=small_site,
        generate_sitemap=False,
        generate_rss_feed=False,
    )

    report = ContentGenerator(config).run()

    assert report.step("sitemap").status == "skipped"
    assert report.step("rss-feed").status == "skipped"
    assert not (small_site / "feed.xml").exists()


def test_failing_step_does_not_stop_later_steps(
    small_site: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _explode(*_args: object, **_kwargs: object) -> list[Path]:
        msg = "template missing"
        raise OSError(msg)

    monkeypatch.setattr(SitemapGenerator, "generate", _explode)
    config = GeneratorConfig(content_path=small_site / "content", output_path=small_site)

    report = ContentGenerator(config).run()

    assert not report.succeeded
    assert [step.name for step in report.failed_steps] == ["sitemap"]
    assert report.step("search-index").status == "ok"
    assert (small_site / "feed.xml").exists()


def test_external_steps_are_reported_unsupported(small_site: Path) -> None:
    config = GeneratorConfig(
        content_path=small_site / "content",
        output_path=small_site,
        hosting_provider="netlify",
        generate_og_images=True,
    )

    report = ContentGenerator(config).run()

    assert report.step("hosting-config:netlify").status == "unsupported"
    assert report.step("og-images").status == "unsupported"
    assert report.step("static-pages") is None
    assert report.succeeded


def test_unknown_hosting_provider_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(SiteConfigError, match="hosting provider"):
        GeneratorConfig(
            content_path=tmp_path,
            output_path=tmp_path,
            hosting_provider="heroku",  # type: ignore[arg-type]
        )


def test_cli_generate_prints_written_paths(
    small_site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.generate(content_path=small_site / "content", rss_feed=False)

    out = capsys.readouterr().out
    assert "wrote" in out
    assert "feed.xml" not in out
    assert (small_site / "navigation-index.json").exists()


def test_cli_generate_exits_non_zero_on_failure(
    small_site: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _explode(*_args: object, **_kwargs: object) -> list[Path]:
        msg = "boom"
        raise RuntimeError(msg)

    monkeypatch.setattr(SitemapGenerator, "generate", _explode)
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(content_path=small_site / "content")
    assert excinfo.value.code == 1


def test_cli_scan_prints_index(small_site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.scan(content_path=small_site / "content")
    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["blog"] == ["2024-01-01-a.md"]
    assert payload["sections"] == {}

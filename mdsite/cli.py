"""Cyclopts CLI entrypoint for indexing a content tree and generating site artifacts.

The ``mdsite`` console script scans a markdown content directory, writes the
content index, navigation and metadata indices, sitemap, search index and
RSS feed, and reports every file it wrote. Options can also be supplied
through ``MDSITE_*`` environment variables, which suits CI runs.

Examples
--------
Generate every artifact for ``site/content``:

>>> from mdsite.cli import app
>>> app(["generate", "--content-path", "site/content", "--output-path", "site"])  # doctest: +SKIP

Print the content index without writing anything:

>>> app(["scan", "--content-path", "site/content"])  # doctest: +SKIP
"""

from __future__ import annotations

import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import GeneratorConfig, HostingProvider
from .pipeline import ContentGenerator
from .scanner import ContentScanner

DEFAULT_CONTENT_PATH = Path("content")

app = App(name="mdsite", config=cyclopts.config.Env("MDSITE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@app.command(help="Generate the content index and derived site artifacts.")
def generate(  # noqa: PLR0913
    *,
    content_path: typ.Annotated[
        Path, Parameter(help="Directory holding the content category folders")
    ] = DEFAULT_CONTENT_PATH,
    output_path: typ.Annotated[
        Path | None,
        Parameter(help="Site root for generated files (defaults to the content parent)"),
    ] = None,
    site_config: typ.Annotated[
        Path | None, Parameter(help="Path to site.config.json")
    ] = None,
    site_url: typ.Annotated[str, Parameter(help="Absolute base URL of the site")] = "",
    site_name: typ.Annotated[str, Parameter(help="Display name used by the feed")] = "",
    hosting_provider: typ.Annotated[
        HostingProvider, Parameter(help="Hosting target for configuration files")
    ] = "none",
    navigation: typ.Annotated[bool, Parameter(help="Write navigation-index.json")] = True,
    metadata: typ.Annotated[bool, Parameter(help="Write content-metadata.json")] = True,
    sitemap: typ.Annotated[bool, Parameter(help="Write sitemap.xml and robots.txt")] = True,
    search_index: typ.Annotated[bool, Parameter(help="Write search-index.json")] = True,
    rss_feed: typ.Annotated[bool, Parameter(help="Write feed.xml")] = True,
    static_pages: typ.Annotated[bool, Parameter(help="Request static HTML pages")] = False,
    og_images: typ.Annotated[bool, Parameter(help="Request Open Graph images")] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log debug diagnostics")] = False,
) -> None:
    """Run the generation pipeline for one content tree.

    Parameters
    ----------
    content_path : Path, optional
        Directory holding ``blog/``, ``docs/`` and the other category
        folders. Defaults to ``content``.
    output_path : Path or None, optional
        Site root receiving the navigation, metadata, search, sitemap and
        feed files. Defaults to the parent of ``content_path``.
    site_config : Path or None, optional
        Site configuration declaring dynamic sections; defaults to
        ``site.config.json`` next to the content directory.
    site_url, site_name : str, optional
        Override the values from the site configuration.
    hosting_provider : HostingProvider, optional
        Hosting target; configuration for it is produced outside mdsite.

    Returns
    -------
    None
        Prints one ``wrote <path>`` line per artifact. Exits with status 1
        when any step failed or the run was cancelled.
    """
    _configure_logging(verbose=verbose)
    config = GeneratorConfig(
        content_path=content_path,
        output_path=output_path if output_path is not None else content_path.parent,
        site_config_path=site_config,
        site_url=site_url,
        site_name=site_name,
        hosting_provider=hosting_provider,
        generate_navigation=navigation,
        generate_metadata=metadata,
        generate_sitemap=sitemap,
        generate_search_index=search_index,
        generate_rss_feed=rss_feed,
        generate_static_pages=static_pages,
        generate_og_images=og_images,
    )
    report = ContentGenerator(config).run()
    for path in report.outputs:
        print(f"wrote {_format_path(path)}")
    for step in report.failed_steps:
        print(f"failed {step.name}: {step.error}", file=sys.stderr)
    if not report.succeeded:
        sys.exit(1)


@app.command(help="Print the content index for a content tree as JSON.")
def scan(
    *,
    content_path: typ.Annotated[
        Path, Parameter(help="Directory holding the content category folders")
    ] = DEFAULT_CONTENT_PATH,
    site_config: typ.Annotated[
        Path | None, Parameter(help="Path to site.config.json")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug diagnostics")] = False,
) -> None:
    """Scan ``content_path`` and print the index without writing it."""
    _configure_logging(verbose=verbose)
    index = ContentScanner(content_path, site_config).scan()
    print(json.dumps(index.to_dict(), indent=2, ensure_ascii=False))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``mdsite`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

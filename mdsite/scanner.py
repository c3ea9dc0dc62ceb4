"""Scan a content directory into an ordered :class:`~mdsite.models.ContentIndex`.

Each fixed category folder (``blog``, ``projects``, ``features``,
``articles``, ``docs``) and each dynamic section configured in
``site.config.json`` is listed one level deep:

- ``*.md`` / ``*.mdx`` files are listed by filename;
- sub-folders holding ``index.md`` (or ``index.mdx``) are listed as
  ``<folder>/index.md``;
- everything else (other extensions, folders without an index) is skipped.

Blog entries sort descending by name so date-prefixed posts come newest
first; every other category sorts ascending so numeric prefixes order
naturally.

Example
-------
>>> from pathlib import Path
>>> from mdsite.scanner import ContentScanner
>>> index = ContentScanner(Path("site/content")).scan()  # doctest: +SKIP
>>> index.files_for("docs")  # doctest: +SKIP
('01-intro.md', '02-setup/index.md')
"""

from __future__ import annotations

import logging
import threading  # noqa: TC003 - used for runtime type metadata
from pathlib import Path

from ._constants import (
    BLOG,
    CONTENT_EXTENSIONS,
    FIXED_CATEGORIES,
    INDEX_FILENAMES,
    SITE_CONFIG_FILENAME,
)
from .config import SiteConfig, SiteConfigError, is_fixed_category, load_site_config
from .models import ContentIndex

logger = logging.getLogger(__name__)


class GenerationCancelled(RuntimeError):  # noqa: N818
    """Raised when a generation run is cancelled between files."""


def check_cancelled(cancel: threading.Event | None, step: str) -> None:
    """Raise :class:`GenerationCancelled` when ``cancel`` is set."""
    if cancel is not None and cancel.is_set():
        msg = f"{step} cancelled"
        raise GenerationCancelled(msg)


class ContentScanner:
    """List the content files of every category under ``content_path``."""

    def __init__(
        self,
        content_path: Path,
        site_config_path: Path | None = None,
        *,
        site_config: SiteConfig | None = None,
    ) -> None:
        """Create a scanner.

        Parameters
        ----------
        content_path : Path
            Directory holding the category folders.
        site_config_path : Path, optional
            Site configuration describing dynamic sections. Defaults to
            ``site.config.json`` next to ``content_path``.
        site_config : SiteConfig, optional
            Already loaded configuration; takes precedence over the path.
        """
        self.content_path = Path(content_path)
        self.site_config_path = (
            Path(site_config_path)
            if site_config_path is not None
            else self.content_path.parent / SITE_CONFIG_FILENAME
        )
        self._site_config = site_config

    def scan(self, cancel: threading.Event | None = None) -> ContentIndex:
        """Return the content index for the current state of the directory.

        Raises
        ------
        GenerationCancelled
            If ``cancel`` is set before the scan finishes.
        """
        fixed: dict[str, tuple[str, ...]] = {}
        for category in FIXED_CATEGORIES:
            check_cancelled(cancel, "content scan")
            fixed[category] = tuple(
                self.scan_folder(self.content_path / category, descending=category == BLOG)
            )

        sections: dict[str, tuple[str, ...]] = {}
        for folder in self._section_folders():
            check_cancelled(cancel, "content scan")
            if is_fixed_category(folder):
                logger.debug("Section '%s' shadows a fixed category; skipped", folder)
                continue
            if folder in sections:
                continue
            section_path = self.content_path / folder
            if section_path.is_dir():
                sections[folder] = tuple(self.scan_folder(section_path, descending=False))
            else:
                logger.debug("Section folder %s does not exist; skipped", section_path)

        index = ContentIndex(**fixed, sections=sections)
        logger.info(
            "Scanned %d content files (%d sections)", index.total_files(), len(sections)
        )
        return index

    @staticmethod
    def scan_folder(path: Path, *, descending: bool) -> list[str]:
        """Return the content entries directly under ``path`` in scan order."""
        if not path.is_dir():
            return []
        entries = sorted(path.iterdir(), key=lambda entry: entry.name, reverse=descending)
        results: list[str] = []
        for entry in entries:
            if entry.is_dir():
                index_name = _find_index_file(entry)
                if index_name is not None:
                    results.append(f"{entry.name}/{index_name}")
            elif entry.name.lower().endswith(CONTENT_EXTENSIONS):
                results.append(entry.name)
        return results

    def _section_folders(self) -> list[str]:
        config = self._site_config
        if config is None:
            config = self._load_site_config()
        return config.section_folders() if config is not None else []

    def _load_site_config(self) -> SiteConfig | None:
        try:
            return load_site_config(self.site_config_path)
        except FileNotFoundError:
            logger.debug("No site configuration at %s", self.site_config_path)
        except SiteConfigError as exc:
            logger.warning("Ignoring site configuration %s: %s", self.site_config_path, exc)
        return None


def _find_index_file(folder: Path) -> str | None:
    for name in INDEX_FILENAMES:
        if (folder / name).is_file():
            return name
    return None


__all__ = ["ContentScanner", "GenerationCancelled", "check_cancelled"]

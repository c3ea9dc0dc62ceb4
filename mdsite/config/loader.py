"""Load ``site.config.json`` (or YAML) into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdsite._constants import FIXED_CATEGORIES

from .models import ContentSectionConfig, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the site configuration describing dynamic content sections.

    JSON is valid YAML 1.2, so one safe ruamel loader reads both
    ``site.config.json`` and ``site.config.yaml``.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file.

    Returns
    -------
    SiteConfig
        Parsed configuration. Sections whose folder collides with a fixed
        category are kept here; the scanner decides to skip them.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the file cannot be parsed or its structure is invalid.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdsite.config import load_site_config
    >>> config = load_site_config(Path("site.config.json"))  # doctest: +SKIP
    >>> config.section_folders()  # doctest: +SKIP
    ['tutorials']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' could not be parsed: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level configuration structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    return SiteConfig(
        site_name=_optional_text(raw.get("siteName")),
        base_url=_optional_text(raw.get("baseUrl")),
        description=_optional_text(raw.get("description")),
        content_sections=_build_sections(raw.get("contentSections")),
    )


def is_fixed_category(folder: str) -> bool:
    """Return ``True`` when ``folder`` names a fixed category (case-insensitive)."""
    return folder.lower() in FIXED_CATEGORIES


def _optional_text(value: object) -> str:
    return "" if value is None else str(value).strip()


def _build_sections(payload: object) -> list[ContentSectionConfig]:
    match payload:
        case None:
            return []
        case list():
            pass
        case _:
            msg = "'contentSections' must be a list."
            raise SiteConfigError(msg)

    sections: list[ContentSectionConfig] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            msg = f"contentSections[{index}] must be a mapping."
            raise SiteConfigError(msg)
        folder = _optional_text(entry.get("folder"))
        if not folder:
            msg = f"contentSections[{index}] is missing 'folder'."
            raise SiteConfigError(msg)
        sections.append(
            ContentSectionConfig(
                folder=folder,
                route=_optional_text(entry.get("route")) or folder,
                menu_title=_optional_text(entry.get("menuTitle")),
            )
        )
    return sections


__all__ = ["is_fixed_category", "load_site_config"]

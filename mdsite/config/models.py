"""Typed dataclasses describing site and generator configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from mdsite._constants import SITE_CONFIG_FILENAME

HostingProvider = typ.Literal["none", "netlify", "vercel", "cloudflare", "github"]
HOSTING_PROVIDERS: tuple[str, ...] = typ.get_args(HostingProvider)


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ContentSectionConfig:
    """A dynamic content section served from ``content/<folder>``."""

    folder: str
    route: str = ""
    menu_title: str = ""

    @property
    def display_title(self) -> str:
        """Return the menu title, or the folder name in title case."""
        return self.menu_title or self.folder.replace("-", " ").title()


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide settings read from ``site.config.json``."""

    site_name: str = ""
    base_url: str = ""
    description: str = ""
    content_sections: list[ContentSectionConfig] = dc.field(default_factory=list)

    def section_folders(self) -> list[str]:
        """Return the configured section folder names in declaration order."""
        return [section.folder for section in self.content_sections]


@dc.dataclass(slots=True)
class GeneratorConfig:
    """Options for one :class:`mdsite.pipeline.ContentGenerator` run.

    Attributes
    ----------
    content_path : Path
        Directory holding the category folders (``blog/``, ``docs/`` ...).
    output_path : Path
        Site root receiving the generated artifacts; the content index is
        written to ``<content_path>/index.json``.
    site_config_path : Path | None
        Explicit site configuration file; defaults to ``site.config.json``
        next to the content directory.
    site_url, site_name : str
        Absolute base URL and display name used by the sitemap and feed.
        Empty values fall back to the site configuration.
    hosting_provider : HostingProvider
        Hosting target for configuration files (not generated by mdsite).
    """

    content_path: Path
    output_path: Path
    site_config_path: Path | None = None
    site_url: str = ""
    site_name: str = ""
    hosting_provider: HostingProvider = "none"
    generate_navigation: bool = True
    generate_metadata: bool = True
    generate_sitemap: bool = True
    generate_search_index: bool = True
    generate_rss_feed: bool = True
    generate_static_pages: bool = False
    generate_og_images: bool = False

    def __post_init__(self) -> None:
        """Normalise paths and validate the hosting provider."""
        self.content_path = Path(self.content_path)
        self.output_path = Path(self.output_path)
        if self.site_config_path is not None:
            self.site_config_path = Path(self.site_config_path)
        if self.hosting_provider not in HOSTING_PROVIDERS:
            msg = (
                f"Unknown hosting provider '{self.hosting_provider}'; expected one of "
                f"{', '.join(HOSTING_PROVIDERS)}."
            )
            raise SiteConfigError(msg)

    @property
    def resolved_site_config_path(self) -> Path:
        """Return the site configuration path to read."""
        if self.site_config_path is not None:
            return self.site_config_path
        return self.content_path.parent / SITE_CONFIG_FILENAME


__all__ = [
    "HOSTING_PROVIDERS",
    "ContentSectionConfig",
    "GeneratorConfig",
    "HostingProvider",
    "SiteConfig",
    "SiteConfigError",
]

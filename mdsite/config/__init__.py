"""Load site configuration and describe generator runs.

:func:`load_site_config` reads ``site.config.json`` (site name, base URL and
the dynamic ``contentSections``) into a :class:`SiteConfig`.
:class:`GeneratorConfig` carries the options of one generation run.

Examples
--------
>>> from pathlib import Path
>>> from mdsite.config import GeneratorConfig
>>> config = GeneratorConfig(content_path=Path("site/content"), output_path=Path("dist"))
>>> config.resolved_site_config_path.as_posix()
'site/site.config.json'
"""

from .loader import is_fixed_category, load_site_config
from .models import (
    HOSTING_PROVIDERS,
    ContentSectionConfig,
    GeneratorConfig,
    HostingProvider,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "HOSTING_PROVIDERS",
    "ContentSectionConfig",
    "GeneratorConfig",
    "HostingProvider",
    "SiteConfig",
    "SiteConfigError",
    "is_fixed_category",
    "load_site_config",
]

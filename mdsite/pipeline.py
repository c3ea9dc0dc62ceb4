"""Run the generation steps for a content tree in a fixed order.

Steps run as: content index (plus navigation and metadata indices), sitemap,
search index, RSS feed, hosting configuration, static pages, OG images. Each
step is toggled by :class:`~mdsite.config.GeneratorConfig` and isolated: a
failing step is logged and recorded in the :class:`GenerationReport`, and
the remaining steps still run. Steps that need the content index are
skipped when the scan itself fails.

Example
-------
>>> from pathlib import Path
>>> from mdsite.config import GeneratorConfig
>>> from mdsite.pipeline import ContentGenerator
>>> config = GeneratorConfig(content_path=Path("site/content"), output_path=Path("site"))
>>> report = ContentGenerator(config).run()  # doctest: +SKIP
>>> report.succeeded  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import functools
import logging
import threading  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_SITE_NAME, DEFAULT_SITE_URL
from .config import GeneratorConfig, SiteConfig, SiteConfigError, load_site_config
from .generators import (
    ContentIndexWriter,
    ContentMetadataGenerator,
    NavigationIndexGenerator,
    RssFeedGenerator,
    SearchIndexGenerator,
    SitemapGenerator,
)
from .scanner import ContentScanner, GenerationCancelled

if typ.TYPE_CHECKING:
    from .models import ContentIndex

logger = logging.getLogger(__name__)

StepStatus = typ.Literal["ok", "failed", "skipped", "unsupported", "cancelled"]


@dc.dataclass(slots=True)
class StepResult:
    """Outcome of one generation step."""

    name: str
    status: StepStatus
    outputs: list[Path] = dc.field(default_factory=list)
    error: str | None = None


@dc.dataclass(slots=True)
class GenerationReport:
    """Summary of a :meth:`ContentGenerator.run` call."""

    steps: list[StepResult] = dc.field(default_factory=list)
    content_index: ContentIndex | None = None

    @property
    def outputs(self) -> list[Path]:
        """Return every path written, in step order."""
        return [path for step in self.steps for path in step.outputs]

    @property
    def failed_steps(self) -> list[StepResult]:
        """Return the steps that raised."""
        return [step for step in self.steps if step.status == "failed"]

    @property
    def cancelled(self) -> bool:
        """Return ``True`` when the run stopped early."""
        return any(step.status == "cancelled" for step in self.steps)

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when no step failed and the run was not cancelled."""
        return not self.failed_steps and not self.cancelled

    def step(self, name: str) -> StepResult | None:
        """Return the result for step ``name``, if it ran."""
        return next((step for step in self.steps if step.name == name), None)


class ContentGenerator:
    """Orchestrate the scanner and generators for one :class:`GeneratorConfig`."""

    def __init__(self, config: GeneratorConfig, *, cancel: threading.Event | None = None) -> None:
        self.config = config
        self.cancel = cancel

    def run(self) -> GenerationReport:
        """Run every enabled step and return the report.

        Cancellation stops the run at the next file boundary; the step in
        progress is recorded as ``cancelled`` and later steps are not run.
        """
        config = self.config
        report = GenerationReport()
        site_config = self._load_site_config()
        site_url = config.site_url or site_config.base_url or DEFAULT_SITE_URL
        site_name = config.site_name or site_config.site_name or DEFAULT_SITE_NAME
        routes = {section.folder: section.route for section in site_config.content_sections}
        logger.info("Site URL: %s", site_url)

        def _scan() -> list[Path]:
            scanner = ContentScanner(
                config.content_path,
                config.resolved_site_config_path,
                site_config=site_config,
            )
            report.content_index = scanner.scan(self.cancel)
            return [ContentIndexWriter(config.content_path).write(report.content_index)]

        if not self._run_step(report, "content-index", _scan):
            return report

        steps: list[tuple[str, bool, typ.Callable[[ContentIndex], list[Path]]]] = [
            (
                "navigation-index",
                config.generate_navigation,
                lambda index: [
                    NavigationIndexGenerator(config.content_path, config.output_path).generate(
                        index, self.cancel
                    )
                ],
            ),
            (
                "content-metadata",
                config.generate_metadata,
                lambda index: [
                    ContentMetadataGenerator(config.content_path, config.output_path).generate(
                        index, self.cancel
                    )
                ],
            ),
            (
                "sitemap",
                config.generate_sitemap,
                lambda index: SitemapGenerator(
                    config.content_path, config.output_path, site_url, routes=routes
                ).generate(index, self.cancel),
            ),
            (
                "search-index",
                config.generate_search_index,
                lambda index: [
                    SearchIndexGenerator(
                        config.content_path, config.output_path, routes=routes
                    ).generate(index, self.cancel)
                ],
            ),
            (
                "rss-feed",
                config.generate_rss_feed,
                lambda index: [
                    RssFeedGenerator(
                        config.content_path,
                        config.output_path,
                        site_url,
                        site_name,
                        description=site_config.description,
                    ).generate(index, self.cancel)
                ],
            ),
        ]
        for name, enabled, generate in steps:
            if not enabled:
                report.steps.append(StepResult(name, "skipped"))
                continue
            index = report.content_index
            if index is None:
                report.steps.append(StepResult(name, "skipped", error="no content index"))
                continue
            if not self._run_step(report, name, functools.partial(generate, index)):
                return report

        self._record_external_steps(report)
        logger.info(
            "Content generation complete: %d files written, %d steps failed",
            len(report.outputs),
            len(report.failed_steps),
        )
        return report

    def _run_step(
        self, report: GenerationReport, name: str, action: typ.Callable[[], list[Path]]
    ) -> bool:
        """Run ``action`` in isolation; return ``False`` when the run must stop."""
        logger.info("Generating %s...", name)
        try:
            outputs = action()
        except GenerationCancelled as exc:
            logger.warning("Generation cancelled during %s", name)
            report.steps.append(StepResult(name, "cancelled", error=str(exc)))
            return False
        except Exception as exc:  # noqa: BLE001
            logger.exception("Step %s failed", name)
            report.steps.append(StepResult(name, "failed", error=str(exc)))
            return True
        report.steps.append(StepResult(name, "ok", outputs=outputs))
        return True

    def _record_external_steps(self, report: GenerationReport) -> None:
        config = self.config
        external = [
            (f"hosting-config:{config.hosting_provider}", config.hosting_provider != "none"),
            ("static-pages", config.generate_static_pages),
            ("og-images", config.generate_og_images),
        ]
        for name, requested in external:
            if not requested:
                continue
            logger.warning("Step %s is not provided by mdsite; skipped", name)
            report.steps.append(StepResult(name, "unsupported"))

    def _load_site_config(self) -> SiteConfig:
        path = self.config.resolved_site_config_path
        try:
            return load_site_config(path)
        except FileNotFoundError:
            logger.info("No site configuration at %s; using defaults", path)
        except SiteConfigError as exc:
            logger.warning("Ignoring site configuration %s: %s", path, exc)
        return SiteConfig()


__all__ = ["ContentGenerator", "GenerationReport", "StepResult"]

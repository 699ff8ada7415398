"""Build service for hbsite - turns page templates into HTML files.

One build:
1. Flattens the configured data into global template data
2. Registers every partial under the components directory
3. Composes each top-level page template with its layout
4. Writes <page>.html to the output directory

A page that fails is recorded and logged; the remaining pages still build.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from hbsite.lib.compositor import PageCompositor
from hbsite.lib.config import SiteConfig
from hbsite.lib.data import DEVELOPMENT, build_global_data
from hbsite.lib.partials import PartialRegistry
from hbsite.lib.renderer import HandlebarsRenderer

log = logging.getLogger(__name__)


class PageStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class PageResult:
    """Outcome of building one page."""

    page: str
    source: Path
    output: Path
    status: PageStatus
    layout: str | None = None
    layout_used: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == PageStatus.SUCCESS


@dataclass
class BuildReport:
    """Per-page results of one build, in build order."""

    results: list[PageResult] = field(default_factory=list)
    partials: int = 0

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> list[PageResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[PageResult]:
        return [r for r in self.results if not r.ok]

    @property
    def clean(self) -> bool:
        return not self.failed


def find_pages(templates_dir: Path, extension: str = ".hbs") -> list[Path]:
    """List page templates directly inside `templates_dir` (not recursive)."""
    if not templates_dir.is_dir():
        return []
    return sorted(
        p
        for p in templates_dir.iterdir()
        if p.is_file() and p.name.endswith(extension)
    )


class BuildService:
    """Builds every page of a site once."""

    def __init__(
        self,
        config: SiteConfig,
        mode: str = DEVELOPMENT,
        now: datetime | None = None,
        global_data: Mapping[str, Any] | None = None,
    ):
        self.config = config
        self.now = now or datetime.now()
        if global_data is None:
            global_data = build_global_data(config, mode=mode, now=self.now)
        self.global_data = global_data

    def output_path(self, page: Path) -> Path:
        name = page.name[: -len(self.config.extension)]
        return self.config.output_dir / f"{name}.html"

    def build(self) -> BuildReport:
        """Run a full build with a fresh partial registry."""
        config = self.config
        renderer = HandlebarsRenderer(now=self.now)

        log.info("Registering partials")
        partials = PartialRegistry(extension=config.extension)
        count = partials.register_directory(config.components_dir)
        log.info(f"Registered {count} partial(s)")

        compositor = PageCompositor(
            renderer=renderer,
            partials=partials,
            global_data=self.global_data,
            layouts_dir=config.layouts_dir,
            extension=config.extension,
            default_layout=config.default_layout,
        )

        report = BuildReport(partials=count)
        pages = find_pages(config.templates_dir, config.extension)
        if not pages:
            log.warning(
                f"No {config.extension} templates found in {config.templates_dir}"
            )
            return report

        log.info("Building templates")
        for page in pages:
            report.results.append(self._build_page(compositor, page))

        log.info(
            f"Built {report.attempted} template(s): "
            f"{len(report.succeeded)} succeeded, {len(report.failed)} failed"
        )
        return report

    def _build_page(self, compositor: PageCompositor, page: Path) -> PageResult:
        name = page.name[: -len(self.config.extension)]
        output = self.output_path(page)
        log.info(f"Building: {page.name} → {output.name}")

        try:
            composed = compositor.compose(page.read_text(encoding="utf-8"), name)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(composed.html, encoding="utf-8")
        except Exception as e:
            log.error(f"✗ Error building {name}: {e}")
            return PageResult(
                page=name,
                source=page,
                output=output,
                status=PageStatus.FAILED,
                error=str(e),
            )

        how = f"using {composed.layout} layout" if composed.layout_used else "no layout"
        log.info(f"✓ Generated: {output.name} ({how})")
        return PageResult(
            page=name,
            source=page,
            output=output,
            status=PageStatus.SUCCESS,
            layout=composed.layout,
            layout_used=composed.layout_used,
        )


def build_site(
    config: SiteConfig, mode: str = DEVELOPMENT, now: datetime | None = None
) -> BuildReport:
    """Build every page of the site once."""
    return BuildService(config, mode=mode, now=now).build()

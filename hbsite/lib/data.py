"""Global template data.

The config keeps data grouped by the component that uses it (layout,
header, footer, menu). Handlebars needs a single mapping, so the sections
are flattened in declaration order; a later section wins on a key clash.
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any, Mapping

from hbsite.lib.config import SiteConfig

PRODUCTION = "production"
DEVELOPMENT = "dev"


def resolve_mode(prod: bool = False, environ: Mapping[str, str] | None = None) -> str:
    """Return the build mode.

    Production when requested explicitly or when NODE_ENV or BUILD_MODE is
    ``production``.
    """
    env = os.environ if environ is None else environ
    if prod or PRODUCTION in (env.get("NODE_ENV"), env.get("BUILD_MODE")):
        return PRODUCTION
    return DEVELOPMENT


def layout_defaults(config: SiteConfig, mode: str, now: datetime) -> dict[str, Any]:
    """Computed values seeded into the layout section."""
    data: dict[str, Any] = {
        "year": now.year,
        "buildTime": now.isoformat(),
    }
    assets = config.assets.get(mode)
    if assets is not None:
        data.update(assets.model_dump())
    return data


def build_global_data(
    config: SiteConfig, mode: str = DEVELOPMENT, now: datetime | None = None
) -> dict[str, Any]:
    """Flatten the configured data sections into one mapping.

    Args:
        config: Site configuration.
        mode: Build mode selecting the asset paths.
        now: Build clock; defaults to the current time.

    Returns:
        Global data shared by every page of one build.
    """
    now = now or datetime.now()
    # layout always merges first
    sections = {"layout": {}, **config.data}
    sections["layout"] = {
        **layout_defaults(config, mode, now),
        **sections.get("layout", {}),
    }

    merged: dict[str, Any] = {}
    for values in sections.values():
        merged.update(values)
    return merged

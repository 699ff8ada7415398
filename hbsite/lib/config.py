"""Configuration management for hbsite.

Schema of hbsite.yaml:
- name: site name
- extension: template file extension (default .hbs)
- default_layout: layout used when a page names none (default master)
- paths: where templates, components, layouts, output and dist live
- data: named sub-mappings merged into the global template data
- assets: asset paths per build mode, injected into the layout data
- dist: static folders, excluded subfolders and path rewrites for dist copy
- verify: bundler output files and content checks
- watch: polling and debounce settings for watch mode
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from hbsite.lib.errors import ConfigError

CONFIG_FILENAME = "hbsite.yaml"


class PathsConfig(BaseModel):
    """Project-relative locations."""

    templates: Path = Field(
        default=Path("m/_templates"), description="Directory holding page templates"
    )
    components: Path = Field(
        default=Path("m/_templates/shared/components"),
        description="Directory scanned recursively for partials",
    )
    layouts: Path = Field(
        default=Path("m/_templates/shared/layouts"),
        description="Directory holding layouts, by name",
    )
    output: Path = Field(default=Path("."), description="Where built pages go")
    dist: Path = Field(default=Path("dist"), description="Distributable folder")
    assets: Path = Field(default=Path("m"), description="Static asset root")


class AssetPaths(BaseModel):
    """Asset paths referenced by the layout."""

    model_config = {"extra": "allow"}

    cssPath: str = ""
    preJsPath: str = ""
    postJsPath: str = ""


def _default_assets() -> dict[str, AssetPaths]:
    return {
        "dev": AssetPaths(
            cssPath="/m/_scss/site.min.scss",
            preJsPath="/m/js/entries/pre.js",
            postJsPath="/m/js/entries/post.js",
        ),
        "production": AssetPaths(
            cssPath="./m/css/site.min.css",
            preJsPath="./m/js/pre.min.js",
            postJsPath="./m/js/post.min.js",
        ),
    }


def _default_data() -> dict[str, dict[str, Any]]:
    return {
        "layout": {"siteName": "My Website"},
        "header": {},
        "footer": {"author": "Your Name"},
        "menu": {
            "menuItems": [
                {"label": "Home", "url": "/", "active": True},
                {"label": "About", "url": "/about.html", "active": False},
            ]
        },
    }


class DistConfig(BaseModel):
    """Dist copy settings."""

    static_folders: list[str] = Field(
        default_factory=lambda: ["f", "i", "u"],
        description="Folders under the asset root copied to dist",
    )
    exclude: dict[str, list[str]] = Field(
        default_factory=lambda: {"i": ["_svg"]},
        description="Per static folder, subdirectory names to skip",
    )
    rewrites: dict[str, str] = Field(
        default_factory=lambda: {
            "/m/_scss/site.min.scss": "/m/css/site.min.css",
            "/m/js/entries/pre.js": "/m/js/pre.min.js",
            "/m/js/entries/post.js": "/m/js/post.min.js",
        },
        description="Source-to-built path rewrites applied to copied HTML",
    )


class ContentCheck(BaseModel):
    """A file that must contain some text after bundling."""

    path: str
    text: str
    description: str | None = None


class VerifyConfig(BaseModel):
    """Bundler output verification settings."""

    required: list[str] = Field(
        default_factory=lambda: [
            "m/js/pre.min.js",
            "m/js/post.min.js",
        ]
    )
    optional: list[str] = Field(
        default_factory=lambda: [
            "m/js/pre.min.js.map",
            "m/js/post.min.js.map",
        ]
    )
    contains: list[ContentCheck] = Field(default_factory=list)
    js_dir: str | None = Field(
        default="m/js",
        description="Bundle directory checked for unexpected (code-split) chunks",
    )
    allowed_js_prefixes: list[str] = Field(
        default_factory=lambda: ["pre.min", "post.min", "app"],
        description="Name prefixes of the .js files allowed in js_dir",
    )


class WatchConfig(BaseModel):
    """Watch mode settings (seconds)."""

    debounce: float = 0.1
    interval: float = 0.25
    suffixes: list[str] = Field(
        default_factory=lambda: [".hbs", ".html", ".js", ".yaml", ".yml"]
    )


class SiteConfig(BaseModel):
    """Main hbsite.yaml configuration."""

    name: str | None = Field(default=None, description="Site name")
    extension: str = Field(default=".hbs", description="Template file extension")
    default_layout: str = Field(
        default="master", description="Layout used when a page names none"
    )
    paths: PathsConfig = Field(default_factory=PathsConfig)
    data: dict[str, dict[str, Any]] = Field(
        default_factory=_default_data,
        description="Named sub-mappings merged into global data, in order",
    )
    assets: dict[str, AssetPaths] = Field(default_factory=_default_assets)
    dist: DistConfig = Field(default_factory=DistConfig)
    verify: VerifyConfig = Field(default_factory=VerifyConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)

    # Not part of the YAML: where the config was found
    root: Path = Field(default_factory=Path.cwd, exclude=True)

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else self.root / path

    @property
    def templates_dir(self) -> Path:
        return self.resolve(self.paths.templates)

    @property
    def components_dir(self) -> Path:
        return self.resolve(self.paths.components)

    @property
    def layouts_dir(self) -> Path:
        return self.resolve(self.paths.layouts)

    @property
    def output_dir(self) -> Path:
        return self.resolve(self.paths.output)

    @property
    def dist_dir(self) -> Path:
        return self.resolve(self.paths.dist)

    @property
    def assets_dir(self) -> Path:
        return self.resolve(self.paths.assets)


def load_config(path: Path) -> SiteConfig:
    """Load hbsite.yaml from path; its directory becomes the project root."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(path, str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(path, "top level must be a mapping")

    try:
        return SiteConfig.model_validate({**data, "root": path.resolve().parent})
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e


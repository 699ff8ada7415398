"""Verify service - checks that the bundler produced its expected output."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hbsite.lib.config import SiteConfig


@dataclass
class FileCheck:
    path: str
    required: bool
    exists: bool
    size: int = 0

    @property
    def size_kb(self) -> float:
        return self.size / 1024


@dataclass
class ContentResult:
    path: str
    description: str
    passed: bool
    reason: str | None = None


@dataclass
class VerifyReport:
    files: list[FileCheck] = field(default_factory=list)
    contents: list[ContentResult] = field(default_factory=list)
    unexpected_js: list[str] = field(default_factory=list)

    @property
    def missing_required(self) -> list[FileCheck]:
        return [f for f in self.files if f.required and not f.exists]

    @property
    def failed_contents(self) -> list[ContentResult]:
        return [c for c in self.contents if not c.passed]

    @property
    def passed(self) -> bool:
        return (
            not self.missing_required
            and not self.failed_contents
            and not self.unexpected_js
        )


def check_file(root: Path, rel: str, required: bool = True) -> FileCheck:
    path = root / rel
    if path.is_file():
        return FileCheck(rel, required, exists=True, size=path.stat().st_size)
    return FileCheck(rel, required, exists=False)


def check_contains(root: Path, rel: str, text: str, description: str) -> ContentResult:
    path = root / rel
    if not path.is_file():
        return ContentResult(rel, description, passed=False, reason="file missing")
    if text in path.read_text(encoding="utf-8", errors="replace"):
        return ContentResult(rel, description, passed=True)
    return ContentResult(rel, description, passed=False, reason="not found")


def find_unexpected_js(js_dir: Path, allowed_prefixes: list[str]) -> list[str]:
    """List .js files in `js_dir` whose names start with none of the prefixes.

    Extra chunks mean the bundler split the code, which the pages never load.
    """
    if not js_dir.is_dir():
        return []
    prefixes = tuple(allowed_prefixes)
    return sorted(
        p.name
        for p in js_dir.iterdir()
        if p.is_file() and p.name.endswith(".js") and not p.name.startswith(prefixes)
    )


def verify_bundle(config: SiteConfig) -> VerifyReport:
    """Check required/optional bundle files and content checks under the root."""
    root = config.root
    report = VerifyReport()

    for rel in config.verify.required:
        report.files.append(check_file(root, rel, required=True))
    for rel in config.verify.optional:
        report.files.append(check_file(root, rel, required=False))

    for check in config.verify.contains:
        description = check.description or f"{check.path} contains {check.text!r}"
        report.contents.append(
            check_contains(root, check.path, check.text, description)
        )

    if config.verify.js_dir:
        report.unexpected_js = find_unexpected_js(
            root / config.verify.js_dir, config.verify.allowed_js_prefixes
        )

    return report

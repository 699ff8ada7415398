"""Handlebars rendering backed by pybars3."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Callable, Mapping

from pybars import Compiler, PybarsError

from hbsite.lib.errors import TemplateRenderError

CompiledTemplate = Callable[..., Any]

# Comments first: {{!-- --}} may contain "}}"
_TAG_RE = re.compile(r"\{\{!--.*?--\}\}|\{\{\{.*?\}\}\}|\{\{.*?\}\}", re.DOTALL)


def _line(source: str, index: int) -> int:
    return source.count("\n", 0, index) + 1


def check_syntax(source: str, name: str = "<template>") -> None:
    """Reject unterminated tags and unbalanced blocks.

    pybars3 silently drops the rest of a template after a block it cannot
    close, so structure is checked before handing the source over.

    Raises:
        TemplateRenderError: On an unterminated ``{{``/``{{{``, a stray or
            mismatched ``{{/name}}``, or a block left open.
    """
    stack: list[tuple[str, int]] = []
    pos = 0
    while True:
        start = source.find("{{", pos)
        if start == -1:
            break
        if start > 0 and source[start - 1] == "\\":
            pos = start + 2
            continue

        match = _TAG_RE.match(source, start)
        if match is None:
            raise TemplateRenderError(
                name, f"unterminated tag on line {_line(source, start)}"
            )
        pos = match.end()

        tag = match.group(0)
        if tag.startswith("{{!"):
            continue
        inner = tag.strip("{}").strip().strip("~").strip()

        if inner == "^" or inner == "else" or inner.startswith("else "):
            continue
        if inner[:1] in ("#", "^"):
            words = inner[1:].split(None, 1)
            if not words:
                raise TemplateRenderError(
                    name, f"block without a name on line {_line(source, start)}"
                )
            stack.append((words[0], start))
        elif inner.startswith("/"):
            closing = inner[1:].strip()
            if not stack:
                raise TemplateRenderError(
                    name,
                    f"{{{{/{closing}}}}} without an open block "
                    f"on line {_line(source, start)}",
                )
            opened, _ = stack.pop()
            if opened != closing:
                raise TemplateRenderError(
                    name,
                    f"{{{{/{closing}}}}} does not close {{{{#{opened}}}}} "
                    f"on line {_line(source, start)}",
                )

    if stack:
        opened, at = stack[-1]
        raise TemplateRenderError(
            name, f"unclosed {{{{#{opened}}}}} opened on line {_line(source, at)}"
        )


def _uppercase(this: Any, value: Any) -> str:
    if value is None:
        raise TypeError("uppercase needs a value, got nothing")
    return str(value).upper()


def _lowercase(this: Any, value: Any) -> str:
    if value is None:
        raise TypeError("lowercase needs a value, got nothing")
    return str(value).lower()


class HandlebarsRenderer:
    """Compiles and renders Handlebars templates.

    Provides the ``uppercase``, ``lowercase`` and ``year`` helpers to every
    template. ``year`` reads the build clock, not the wall clock, so a
    frozen ``now`` gives reproducible output.
    """

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime.now()
        self.compiler = Compiler()
        self.helpers: dict[str, Callable[..., Any]] = {
            "uppercase": _uppercase,
            "lowercase": _lowercase,
            "year": lambda this: str(self.now.year),
        }

    def compile(self, source: str, name: str = "<template>") -> CompiledTemplate:
        """Compile template text, raising TemplateRenderError on bad syntax."""
        check_syntax(source, name)
        try:
            return self.compiler.compile(source)
        except PybarsError as e:
            raise TemplateRenderError(name, str(e)) from e

    def render(
        self,
        source: str,
        context: Mapping[str, Any],
        partials: Mapping[str, CompiledTemplate] | None = None,
        name: str = "<template>",
    ) -> str:
        """Compile ``source`` and render it against ``context``.

        Args:
            source: Handlebars template text.
            context: Data available to the template.
            partials: Compiled partials by name, for ``{{> name}}``.
            name: Template identity used in error messages.

        Returns:
            Rendered text.

        Raises:
            TemplateRenderError: If compiling or rendering fails.
        """
        template = self.compile(source, name)
        try:
            output = template(
                dict(context), helpers=self.helpers, partials=dict(partials or {})
            )
        except PybarsError as e:
            raise TemplateRenderError(name, str(e)) from e
        except (KeyError, TypeError, AttributeError) as e:
            # missing partials and failing helpers surface as plain errors
            raise TemplateRenderError(name, f"{type(e).__name__}: {e}") from e
        return str(output)

"""Page compositor - renders a page body, then wraps it in its layout."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, NamedTuple

from hbsite.lib.frontmatter import parse_front_matter
from hbsite.lib.partials import PartialRegistry
from hbsite.lib.renderer import HandlebarsRenderer


class ComposedPage(NamedTuple):
    """Final page text plus how it was produced."""

    html: str
    layout: str
    layout_used: bool


class PageCompositor:
    """Two-pass page rendering.

    The page body is rendered first against global data and the page's front
    matter. The result is handed to the layout as ``body``, a plain string the
    layout never re-parses. A page whose layout does not exist is rendered in
    a single pass without wrapping.
    """

    def __init__(
        self,
        renderer: HandlebarsRenderer,
        partials: PartialRegistry,
        global_data: Mapping[str, Any],
        layouts_dir: Path,
        extension: str = ".hbs",
        default_layout: str = "master",
    ):
        self.renderer = renderer
        self.partials = partials
        self.global_data = global_data
        self.layouts_dir = Path(layouts_dir)
        self.extension = extension
        self.default_layout = default_layout

    def layout_path(self, name: str) -> Path:
        return self.layouts_dir / f"{name}{self.extension}"

    def compose(self, source: str, page_name: str) -> ComposedPage:
        """Render one page template.

        Args:
            source: The page's template source, front matter included.
            page_name: Page name (file name without extension); the default
                ``pageCssClass``.

        Raises:
            TemplateRenderError: If the body or layout fails to render.
        """
        meta, body = parse_front_matter(source)
        layout_name = meta.get("layout") or self.default_layout
        layout_path = self.layout_path(layout_name)

        partials = self.partials.compiled(self.renderer)
        context = {**self.global_data, **meta}

        compiled_body = self.renderer.render(body, context, partials, name=page_name)
        if not layout_path.is_file():
            return ComposedPage(compiled_body, layout_name, layout_used=False)

        layout_context = {
            **context,
            "body": compiled_body,
            "pageTitle": meta.get("pageTitle") or meta.get("title") or "Page",
            "pageCssClass": meta.get("pageCssClass") or page_name,
        }
        html = self.renderer.render(
            layout_path.read_text(encoding="utf-8"),
            layout_context,
            partials,
            name=f"layout {layout_name}",
        )
        return ComposedPage(html, layout_name, layout_used=True)

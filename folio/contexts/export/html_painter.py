"""
HTML Painter

Paints a preview tree to HTML with Jinja2. Node styles are written as inline CSS,
text is autoescaped, and list markers are painted as aria-hidden spans so the
visible text of the page matches the tree.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from folio.contexts.export.exceptions import DocumentExportError
from folio.contexts.export.export_result import ExportResult
from folio.contexts.export.logger import _log_debug, log_export_result
from folio.contexts.rendering.preview_tree import PreviewNode

load_dotenv()
HTML_TEMPLATES_PATH = Path(
    os.getenv("FOLIO_HTML_TEMPLATES_PATH", str(Path(__file__).parent / "templates"))
)

PAGE_TEMPLATE = "preview.html.jinja"
NODE_TEMPLATE = "node.html.jinja"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def css_declarations(style: Mapping[str, Any]) -> str:
    """
    Turn a camelCase style dict into an inline CSS declaration list.

    Example:
        >>> css_declarations({"fontWeight": "bold", "marginTop": "12pt"})
        'font-weight: bold; margin-top: 12pt'
    """
    return "; ".join(
        f"{_CAMEL_BOUNDARY.sub('-', key).lower()}: {value}" for key, value in style.items() if value is not None
    )


class HtmlTemplateRegistry:
    """
    Registry for loading and caching the Jinja2 templates that paint previews.

    Templates live in contexts/export/templates/ (or FOLIO_HTML_TEMPLATES_PATH).
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the registry.

        Args:
            templates_path: Template directory. Defaults to FOLIO_HTML_TEMPLATES_PATH
        """
        if templates_path is None:
            templates_path = HTML_TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["css"] = css_declarations

    def get_template(self, name: str) -> Template:
        """
        Get a template by file name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the template file doesn't exist
            TemplateSyntaxError: If the template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(f"HTML template '{name}' not found in {self.templates_path}") from e

        self._cache[name] = template
        return template

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache


def paint_fragment(tree: PreviewNode, registry: HtmlTemplateRegistry = None) -> str:
    """Paint a preview tree as an HTML fragment (the page <div> only)."""
    registry = registry or HtmlTemplateRegistry()
    render_node = registry.get_template(NODE_TEMPLATE).module.render_node
    return str(render_node(tree))


def paint_html(tree: PreviewNode, title: str = "Resume", registry: HtmlTemplateRegistry = None) -> str:
    """
    Paint a preview tree as a standalone HTML page.

    Args:
        tree: Preview tree from emit()/render()
        title: Page title
        registry: Template registry (a fresh default one when omitted)

    Returns:
        HTML document
    """
    registry = registry or HtmlTemplateRegistry()
    return registry.get_template(PAGE_TEMPLATE).render(tree=tree, title=title)


def write_html(
    tree: PreviewNode,
    output_path: Path,
    title: str = "Resume",
    registry: HtmlTemplateRegistry = None,
) -> ExportResult:
    """
    Paint a preview tree and write it to output_path.

    Raises:
        DocumentExportError: If the file cannot be written
    """
    html = paint_html(tree, title=title, registry=registry)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise DocumentExportError("Failed to write HTML preview", output_path=output_path, original_error=e) from e

    _log_debug(f"Painted {len(html)} characters of HTML")
    result = ExportResult(success=True, output_path=output_path, block_count=len(tree.find("section")))
    log_export_result(result)
    return result

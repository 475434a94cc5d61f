"""Integration tests for painting preview trees to HTML."""

import re
from html.parser import HTMLParser

import pytest
from jinja2 import TemplateNotFound

from folio.contexts.export import DocumentExportError, HtmlTemplateRegistry, paint_fragment, paint_html, write_html
from folio.contexts.export.html_painter import css_declarations
from folio.contexts.rendering import render
from folio.contexts.templating import ResumeData, get_default_template


class _VisibleText(HTMLParser):
    """Collects text outside aria-hidden elements and outside <head>."""

    def __init__(self):
        super().__init__()
        self.texts = []
        self._hidden_depth = 0
        self._in_head = False

    def handle_starttag(self, tag, attrs):
        if tag == "head":
            self._in_head = True
        if self._hidden_depth or ("aria-hidden", "true") in attrs:
            self._hidden_depth += 1

    def handle_endtag(self, tag):
        if tag == "head":
            self._in_head = False
        if self._hidden_depth:
            self._hidden_depth -= 1

    def handle_data(self, data):
        if not self._hidden_depth and not self._in_head and data.strip():
            self.texts.append(data)


def _visible_text(html):
    parser = _VisibleText()
    parser.feed(html)
    return parser.texts


@pytest.fixture
def preview(resume):
    return render(get_default_template(), resume).preview


@pytest.mark.unit
def test_css_declarations():
    assert css_declarations({"fontWeight": "bold", "marginTop": "12pt", "color": None}) == (
        "font-weight: bold; margin-top: 12pt"
    )


@pytest.mark.unit
def test_registry_caches_templates():
    registry = HtmlTemplateRegistry()
    first = registry.get_template("preview.html.jinja")

    assert registry.is_cached("preview.html.jinja")
    assert registry.get_template("preview.html.jinja") is first

    registry.clear_cache()
    assert not registry.is_cached("preview.html.jinja")


@pytest.mark.unit
def test_registry_missing_template():
    with pytest.raises(TemplateNotFound):
        HtmlTemplateRegistry().get_template("missing.html.jinja")


@pytest.mark.integration
def test_visible_text_matches_preview_tree(preview):
    html = paint_html(preview, title="Jane Doe Resume")

    visible = [text for text in _visible_text(html) if text.strip()]
    expected = [text for text in preview.text_segments() if text.strip()]
    assert visible == expected


@pytest.mark.integration
def test_bullet_markers_are_hidden(preview):
    html = paint_fragment(preview)

    markers = re.findall(r'<span class="folio-marker" aria-hidden="true">(.*?)</span>', html)
    assert markers and set(markers) == {"•"}
    assert "•" not in "".join(_visible_text(html))


@pytest.mark.integration
def test_text_is_escaped():
    data = ResumeData.from_dict({"personalInfo": {"name": "<script>alert(1)</script>"}})
    html = paint_html(render(get_default_template(), data).preview)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.integration
def test_page_structure(preview):
    html = paint_html(preview, title="Jane Doe Resume")

    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "<title>Jane Doe Resume</title>" in html
    assert 'class="folio-page"' in html
    assert html.count('class="folio-section"') == 4
    assert 'class="folio-rule"' in html
    assert "justify-content: space-between" in html


@pytest.mark.integration
def test_write_html(preview, tmp_path):
    output_path = tmp_path / "out" / "preview.html"

    result = write_html(preview, output_path)

    assert result.success
    assert result.block_count == 4
    assert output_path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")


@pytest.mark.integration
def test_write_html_failure(preview, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DocumentExportError) as exc_info:
        write_html(preview, blocker / "preview.html")

    assert exc_info.value.output_path == blocker / "preview.html"

"""Integration tests for painting document trees to .pdf, read back with pypdf."""

import re

import pytest
from pypdf import PdfReader

from folio.contexts.export import DocumentExportError, PdfWriter, write_pdf
from folio.contexts.export.pdf_writer import HELVETICA, TIMES, _font_family, _LineOp, _TextOp
from folio.contexts.rendering import render
from folio.contexts.rendering.document_tree import DocumentTree, Paragraph, Rule, StyledRun
from folio.contexts.templating import TemplateLibrary


@pytest.fixture
def document_tree(resume):
    return render(TemplateLibrary().get("ats-default"), resume).document


def _squashed(text: str) -> str:
    return re.sub(r"\s+", "", text)


def _pdf_text(path) -> str:
    return "".join(page.extract_text() for page in PdfReader(str(path)).pages)


def _text_ops(pages):
    return [op for page in pages for op in page if isinstance(op, _TextOp)]


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [("Roboto", HELVETICA), ("Georgia", TIMES), ("Times New Roman", TIMES), ("", HELVETICA), (None, HELVETICA)],
)
def test_font_family(name, expected):
    assert _font_family(name) == expected


@pytest.mark.integration
def test_pdf_text_follows_document_tree(document_tree, tmp_path):
    output_path = tmp_path / document_tree.filename("pdf")

    result = write_pdf(document_tree, output_path)

    assert result.success
    assert result.output_path.name == "Jane_Doe_Resume.pdf"

    # every segment appears, in reading order; wrapping only moves whitespace
    text = _squashed(_pdf_text(output_path))
    position = 0
    for segment in document_tree.text_segments():
        needle = _squashed(segment)
        if not needle:
            continue
        found = text.find(needle, position)
        assert found >= 0, f"{segment!r} missing or out of order"
        position = found + len(needle)


@pytest.mark.integration
def test_pdf_page_setup_and_metadata(document_tree, tmp_path):
    output_path = tmp_path / "resume.pdf"
    write_pdf(document_tree, output_path)

    reader = PdfReader(str(output_path))
    page = reader.pages[0]

    assert float(page.mediabox.width) == 612
    assert float(page.mediabox.height) == 792
    assert reader.metadata.title == "Jane Doe Resume"
    assert reader.metadata.author == "Jane Doe"


@pytest.mark.integration
def test_text_stays_inside_margins(document_tree):
    writer = PdfWriter(document_tree)
    left, top, right, bottom = document_tree.page_margins

    for op in _text_ops(writer.layout()):
        assert op.x >= left - 0.01
        assert op.x + op.fragment.width <= document_tree.page_size[0] - right + 0.01
        assert bottom <= op.y <= document_tree.page_size[1] - top


@pytest.mark.integration
def test_right_cell_is_flush_right(document_tree):
    writer = PdfWriter(document_tree)
    ops = _text_ops(writer.layout())
    present = next(op for op in ops if op.fragment.text == "Present")

    assert present.x + present.fragment.width == pytest.approx(612 - document_tree.page_margins[2])


@pytest.mark.integration
def test_bold_markup_uses_bold_font(document_tree):
    ops = _text_ops(PdfWriter(document_tree).layout())
    bold = next(op for op in ops if op.fragment.text == "40%")

    assert bold.fragment.font == "Helvetica-Bold"


@pytest.mark.integration
def test_divider_rules_are_stroked_lines(document_tree):
    writer = PdfWriter(document_tree)
    full_width = [
        op
        for page in writer.layout()
        for op in page
        if isinstance(op, _LineOp) and op.x1 == writer.left and op.x2 == writer.page_width - writer.right
    ]
    expected = sum(2 if block.style == "double" else 1 for block in document_tree.content if isinstance(block, Rule))

    assert expected > 0
    assert len(full_width) == expected


@pytest.mark.integration
@pytest.mark.parametrize("page_format, expected", [("Page X", "Page 1"), ("X of Y", "1 of")])
def test_page_numbers(document_tree, tmp_path, page_format, expected):
    document_tree.page_numbers.update({"show": True, "format": page_format})
    output_path = tmp_path / "resume.pdf"
    write_pdf(document_tree, output_path)

    assert expected in _pdf_text(output_path)


@pytest.mark.integration
def test_page_numbers_off(document_tree, tmp_path):
    document_tree.page_numbers["show"] = False
    output_path = tmp_path / "resume.pdf"
    write_pdf(document_tree, output_path)

    assert "Page 1" not in _pdf_text(output_path)


@pytest.mark.integration
def test_long_document_breaks_pages(tmp_path):
    tree = DocumentTree(
        content=[Paragraph(runs=[StyledRun(f"Line {index} of a long document")]) for index in range(120)],
        default_style={"font": "Georgia", "fontSize": 11, "lineHeight": 1.15},
        page_numbers={"show": True, "position": "bottom-center", "format": "X of Y"},
        title="Jane Doe",
    )
    output_path = tmp_path / "long.pdf"

    write_pdf(tree, output_path)
    reader = PdfReader(str(output_path))

    assert len(reader.pages) > 1
    last = reader.pages[-1].extract_text()
    assert f"{len(reader.pages)} of {len(reader.pages)}" in last
    assert _squashed("Line 119 of a long document") in _squashed(last)


@pytest.mark.integration
def test_long_paragraph_wraps():
    words = " ".join(f"word{index}" for index in range(200))
    tree = DocumentTree(content=[Paragraph(runs=[StyledRun(words)])], default_style={"fontSize": 11})

    ops = _text_ops(PdfWriter(tree).layout())
    baselines = {op.y for op in ops}

    assert len(ops) == 200
    assert len(baselines) > 1


@pytest.mark.integration
def test_write_failure(document_tree, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DocumentExportError) as exc_info:
        write_pdf(document_tree, blocker / "resume.pdf")

    assert isinstance(exc_info.value.original_error, OSError)

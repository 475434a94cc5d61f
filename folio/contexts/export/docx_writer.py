"""
DOCX Writer

Writes a DocumentTree to a Word document with python-docx:
- Paragraph -> paragraph of runs (bold / italic / underline / size / color)
- ColumnSet -> borderless one-row, two-cell table; right cell right-aligned
- BulletedList -> one indented paragraph per item, the glyph as a leading run
- Rule -> empty paragraph with a bottom border
- Spacer -> space before the next block
- page size, margins, default font and a PAGE / NUMPAGES footer field
"""

from pathlib import Path
from typing import Optional, Tuple

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from folio.contexts.export.exceptions import DocumentExportError
from folio.contexts.export.export_result import ExportResult
from folio.contexts.export.logger import _log_debug, _log_error, log_export_result
from folio.contexts.rendering.document_tree import (
    BulletedList,
    ColumnSet,
    DocumentTree,
    Paragraph,
    Rule,
    Spacer,
    StyledRun,
)
from folio.utils.naming import document_title

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}

PAGE_NUMBER_ALIGNMENTS = {
    "bottom-center": WD_ALIGN_PARAGRAPH.CENTER,
    "bottom-right": WD_ALIGN_PARAGRAPH.RIGHT,
}

# OOXML border sizes are in eighths of a point
BORDER_UNITS_PER_POINT = 8


def _parse_hex_color(value: Optional[str]) -> Optional[RGBColor]:
    """'#2563eb' or '#26e' -> RGBColor; None for anything else."""
    if not value or not value.startswith("#"):
        return None
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6:
        return None
    try:
        return RGBColor.from_string(digits.upper())
    except ValueError:
        return None


def _add_field(paragraph, instruction: str) -> None:
    """Append a field (e.g. PAGE) to a paragraph as begin / instruction / end runs."""
    run = paragraph.add_run()
    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = instruction
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")
    run._r.append(begin)
    run._r.append(instr)
    run._r.append(end)


def _set_bottom_border(paragraph, weight: float, color: Optional[str], style: str) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "double" if style == "double" else "single")
    bottom.set(qn("w:sz"), str(max(2, int(round(weight * BORDER_UNITS_PER_POINT)))))
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), (color or "#000000").lstrip("#").upper())
    borders.append(bottom)
    p_pr.append(borders)


def _remove_table_borders(table) -> None:
    tbl_pr = table._tbl.tblPr
    borders = OxmlElement("w:tblBorders")
    for border_name in ("top", "left", "bottom", "right", "insideH", "insideV"):
        border = OxmlElement(f"w:{border_name}")
        border.set(qn("w:val"), "nil")
        borders.append(border)
    tbl_pr.append(borders)


class DocxWriter:
    """
    Paints one DocumentTree into a python-docx Document.

    Example:
        writer = DocxWriter(result.document)
        writer.save(Path("outs/Jane_Doe_Resume.docx"))
    """

    def __init__(self, tree: DocumentTree):
        self.tree = tree
        self.doc = None
        self._pending_space = 0.0

    def build(self):
        """Create the python-docx Document for the tree."""
        self.doc = Document()
        self._pending_space = 0.0
        self._apply_page_setup()
        self._apply_default_style()

        for block in self.tree.content:
            self._add_block(block)

        self._add_page_numbers()
        self._set_document_metadata()
        return self.doc

    def save(self, output_path: Path) -> ExportResult:
        """
        Build and save the document.

        Raises:
            DocumentExportError: If python-docx fails or the file cannot be written
        """
        try:
            document = self.build()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            document.save(str(output_path))
        except (OSError, ValueError, KeyError, OverflowError) as e:
            _log_error(f"DOCX export failed: {e}")
            raise DocumentExportError("Failed to write DOCX document", output_path=output_path, original_error=e) from e

        result = ExportResult(success=True, output_path=output_path, block_count=len(self.tree.content))
        log_export_result(result)
        return result

    # -------------------------------------------------------------------------
    # Page setup and metadata
    # -------------------------------------------------------------------------

    def _apply_page_setup(self) -> None:
        section = self.doc.sections[0]
        width, height = self.tree.page_size
        left, top, right, bottom = self.tree.page_margins
        section.page_width = Pt(width)
        section.page_height = Pt(height)
        section.left_margin = Pt(left)
        section.top_margin = Pt(top)
        section.right_margin = Pt(right)
        section.bottom_margin = Pt(bottom)

    def _apply_default_style(self) -> None:
        style = self.doc.styles["Normal"]
        defaults = self.tree.default_style
        if defaults.get("font"):
            style.font.name = defaults["font"]
        if defaults.get("fontSize"):
            style.font.size = Pt(defaults["fontSize"])
        color = _parse_hex_color(defaults.get("color"))
        if color:
            style.font.color.rgb = color
        paragraph_format = style.paragraph_format
        paragraph_format.space_before = Pt(0)
        paragraph_format.space_after = Pt(0)
        if defaults.get("lineHeight"):
            paragraph_format.line_spacing = defaults["lineHeight"]

    def _add_page_numbers(self) -> None:
        settings = self.tree.page_numbers
        if not settings.get("show"):
            return

        footer = self.doc.sections[0].footer
        paragraph = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
        paragraph.alignment = PAGE_NUMBER_ALIGNMENTS.get(settings.get("position"), WD_ALIGN_PARAGRAPH.RIGHT)

        page_format = settings.get("format", "Page X")
        if page_format == "Page X":
            paragraph.add_run("Page ")
            _add_field(paragraph, "PAGE")
        elif page_format == "X of Y":
            _add_field(paragraph, "PAGE")
            paragraph.add_run(" of ")
            _add_field(paragraph, "NUMPAGES")
        else:
            _add_field(paragraph, "PAGE")

    def _set_document_metadata(self) -> None:
        properties = self.doc.core_properties
        properties.title = document_title(self.tree.title)
        properties.subject = "Resume"
        if self.tree.title:
            properties.author = self.tree.title

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _add_block(self, block) -> None:
        if isinstance(block, Spacer):
            self._pending_space += block.height
        elif isinstance(block, Paragraph):
            self._write_paragraph(self.doc.add_paragraph(), block)
        elif isinstance(block, ColumnSet):
            self._add_columns(block)
        elif isinstance(block, BulletedList):
            for item in block.items:
                self._add_bullet(item, block.glyph, block.indent)
        elif isinstance(block, Rule):
            self._add_rule(block)
        else:
            _log_debug(f"Skipping unknown block {type(block).__name__}")

    def _take_space(self, margin: Tuple[float, float, float, float]) -> float:
        space = self._pending_space + margin[1]
        self._pending_space = 0.0
        return space

    def _write_run(self, paragraph, run: StyledRun, font_size: Optional[float], color: Optional[str]) -> None:
        if run.line_break:
            paragraph.add_run().add_break()
            return

        docx_run = paragraph.add_run(run.text)
        docx_run.bold = run.bold or None
        docx_run.italic = run.italics or None
        if run.decoration == "underline":
            docx_run.underline = True
        size = run.font_size if run.font_size is not None else font_size
        if size is not None:
            docx_run.font.size = Pt(size)
        rgb = _parse_hex_color(run.color or color)
        if rgb:
            docx_run.font.color.rgb = rgb

    def _write_paragraph(self, paragraph, block: Paragraph, space_before: Optional[float] = None) -> None:
        paragraph.alignment = ALIGNMENTS.get(block.alignment, WD_ALIGN_PARAGRAPH.LEFT)
        paragraph_format = paragraph.paragraph_format
        paragraph_format.space_before = Pt(self._take_space(block.margin) if space_before is None else space_before)
        paragraph_format.space_after = Pt(block.margin[3])
        for run in block.runs:
            self._write_run(paragraph, run, block.font_size, block.color)

    def _add_columns(self, block: ColumnSet) -> None:
        space_before = self._take_space(block.margin)
        table = self.doc.add_table(rows=1, cols=2)
        table.autofit = True
        _remove_table_borders(table)

        left_cell, right_cell = table.rows[0].cells
        self._write_paragraph(left_cell.paragraphs[0], block.left, space_before=space_before)
        self._write_paragraph(right_cell.paragraphs[0], block.right, space_before=space_before)

    def _add_bullet(self, item: Paragraph, glyph: str, indent: float) -> None:
        paragraph = self.doc.add_paragraph()
        paragraph_format = paragraph.paragraph_format
        paragraph_format.left_indent = Pt(indent + 10)
        paragraph_format.first_line_indent = Pt(-10)
        paragraph.add_run(f"{glyph} ")
        self._write_paragraph(paragraph, item)

    def _add_rule(self, block: Rule) -> None:
        paragraph = self.doc.add_paragraph()
        paragraph_format = paragraph.paragraph_format
        paragraph_format.space_before = Pt(self._take_space(block.margin))
        paragraph_format.space_after = Pt(block.margin[3])
        _set_bottom_border(paragraph, block.weight, block.color, block.style)


def write_docx(tree: DocumentTree, output_path: Path) -> ExportResult:
    """
    Write a document tree to a .docx file.

    Args:
        tree: Document tree from emit()/render()
        output_path: Target file

    Returns:
        ExportResult

    Raises:
        DocumentExportError: If the document cannot be produced
    """
    return DocxWriter(tree).save(output_path)

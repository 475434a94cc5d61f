"""
PDF Writer

Paints a DocumentTree onto reportlab canvas pages with the standard PDF fonts:
- Paragraph -> word-wrapped styled runs, aligned left / center / right
- ColumnSet -> left cell wrapped at the left, right cell flush with the right margin
- BulletedList -> the glyph drawn at the indent, item text wrapped beside it
- Rule -> one stroked line (two for the double style) across the content width
- Spacer -> extra space before the next block
- page size, margins, default font and page numbers in the bottom margin

Layout runs first and yields pages of draw operations, so the total page count
is known before anything is painted ("X of Y" numbering).
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

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

# (regular, bold, italic, bold italic)
HELVETICA = ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique")
TIMES = ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic")

SERIF_FAMILIES = {"times new roman", "times", "georgia", "garamond", "cambria"}

DEFAULT_FONT_SIZE = 11
DEFAULT_LINE_HEIGHT = 1.15

# Gap between a bullet glyph and its text, and between the two cells of a row
GLYPH_GAP = 10
COLUMN_GAP = 12

PAGE_NUMBER_SIZE = 9


def _font_family(name: Optional[str]) -> Tuple[str, str, str, str]:
    return TIMES if (name or "").strip().lower() in SERIF_FAMILIES else HELVETICA


def _parse_hex_color(value: Optional[str]):
    """'#2563eb' or '#26e' -> reportlab Color; None for anything else."""
    if not value or not value.startswith("#"):
        return None
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6 or not re.fullmatch(r"[0-9a-fA-F]{6}", digits):
        return None
    return colors.HexColor(f"#{digits}")


@dataclass
class _Fragment:
    """A piece of one run with no whitespace inside it."""

    text: str
    font: str
    size: float
    color: object
    underline: bool = False

    @property
    def width(self) -> float:
        return pdfmetrics.stringWidth(self.text, self.font, self.size)


@dataclass
class _Line:
    placed: List[Tuple[float, _Fragment]] = field(default_factory=list)
    width: float = 0.0
    size: float = 0.0

    def add(self, word: List[_Fragment], space: float) -> None:
        x = self.width + space
        for fragment in word:
            self.placed.append((x, fragment))
            x += fragment.width
            self.size = max(self.size, fragment.size)
        self.width = x


@dataclass
class _TextOp:
    x: float
    y: float
    fragment: _Fragment


@dataclass
class _LineOp:
    x1: float
    x2: float
    y: float
    weight: float
    color: object


Op = Union[_TextOp, _LineOp]


class PdfWriter:
    """
    Paints one DocumentTree into a PDF file with reportlab.

    Example:
        writer = PdfWriter(result.document)
        writer.save(Path("outs/Jane_Doe_Resume.pdf"))
    """

    def __init__(self, tree: DocumentTree):
        self.tree = tree
        defaults = tree.default_style
        self.fonts = _font_family(defaults.get("font"))
        self.font_size = defaults.get("fontSize") or DEFAULT_FONT_SIZE
        self.line_height = defaults.get("lineHeight") or DEFAULT_LINE_HEIGHT
        self.color = _parse_hex_color(defaults.get("color")) or colors.black

        self.page_width, self.page_height = tree.page_size
        self.left, self.top, self.right, self.bottom = tree.page_margins

        self.pages: List[List[Op]] = []
        self._y = 0.0
        self._pending_space = 0.0

    @property
    def content_width(self) -> float:
        return self.page_width - self.left - self.right

    def layout(self) -> List[List[Op]]:
        """Place every block; returns one list of draw operations per page."""
        self.pages = []
        self._pending_space = 0.0
        self._new_page()

        for block in self.tree.content:
            self._add_block(block)

        _log_debug(f"Laid out {len(self.tree.content)} blocks on {len(self.pages)} page(s)")
        return self.pages

    def save(self, output_path: Path) -> ExportResult:
        """
        Lay out, paint and save the document.

        Raises:
            DocumentExportError: If reportlab fails or the file cannot be written
        """
        try:
            pages = self.layout()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            pdf = canvas.Canvas(str(output_path), pagesize=self.tree.page_size)
            self._set_document_metadata(pdf)
            for number, operations in enumerate(pages, start=1):
                self._paint_page(pdf, operations)
                self._paint_page_number(pdf, number, len(pages))
                pdf.showPage()
            pdf.save()
        except (OSError, ValueError, KeyError, OverflowError) as e:
            _log_error(f"PDF export failed: {e}")
            raise DocumentExportError("Failed to write PDF document", output_path=output_path, original_error=e) from e

        result = ExportResult(success=True, output_path=output_path, block_count=len(self.tree.content))
        log_export_result(result)
        return result

    # -------------------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------------------

    def _set_document_metadata(self, pdf) -> None:
        pdf.setTitle(document_title(self.tree.title))
        pdf.setSubject("Resume")
        if self.tree.title:
            pdf.setAuthor(self.tree.title)

    def _paint_page(self, pdf, operations: List[Op]) -> None:
        for operation in operations:
            if isinstance(operation, _TextOp):
                fragment = operation.fragment
                pdf.setFont(fragment.font, fragment.size)
                pdf.setFillColor(fragment.color)
                pdf.drawString(operation.x, operation.y, fragment.text)
            else:
                pdf.setStrokeColor(operation.color)
                pdf.setLineWidth(operation.weight)
                pdf.line(operation.x1, operation.y, operation.x2, operation.y)

    def _paint_page_number(self, pdf, number: int, total: int) -> None:
        settings = self.tree.page_numbers
        if not settings.get("show"):
            return

        page_format = settings.get("format", "Page X")
        if page_format == "Page X":
            label = f"Page {number}"
        elif page_format == "X of Y":
            label = f"{number} of {total}"
        else:
            label = str(number)

        pdf.setFont(self.fonts[0], PAGE_NUMBER_SIZE)
        pdf.setFillColor(self.color)
        y = self.bottom / 2
        if settings.get("position") == "bottom-center":
            pdf.drawCentredString(self.page_width / 2, y, label)
        else:
            pdf.drawRightString(self.page_width - self.right, y, label)

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def _new_page(self) -> None:
        self.pages.append([])
        self._y = self.page_height - self.top

    def _ensure_room(self, height: float) -> None:
        """Start a new page unless `height` fits above the bottom margin."""
        if self._y - height < self.bottom and self._y < self.page_height - self.top:
            self._new_page()
            self._pending_space = 0.0

    def _take_space(self, margin: Tuple[float, float, float, float]) -> None:
        self._y -= self._pending_space + margin[1]
        self._pending_space = 0.0

    def _add_block(self, block) -> None:
        if isinstance(block, Spacer):
            self._pending_space += block.height
        elif isinstance(block, Paragraph):
            self._add_paragraph(block)
        elif isinstance(block, ColumnSet):
            self._add_columns(block)
        elif isinstance(block, BulletedList):
            for item in block.items:
                self._add_bullet(item, block.glyph, block.indent)
        elif isinstance(block, Rule):
            self._add_rule(block)
        else:
            _log_debug(f"Skipping unknown block {type(block).__name__}")

    def _style(self, run: StyledRun, size: float, color) -> Tuple[str, float, object, bool]:
        """(font, size, color, underline) for a run inside a paragraph of the given size and color."""
        regular, bold, italic, bold_italic = self.fonts
        if run.bold and run.italics:
            font = bold_italic
        elif run.bold:
            font = bold
        elif run.italics:
            font = italic
        else:
            font = regular
        return (
            font,
            run.font_size if run.font_size is not None else size,
            _parse_hex_color(run.color) or color,
            run.decoration == "underline",
        )

    def _words(self, block: Paragraph) -> List[Optional[List[_Fragment]]]:
        """Split a paragraph into words of fragments; None marks a forced line break."""
        size = block.font_size if block.font_size is not None else self.font_size
        color = _parse_hex_color(block.color) or self.color

        words: List[Optional[List[_Fragment]]] = []
        current: List[_Fragment] = []
        for run in block.runs:
            if run.line_break:
                if current:
                    words.append(current)
                    current = []
                words.append(None)
                continue

            style = self._style(run, size, color)
            for piece in re.findall(r"\S+|\s+", run.text):
                if piece.isspace():
                    if current:
                        words.append(current)
                        current = []
                else:
                    current.append(_Fragment(piece, *style))
        if current:
            words.append(current)
        return words

    def _wrap(self, block: Paragraph, max_width: float) -> List[_Line]:
        lines = [_Line()]
        for word in self._words(block):
            if word is None:
                lines.append(_Line())
                continue

            line = lines[-1]
            space = 0.0
            if line.placed:
                last = line.placed[-1][1]
                space = pdfmetrics.stringWidth(" ", last.font, last.size)
            word_width = sum(fragment.width for fragment in word)
            if line.placed and line.width + space + word_width > max_width:
                line = _Line()
                lines.append(line)
                space = 0.0
            line.add(word, space)

        base_size = block.font_size if block.font_size is not None else self.font_size
        for line in lines:
            line.size = line.size or base_size
        return lines

    def _leading(self, line: _Line) -> float:
        return line.size * self.line_height

    def _place_line(self, line: _Line, x: float, width: float, alignment: str, top: float) -> None:
        """Queue one wrapped line whose box starts at `top`."""
        offset = 0.0
        if alignment == "center":
            offset = (width - line.width) / 2
        elif alignment == "right":
            offset = width - line.width
        baseline = top - line.size - (self._leading(line) - line.size) / 2

        page = self.pages[-1]
        for fragment_x, fragment in line.placed:
            left = x + offset + fragment_x
            page.append(_TextOp(left, baseline, fragment))
            if fragment.underline:
                page.append(
                    _LineOp(left, left + fragment.width, baseline - 1.5, max(0.5, fragment.size / 20), fragment.color)
                )

    def _place_lines(self, lines: List[_Line], x: float, width: float, alignment: str) -> None:
        for line in lines:
            leading = self._leading(line)
            self._ensure_room(leading)
            self._place_line(line, x, width, alignment, self._y)
            self._y -= leading

    def _add_paragraph(self, block: Paragraph) -> None:
        left_indent, _, right_indent, space_after = block.margin
        x = self.left + left_indent
        width = self.content_width - left_indent - right_indent

        lines = self._wrap(block, width)
        self._ensure_room(self._leading(lines[0]) + self._pending_space + block.margin[1])
        self._take_space(block.margin)
        self._place_lines(lines, x, width, block.alignment)
        self._y -= space_after

    def _add_columns(self, block: ColumnSet) -> None:
        right_lines = self._wrap(block.right, self.content_width / 2)
        right_width = max(line.width for line in right_lines)
        left_width = self.content_width - right_width - COLUMN_GAP
        left_lines = self._wrap(block.left, left_width)

        height = max(
            sum(self._leading(line) for line in left_lines),
            sum(self._leading(line) for line in right_lines),
        )
        self._ensure_room(height + self._pending_space + block.margin[1])
        self._take_space(block.margin)

        top = self._y
        for line in left_lines:
            self._place_line(line, self.left, left_width, "left", top)
            top -= self._leading(line)
        top = self._y
        right_x = self.page_width - self.right - right_width
        for line in right_lines:
            self._place_line(line, right_x, right_width, "right", top)
            top -= self._leading(line)

        self._y -= height + block.margin[3]

    def _add_bullet(self, item: Paragraph, glyph: str, indent: float) -> None:
        x = self.left + indent
        text_x = x + GLYPH_GAP
        lines = self._wrap(item, self.page_width - self.right - text_x)
        first = lines[0]

        self._ensure_room(self._leading(first) + self._pending_space + item.margin[1])
        self._take_space(item.margin)
        glyph_line = _Line()
        glyph_line.add([_Fragment(glyph, self.fonts[0], first.size, self.color)], 0.0)
        glyph_line.size = first.size
        self._place_line(glyph_line, x, GLYPH_GAP, "left", self._y)

        self._place_lines(lines, text_x, self.page_width - self.right - text_x, item.alignment)
        self._y -= item.margin[3]

    def _add_rule(self, block: Rule) -> None:
        offset = block.weight + 1 if block.style == "double" else 0.0
        self._ensure_room(self._pending_space + block.margin[1] + block.weight + offset)
        self._take_space(block.margin)

        color = _parse_hex_color(block.color) or self.color
        x2 = self.page_width - self.right
        self._y -= block.weight / 2
        self.pages[-1].append(_LineOp(self.left, x2, self._y, block.weight, color))
        if offset:
            self.pages[-1].append(_LineOp(self.left, x2, self._y - offset, block.weight, color))
        self._y -= block.weight / 2 + offset + block.margin[3]


def write_pdf(tree: DocumentTree, output_path: Path) -> ExportResult:
    """
    Write a document tree to a .pdf file.

    Args:
        tree: Document tree from emit()/render()
        output_path: Target file

    Returns:
        ExportResult

    Raises:
        DocumentExportError: If the document cannot be produced
    """
    return PdfWriter(tree).save(output_path)

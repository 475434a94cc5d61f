"""
Document Tree

Fixed-page content blocks for the print/export target, modelled on the block
vocabulary of page-oriented document generators: paragraphs of styled runs,
two-cell column sets for split rows, bulleted lists, rules and spacers, plus the
page setup (size and margins in points, default style, page numbers).

to_dict() produces a pdfmake-style document definition.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from folio.utils.naming import export_filename


@dataclass
class StyledRun:
    """
    Inline run. A line break is a run with line_break set and no text.

    Attributes:
        decoration: None or "underline"
        font_size: Points, or None to inherit the paragraph size
        color: Hex color, or None to inherit
    """

    text: str
    bold: bool = False
    italics: bool = False
    decoration: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[str] = None
    line_break: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"text": "\n" if self.line_break else self.text}
        if self.bold:
            result["bold"] = True
        if self.italics:
            result["italics"] = True
        if self.decoration:
            result["decoration"] = self.decoration
        if self.font_size is not None:
            result["fontSize"] = self.font_size
        if self.color:
            result["color"] = self.color
        return result


@dataclass
class Paragraph:
    """
    Block of runs.

    Attributes:
        alignment: "left", "center", "right" or "justify"
        margin: (left, top, right, bottom) in points
        role: What the paragraph represents ("name", "heading", "row", ...)
    """

    runs: List[StyledRun] = field(default_factory=list)
    alignment: str = "left"
    font_size: Optional[float] = None
    color: Optional[str] = None
    margin: Tuple[float, float, float, float] = (0, 0, 0, 0)
    role: str = ""

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "text": [run.to_dict() for run in self.runs],
            "alignment": self.alignment,
            "margin": list(self.margin),
        }
        if self.font_size is not None:
            result["fontSize"] = self.font_size
        if self.color:
            result["color"] = self.color
        return result


@dataclass
class ColumnSet:
    """Two cells on one line: left cell flush left, right cell flush right."""

    left: Paragraph
    right: Paragraph
    margin: Tuple[float, float, float, float] = (0, 0, 0, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [
                {"width": "*", **self.left.to_dict()},
                {"width": "auto", **self.right.to_dict()},
            ],
            "margin": list(self.margin),
        }


@dataclass
class BulletedList:
    items: List[Paragraph] = field(default_factory=list)
    glyph: str = "•"
    indent: float = 12
    margin: Tuple[float, float, float, float] = (0, 0, 0, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ul": [item.to_dict() for item in self.items],
            "markerGlyph": self.glyph,
            "margin": [self.indent, self.margin[1], self.margin[2], self.margin[3]],
        }


@dataclass
class Rule:
    """Horizontal divider spanning the content width."""

    weight: float = 1.0
    color: str = "#000000"
    style: str = "line"
    margin: Tuple[float, float, float, float] = (0, 0, 0, 0)

    def to_dict(self, width: float = 0) -> Dict[str, Any]:
        lines = [{"type": "line", "x1": 0, "y1": 0, "x2": width, "y2": 0, "lineWidth": self.weight, "lineColor": self.color}]
        if self.style == "double":
            offset = self.weight + 1
            lines.append({**lines[0], "y1": offset, "y2": offset})
        return {"canvas": lines, "margin": list(self.margin)}


@dataclass
class Spacer:
    height: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"text": "", "margin": [0, self.height, 0, 0]}


Block = Union[Paragraph, ColumnSet, BulletedList, Rule, Spacer]


def _paragraphs(block: Block) -> Iterator[Paragraph]:
    if isinstance(block, Paragraph):
        yield block
    elif isinstance(block, ColumnSet):
        yield block.left
        yield block.right
    elif isinstance(block, BulletedList):
        yield from block.items


@dataclass
class DocumentTree:
    """
    Complete document definition.

    Attributes:
        content: Blocks in reading order
        page_size: (width, height) in points
        page_margins: (left, top, right, bottom) in points
        default_style: Base font, size, line height and color
        page_numbers: {"show", "position", "format"}
        header_on_first_page_only: Whether the header repeats on later pages
        title: Subject display name, or None
    """

    content: List[Block] = field(default_factory=list)
    page_size: Tuple[float, float] = (612.0, 792.0)
    page_margins: Tuple[float, float, float, float] = (36.0, 36.0, 36.0, 36.0)
    default_style: Dict[str, Any] = field(default_factory=dict)
    page_numbers: Dict[str, Any] = field(default_factory=dict)
    header_on_first_page_only: bool = True
    title: Optional[str] = None

    @property
    def content_width(self) -> float:
        return self.page_size[0] - self.page_margins[0] - self.page_margins[2]

    def paragraphs(self) -> Iterator[Paragraph]:
        for block in self.content:
            yield from _paragraphs(block)

    def text_segments(self) -> Tuple[str, ...]:
        """Texts of all non-empty runs, in reading order."""
        return tuple(run.text for paragraph in self.paragraphs() for run in paragraph.runs if run.text)

    def filename(self, extension: str = "pdf") -> str:
        """Suggested download name, e.g. Jane_Doe_Resume.pdf."""
        return export_filename(self.title, extension)

    def to_dict(self) -> Dict[str, Any]:
        content = []
        for block in self.content:
            if isinstance(block, Rule):
                content.append(block.to_dict(self.content_width))
            else:
                content.append(block.to_dict())
        return {
            "pageSize": {"width": self.page_size[0], "height": self.page_size[1]},
            "pageMargins": list(self.page_margins),
            "defaultStyle": dict(self.default_style),
            "pageNumbers": dict(self.page_numbers),
            "headerOnFirstPageOnly": self.header_on_first_page_only,
            "info": {"title": self.filename("pdf")},
            "content": content,
        }

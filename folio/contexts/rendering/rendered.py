"""
Rendered Résumé Model

Target-independent result of composition: what text appears, in what order, with
which inline styles and alignment. Both output trees are emitted from this one
model, which is why their text content cannot diverge.

All types are frozen; a RenderedResume is safe to emit any number of times.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Segment:
    """
    A run of text with inline style.

    Attributes:
        text: The text; empty for line breaks
        bold / italic: Inline style from the field or from **bold** markup
        small: Render one step below body size
        separator: Literal separator text between two fields
        line_break: Forced line break inside rich text
        link: Value of a link-like field (email, linkedin, github, website)
    """

    text: str
    bold: bool = False
    italic: bool = False
    small: bool = False
    separator: bool = False
    line_break: bool = False
    link: bool = False


@dataclass(frozen=True)
class RenderedRow:
    """
    A composed template row.

    For a split space-between row, `segments` is the left group and `right` the
    right group; otherwise every segment is in `segments` and `right` is empty.
    """

    align: str
    segments: Tuple[Segment, ...]
    right: Tuple[Segment, ...] = ()

    @property
    def is_split(self) -> bool:
        return bool(self.right)

    def all_segments(self) -> Tuple[Segment, ...]:
        return self.segments + self.right

    @property
    def text(self) -> str:
        """Plain text of the row, groups joined by a single space."""
        left = "".join(s.text for s in self.segments)
        right = "".join(s.text for s in self.right)
        return f"{left} {right}" if right else left


@dataclass(frozen=True)
class TextBlock:
    """
    A paragraph of rich text.

    role is "paragraph" for body text and "label" for headings inside a section
    (e.g. skill category names in the categories layout).
    """

    segments: Tuple[Segment, ...]
    align: str = "left"
    role: str = "paragraph"


@dataclass(frozen=True)
class BulletList:
    """Bulleted lines; the glyph is presentation only and carries no content."""

    items: Tuple[Tuple[Segment, ...], ...]
    glyph: str = "•"
    indent: float = 12


ItemPart = Union[RenderedRow, TextBlock, BulletList]


@dataclass(frozen=True)
class ItemBlock:
    """One list item (an experience entry, a degree, a custom item)."""

    parts: Tuple[ItemPart, ...]
    index: int = 0
    spacing_before: float = 0
    spacing_after: float = 0


SectionBlock = Union[ItemBlock, TextBlock, BulletList]


@dataclass(frozen=True)
class SectionHeading:
    """
    Section heading with case transform already applied to title.

    Attributes:
        bold / underline: From the section header style
        divider: Draw a rule under the heading
        divider_style: "line" or "double"
        divider_weight: Rule thickness in points
        divider_color: Rule color (hex)
    """

    title: str
    bold: bool = True
    underline: bool = False
    divider: bool = True
    divider_style: str = "line"
    divider_weight: float = 1.0
    divider_color: str = "#2563eb"


@dataclass(frozen=True)
class RenderedSection:
    section_type: str
    heading: SectionHeading
    blocks: Tuple[SectionBlock, ...]
    section_id: Optional[str] = None

    @property
    def title(self) -> str:
        return self.heading.title

    @property
    def is_empty(self) -> bool:
        return not self.blocks


@dataclass(frozen=True)
class RenderedHeader:
    """Name line plus composed contact rows (absent rows already dropped)."""

    name: str
    name_align: str = "center"
    name_bold: bool = True
    contact_rows: Tuple[RenderedRow, ...] = ()


@dataclass(frozen=True)
class RenderedResume:
    """
    Complete composed résumé.

    Attributes:
        header: Name and contact rows
        sections: Rendered sections in template order (absent ones omitted)
        display_name: The subject's name, or None when the résumé has none
    """

    header: RenderedHeader
    sections: Tuple[RenderedSection, ...]
    display_name: Optional[str] = None

    def section_types(self) -> Tuple[str, ...]:
        return tuple(section.section_type for section in self.sections)

    def iter_segments(self) -> Iterator[Segment]:
        """Every segment in reading order (header, then each section)."""
        yield Segment(self.header.name)
        for row in self.header.contact_rows:
            yield from row.all_segments()
        for section in self.sections:
            yield Segment(section.heading.title)
            for block in section.blocks:
                yield from _block_segments(block)

    def text_segments(self) -> Tuple[str, ...]:
        """Ordered non-empty texts; both output trees must reproduce exactly this."""
        return tuple(segment.text for segment in self.iter_segments() if segment.text)


def _block_segments(block) -> Iterator[Segment]:
    if isinstance(block, ItemBlock):
        for part in block.parts:
            yield from _block_segments(part)
    elif isinstance(block, RenderedRow):
        yield from block.all_segments()
    elif isinstance(block, TextBlock):
        yield from block.segments
    elif isinstance(block, BulletList):
        for item in block.items:
            yield from item

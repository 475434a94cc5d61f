"""
Dual Target Emitter

Converts one RenderedResume into both output trees:
- preview: PreviewNode tree with CSS-like styles, for interactive painting
- document: DocumentTree of fixed-page blocks, for print/export

Each emitter walks the same rendered model once, in the same order, and only
chooses presentation primitives; neither resolves fields or composes rows. The
ordered text of the two trees is therefore identical (see EmitResult.content_matches).

Target-specific choices:
- split space-between rows become a two-column-row (preview) / two-cell ColumnSet (document)
- inline styles become CSS properties (preview) / run flags (document)
- list glyphs are a marker property (preview) / list glyph (document), never text
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List

from folio.contexts.rendering.document_tree import (
    BulletedList,
    ColumnSet,
    DocumentTree,
    Paragraph,
    Rule,
    Spacer,
    StyledRun,
)
from folio.contexts.rendering.logger import _log_debug, log_parity_mismatch, log_render_summary
from folio.contexts.rendering.preview_tree import (
    LIST,
    LIST_ITEM,
    RULE,
    TWO_COLUMN_ROW,
    PreviewNode,
    container,
    line_break,
    text_run,
)
from folio.contexts.rendering.render_config import RenderConfig, default_render_config
from folio.contexts.rendering.rendered import (
    BulletList,
    ItemBlock,
    RenderedResume,
    RenderedRow,
    RenderedSection,
    Segment,
    TextBlock,
)
from folio.contexts.rendering.section_order import compose_resume
from folio.contexts.templating.normalizer import normalize_template
from folio.contexts.templating.resume_data import ResumeData
from folio.contexts.templating.template_schema import TemplateSchema

JUSTIFY_CONTENT = {
    "left": "flex-start",
    "center": "center",
    "right": "flex-end",
    "space-between": "space-between",
}

# space-between rows that did not split render flush left
PARAGRAPH_ALIGNMENT = {
    "left": "left",
    "center": "center",
    "right": "right",
    "space-between": "left",
    "justify": "justify",
}


@dataclass
class EmitResult:
    """Both output trees for one render."""

    preview: PreviewNode
    document: DocumentTree

    def content_matches(self) -> bool:
        """True when both trees carry the same texts in the same order."""
        return self.preview.text_segments() == self.document.text_segments()


class PreviewEmitter:
    """Builds the preview tree from a RenderedResume."""

    def __init__(self, schema: TemplateSchema, config: RenderConfig):
        self.schema = schema
        self.config = config
        typography = schema.typography
        self.sizes = typography.sizes
        self.colors = typography.colors

    def emit(self, rendered: RenderedResume) -> PreviewNode:
        margins = self.schema.page.margins
        page = container(
            style={
                "fontFamily": self.config.font_stack(self.schema.typography.font_family),
                "fontSize": f"{self.sizes.body}pt",
                "color": self.colors.body,
                "lineHeight": self.schema.page.line_spacing,
                "width": f"{self.config.page_width}in",
                "paddingTop": f"{margins.top}in",
                "paddingRight": f"{margins.right}in",
                "paddingBottom": f"{margins.bottom}in",
                "paddingLeft": f"{margins.left}in",
            },
            role="page",
        )
        page.children.append(self._header(rendered))
        page.children.extend(self._section(section) for section in rendered.sections)
        return page

    def _run_style(self, segment: Segment) -> Dict[str, Any]:
        style: Dict[str, Any] = {}
        if segment.bold:
            style["fontWeight"] = "bold"
        if segment.italic:
            style["fontStyle"] = "italic"
        if segment.small:
            style["fontSize"] = f"{self.sizes.body - self.config.small_size_delta}pt"
        if segment.separator:
            style["color"] = self.colors.body
        if segment.link and self.schema.links.style != "plain":
            style["color"] = self.schema.links.color
            if self.schema.links.style == "underline":
                style["textDecoration"] = "underline"
        return style

    def _runs(self, segments) -> List[PreviewNode]:
        return [
            line_break() if segment.line_break else text_run(segment.text, self._run_style(segment))
            for segment in segments
        ]

    def _row(self, row: RenderedRow, font_size: float) -> PreviewNode:
        if row.is_split:
            return PreviewNode(
                TWO_COLUMN_ROW,
                style={"display": "flex", "justifyContent": "space-between", "fontSize": f"{font_size}pt"},
                children=[
                    container(*self._runs(row.segments), role="left"),
                    container(*self._runs(row.right), style={"textAlign": "right"}, role="right"),
                ],
                role="row",
            )
        return container(
            *self._runs(row.segments),
            style={
                "display": "flex",
                "justifyContent": JUSTIFY_CONTENT.get(row.align, "flex-start"),
                "flexWrap": "wrap",
                "fontSize": f"{font_size}pt",
            },
            role="row",
        )

    def _header(self, rendered: RenderedResume) -> PreviewNode:
        header = rendered.header
        name = container(
            text_run(header.name),
            style={
                "fontSize": f"{self.sizes.name}pt",
                "fontWeight": "bold" if header.name_bold else "normal",
                "color": self.colors.name,
                "textAlign": header.name_align,
                "marginBottom": f"{self.config.name_bottom}pt",
            },
            role="name",
        )
        contact = [
            container(
                self._row(row, self.sizes.body),
                style={"color": self.colors.body, "textAlign": header.name_align},
                role="contact",
            )
            for row in header.contact_rows
        ]
        return container(name, *contact, role="header")

    def _heading(self, section: RenderedSection) -> List[PreviewNode]:
        heading = section.heading
        nodes = [
            container(
                text_run(heading.title),
                style={
                    "fontSize": f"{self.sizes.section_header}pt",
                    "fontWeight": "bold" if heading.bold else "normal",
                    "textDecoration": "underline" if heading.underline else "none",
                    "color": self.colors.headers,
                },
                role="heading",
            )
        ]
        if heading.divider:
            border = "double" if heading.divider_style == "double" else "solid"
            nodes.append(
                PreviewNode(
                    RULE,
                    style={
                        "borderTop": f"{heading.divider_weight}pt {border} {heading.divider_color}",
                        "marginBottom": f"{self.config.heading_bottom}pt",
                    },
                    role="divider",
                )
            )
        return nodes

    def _text_block(self, block: TextBlock) -> PreviewNode:
        style = {"textAlign": block.align}
        if block.role == "label":
            style["fontWeight"] = "bold"
        return container(*self._runs(block.segments), style=style, role=block.role)

    def _bullets(self, block: BulletList) -> PreviewNode:
        item_style = {"overflowWrap": "break-word" if self.schema.experience.wrap_long_text else "normal"}
        return PreviewNode(
            LIST,
            style={"listStyle": "none", "marginLeft": f"{block.indent}pt", "paddingLeft": 0},
            children=[
                PreviewNode(LIST_ITEM, style=dict(item_style), children=self._runs(item), marker=block.glyph)
                for item in block.items
            ],
            role="bullets",
        )

    def _item(self, block: ItemBlock) -> PreviewNode:
        children = []
        row_index = 0
        for part in block.parts:
            if isinstance(part, RenderedRow):
                size = self.sizes.item_title if row_index == 0 else self.sizes.body
                children.append(self._row(part, size))
                row_index += 1
            else:
                children.append(self._block(part))
        return container(
            *children,
            style={
                "marginTop": f"{block.spacing_before if block.index > 0 else 0}pt",
                "marginBottom": f"{block.spacing_after}pt",
            },
            role="item",
        )

    def _block(self, block) -> PreviewNode:
        if isinstance(block, ItemBlock):
            return self._item(block)
        if isinstance(block, BulletList):
            return self._bullets(block)
        return self._text_block(block)

    def _section(self, section: RenderedSection) -> PreviewNode:
        return container(
            *self._heading(section),
            *(self._block(block) for block in section.blocks),
            style={"marginTop": f"{self.config.section_top}pt"},
            role="section",
        )


class DocumentEmitter:
    """Builds the fixed-page document tree from a RenderedResume."""

    def __init__(self, schema: TemplateSchema, config: RenderConfig):
        self.schema = schema
        self.config = config
        self.sizes = schema.typography.sizes
        self.colors = schema.typography.colors

    def emit(self, rendered: RenderedResume) -> DocumentTree:
        margins = self.schema.page.margins
        to_points = self.config.to_points
        document = DocumentTree(
            page_size=(to_points(self.config.page_width), to_points(self.config.page_height)),
            page_margins=(
                to_points(margins.left),
                to_points(margins.top),
                to_points(margins.right),
                to_points(margins.bottom),
            ),
            default_style={
                "font": self.schema.typography.font_family,
                "fontSize": self.sizes.body,
                "lineHeight": self.schema.page.line_spacing,
                "color": self.colors.body,
            },
            page_numbers={
                "show": self.schema.page_numbers.show,
                "position": self.schema.page_numbers.position,
                "format": self.schema.page_numbers.format,
            },
            header_on_first_page_only=self.schema.header_on_first_page_only,
            title=rendered.display_name,
        )

        self._header(rendered, document.content)
        for section in rendered.sections:
            self._section(section, document.content)
        return document

    def _run(self, segment: Segment) -> StyledRun:
        if segment.line_break:
            return StyledRun("", line_break=True)

        run = StyledRun(
            segment.text,
            bold=segment.bold,
            italics=segment.italic,
            font_size=self.sizes.body - self.config.small_size_delta if segment.small else None,
        )
        if segment.separator:
            run.color = self.colors.body
        if segment.link and self.schema.links.style != "plain":
            run.color = self.schema.links.color
            if self.schema.links.style == "underline":
                run.decoration = "underline"
        return run

    def _paragraph(self, segments, alignment: str = "left", font_size: float = None, role: str = "") -> Paragraph:
        return Paragraph(
            runs=[self._run(segment) for segment in segments],
            alignment=PARAGRAPH_ALIGNMENT.get(alignment, "left"),
            font_size=font_size,
            role=role,
        )

    def _row(self, row: RenderedRow, font_size: float):
        if row.is_split:
            return ColumnSet(
                left=self._paragraph(row.segments, "left", font_size, role="left"),
                right=self._paragraph(row.right, "right", font_size, role="right"),
            )
        return self._paragraph(row.segments, row.align, font_size, role="row")

    def _header(self, rendered: RenderedResume, content: list) -> None:
        header = rendered.header
        content.append(
            Paragraph(
                runs=[StyledRun(header.name, bold=header.name_bold)],
                alignment=PARAGRAPH_ALIGNMENT.get(header.name_align, "center"),
                font_size=self.sizes.name,
                color=self.colors.name,
                margin=(0, 0, 0, self.config.name_bottom),
                role="name",
            )
        )
        for row in header.contact_rows:
            content.append(self._row(row, self.sizes.body))

    def _section(self, section: RenderedSection, content: list) -> None:
        heading = section.heading
        content.append(
            Paragraph(
                runs=[
                    StyledRun(
                        heading.title,
                        bold=heading.bold,
                        decoration="underline" if heading.underline else None,
                    )
                ],
                font_size=self.sizes.section_header,
                color=self.colors.headers,
                margin=(0, self.config.section_top, 0, 0 if heading.divider else self.config.heading_bottom),
                role="heading",
            )
        )
        if heading.divider:
            content.append(
                Rule(
                    weight=heading.divider_weight,
                    color=heading.divider_color,
                    style=heading.divider_style,
                    margin=(0, 2, 0, self.config.heading_bottom),
                )
            )
        for block in section.blocks:
            self._block(block, content)

    def _block(self, block, content: list) -> None:
        if isinstance(block, ItemBlock):
            self._item(block, content)
        elif isinstance(block, BulletList):
            content.append(
                BulletedList(
                    items=[self._paragraph(item, role="bullet") for item in block.items],
                    glyph=block.glyph,
                    indent=block.indent,
                )
            )
        else:
            content.append(self._paragraph(block.segments, block.align, role=block.role))

    def _item(self, block: ItemBlock, content: list) -> None:
        if block.index > 0 and block.spacing_before:
            content.append(Spacer(block.spacing_before))
        row_index = 0
        for part in block.parts:
            if isinstance(part, RenderedRow):
                size = self.sizes.item_title if row_index == 0 else self.sizes.body
                content.append(self._row(part, size))
                row_index += 1
            else:
                self._block(part, content)
        if block.spacing_after:
            content.append(Spacer(block.spacing_after))


def emit(rendered: RenderedResume, schema: TemplateSchema, config: RenderConfig = None) -> EmitResult:
    """
    Emit both output trees from one composed résumé.

    Args:
        rendered: Result of compose_resume()
        schema: The (normalized) template it was composed with
        config: Ambient tables (defaults to the loaded render config)

    Returns:
        EmitResult with the preview and document trees
    """
    config = config or default_render_config()
    return EmitResult(
        preview=PreviewEmitter(schema, config).emit(rendered),
        document=DocumentEmitter(schema, config).emit(rendered),
    )


def render(schema: TemplateSchema, data: ResumeData, config: RenderConfig = None) -> EmitResult:
    """
    Render a résumé with a template: normalize, compose, emit.

    Args:
        schema: Template (normalized here; not modified)
        data: Résumé content (not modified)
        config: Ambient tables (defaults to the loaded render config)

    Returns:
        EmitResult with both trees

    Example:
        >>> result = render(get_default_template(), ResumeData.from_dict(document))
        >>> result.content_matches()
        True
    """
    started = time.perf_counter()
    config = config or default_render_config()
    normalized = normalize_template(schema)

    rendered = compose_resume(normalized, data, config)
    result = emit(rendered, normalized, config)

    log_render_summary(normalized.id or "<unsaved>", rendered, time.perf_counter() - started)
    if not result.content_matches():
        log_parity_mismatch(list(result.preview.text_segments()), list(result.document.text_segments()))
    else:
        _log_debug(f"Both targets carry {len(result.preview.text_segments())} text segment(s)")
    return result

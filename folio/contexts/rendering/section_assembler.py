"""
Section Assembler

Builds one RenderedSection from a section type, its content and the template:
a heading plus one block per item (experience, education, custom), a paragraph
(summary) or a skills layout.

Absence propagates upward: an item whose rows, description and bullets are all
absent contributes no block, and a section with no blocks is absent when the
template hides empty sections (otherwise it keeps its heading with an empty body).

Skills layouts (the layout only groups skills into blocks):
- key-value: one bullet per category, "Category: " in bold then the joined skills
- categories: per category a bold label paragraph, then the joined skills
- bullets: one bullet per skill
- inline: every skill in a single paragraph
A flat skills list (no categories) uses the same layouts; under key-value each
line is its own bullet, since flat lines often carry their own **Category**: markup.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from folio.contexts.rendering.field_resolver import FieldContext, resolve, resolve_rich, rich_segments
from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.rendered import (
    BulletList,
    ItemBlock,
    RenderedHeader,
    RenderedSection,
    Segment,
    SectionHeading,
    TextBlock,
)
from folio.contexts.rendering.row_compositor import compose_rows
from folio.contexts.templating.resume_data import (
    CustomItem,
    EducationItem,
    ExperienceItem,
    ResumeData,
)
from folio.contexts.templating.template_schema import TemplateRow, TemplateSchema
from folio.contexts.templating.vocabulary import CustomField, EducationField, SectionType
from folio.utils.text_processing import humanize_key


def _references(rows: Sequence[TemplateRow], field_name: str) -> bool:
    return any(f.name == field_name for row in rows for f in row.fields)


def build_heading(title: str, schema: TemplateSchema) -> SectionHeading:
    """Apply the template's section header style and divider settings to a title."""
    headers = schema.section_headers
    return SectionHeading(
        title=title.upper() if "uppercase" in headers.style else title,
        bold="bold" in headers.style,
        underline=headers.style == "underline",
        divider=headers.divider and headers.divider_style != "none",
        divider_style=headers.divider_style,
        divider_weight=headers.divider_weight,
        divider_color=headers.divider_color or schema.typography.colors.accent,
    )


def _experience_block(item: ExperienceItem, index: int, schema: TemplateSchema, context: FieldContext):
    config = schema.experience
    parts: List[Any] = list(compose_rows(config.rows, item, context))

    bullets = tuple(segments for segments in (rich_segments(b) for b in item.bullets) if segments)
    if bullets:
        parts.append(BulletList(items=bullets, glyph=config.bullet_style, indent=config.bullet_indent))

    if not parts:
        return None
    return ItemBlock(
        parts=tuple(parts),
        index=index,
        spacing_before=config.spacing_before,
        spacing_after=config.spacing_after,
    )


def _education_block(item: EducationItem, index: int, schema: TemplateSchema, context: FieldContext):
    config = schema.education
    parts: List[Any] = list(compose_rows(config.rows, item, context))

    # GPA gets its own line when no row places it
    if not _references(config.rows, EducationField.GPA.value):
        gpa = resolve(EducationField.GPA.value, item, context)
        if gpa is not None:
            parts.append(TextBlock(segments=(Segment(gpa),)))

    if not parts:
        return None
    return ItemBlock(
        parts=tuple(parts),
        index=index,
        spacing_before=config.spacing_before,
        spacing_after=config.spacing_after,
    )


def _custom_block(item: CustomItem, index: int, schema: TemplateSchema, context: FieldContext):
    rows = schema.custom_sections.default_layout
    parts: List[Any] = list(compose_rows(rows, item, context))

    if not _references(rows, CustomField.DESCRIPTION.value):
        description = resolve_rich(CustomField.DESCRIPTION.value, item, context)
        if description:
            parts.append(TextBlock(segments=description))

    if not parts:
        return None
    return ItemBlock(parts=tuple(parts), index=index)


ITEM_BUILDERS = {
    SectionType.EXPERIENCE.value: _experience_block,
    SectionType.EDUCATION.value: _education_block,
    SectionType.CUSTOM.value: _custom_block,
}


def _item_blocks(section_type: str, items: Iterable[Any], schema: TemplateSchema, context: FieldContext):
    build = ITEM_BUILDERS[section_type]
    blocks = []
    for item in items or ():
        block = build(item, len(blocks), schema, context)
        if block is None:
            _log_debug(f"Skipping empty {section_type} item")
            continue
        blocks.append(block)
    return blocks


def _joined(skills: Sequence[str], separator: str) -> Tuple[Segment, ...]:
    return rich_segments(separator.join(skills))


def _skills_blocks(content: Any, schema: TemplateSchema) -> List[Any]:
    config = schema.skills
    glyph = schema.experience.bullet_style
    indent = schema.experience.bullet_indent

    if isinstance(content, Mapping):
        categories = [(humanize_key(str(name)), list(skills)) for name, skills in content.items() if skills]
        flat = [skill for _, skills in categories for skill in skills]
    else:
        categories = []
        flat = [skill for skill in (content or ()) if isinstance(skill, str) and skill.strip()]

    if not flat:
        return []

    one_per_line = config.layout == "bullets" or (config.layout == "key-value" and not categories)
    if one_per_line:
        items = tuple(s for s in (rich_segments(skill) for skill in flat) if s)
        return [BulletList(items=items, glyph=glyph, indent=indent)]

    if config.layout == "inline" or not categories:
        return [TextBlock(segments=_joined(flat, config.separator))]

    if config.layout == "categories":
        blocks: List[Any] = []
        for label, skills in categories:
            if config.show_category_names:
                blocks.append(TextBlock(segments=(Segment(label, bold=True),), role="label"))
            blocks.append(TextBlock(segments=_joined(skills, config.separator)))
        return blocks

    # key-value
    items = []
    for label, skills in categories:
        label_segments = (Segment(f"{label}: ", bold=True),) if config.show_category_names else ()
        items.append(label_segments + _joined(skills, config.separator))
    return [BulletList(items=tuple(items), glyph=glyph, indent=indent)]


def assemble(
    section_type: str,
    content: Any,
    schema: TemplateSchema,
    context: FieldContext = None,
    title: Optional[str] = None,
    section_id: Optional[str] = None,
) -> Optional[RenderedSection]:
    """
    Assemble one section.

    Args:
        section_type: "summary", "skills", "experience", "education" or "custom"
        content: Summary text, skills (category mapping or flat list), or the
                 section's items in stored order
        schema: Normalized template
        context: Field resolution context (defaults from schema)
        title: Heading text; defaults to the configured title for section_type
        section_id: Custom section id, carried through for callers

    Returns:
        RenderedSection, or None when the section has nothing to show and the
        template hides empty sections (or section_type is unknown)
    """
    context = context or FieldContext.from_schema(schema)

    if section_type == SectionType.SUMMARY.value:
        summary = rich_segments(content if isinstance(content, str) else "")
        blocks = [TextBlock(segments=summary, align=schema.summary.align)] if summary else []
    elif section_type == SectionType.SKILLS.value:
        blocks = _skills_blocks(content, schema)
    elif section_type in ITEM_BUILDERS:
        blocks = _item_blocks(section_type, content, schema, context)
    else:
        _log_debug(f"Unknown section type {section_type!r}")
        return None

    if not blocks and schema.hide_empty_sections:
        _log_debug(f"Hiding empty {section_type} section")
        return None

    heading_title = title or context.config.section_title(section_type)
    return RenderedSection(
        section_type=section_type,
        heading=build_heading(heading_title, schema),
        blocks=tuple(blocks),
        section_id=section_id,
    )


def assemble_header(schema: TemplateSchema, data: ResumeData, context: FieldContext = None) -> RenderedHeader:
    """
    Build the résumé header: the name line and the composed contact rows.

    A résumé without a name shows the configured placeholder. Uppercase name
    styles are applied to the text so both targets show the same characters.
    """
    context = context or FieldContext.from_schema(schema)
    header = schema.header

    name = data.display_name or context.config.placeholder_name
    if "uppercase" in header.name_style:
        name = name.upper()

    return RenderedHeader(
        name=name,
        name_align=header.name_align,
        name_bold="bold" in header.name_style,
        contact_rows=compose_rows(header.contact_rows, data.personal_info, context),
    )

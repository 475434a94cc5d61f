"""
Row Compositor

Turns one TemplateRow plus one entity into a RenderedRow: fields are resolved in
row order, absent fields are skipped entirely, and each resolved field is followed
by its own separator unless it is the last resolved field of its group.

space-between rows split into a left and a right group:
- one resolved field: flush left, no split
- two or more: the last resolved field is the right group, everything before it
  the left group. The separator of the last field of the left group is not
  emitted, the gap between the groups takes its place.
"""

from typing import Any, List, Optional, Sequence, Tuple

from folio.contexts.rendering.field_resolver import FieldContext, resolve
from folio.contexts.rendering.rendered import RenderedRow, Segment
from folio.contexts.templating.template_schema import TemplateField, TemplateRow

SPACE_BETWEEN = "space-between"
LINK_FIELDS = ("email", "linkedin", "github", "website")


def _group_segments(resolved: Sequence[Tuple[TemplateField, str]]) -> Tuple[Segment, ...]:
    segments: List[Segment] = []
    last_index = len(resolved) - 1
    for index, (template_field, value) in enumerate(resolved):
        segments.append(
            Segment(
                value,
                bold=template_field.style == "bold",
                italic=template_field.style == "italic",
                small=template_field.font_size == "small",
                link=template_field.name in LINK_FIELDS,
            )
        )
        if index < last_index and template_field.separator:
            segments.append(Segment(template_field.separator, separator=True))
    return tuple(segments)


def resolve_row_fields(row: TemplateRow, entity: Any, context: FieldContext = None) -> List[Tuple[TemplateField, str]]:
    """Resolve a row's fields in order, keeping only the present ones."""
    resolved = []
    for template_field in row.fields:
        value = resolve(template_field.name, entity, context)
        if value is not None:
            resolved.append((template_field, value))
    return resolved


def compose(row: TemplateRow, entity: Any, context: FieldContext = None) -> Optional[RenderedRow]:
    """
    Compose a template row for one entity.

    Args:
        row: Template row (field order is rendering order)
        entity: PersonalInfo, ExperienceItem, EducationItem or CustomItem
        context: Field resolution context

    Returns:
        RenderedRow, or None when every field is absent

    Example:
        >>> row = TemplateRow([TemplateField("email", separator=" | "),
        ...                    TemplateField("phone", separator=" | "),
        ...                    TemplateField("location")])
        >>> compose(row, PersonalInfo(email="a@x.com", location="Austin, TX")).text
        'a@x.com | Austin, TX'
    """
    resolved = resolve_row_fields(row, entity, context)
    if not resolved:
        return None

    if row.align == SPACE_BETWEEN and len(resolved) >= 2:
        return RenderedRow(
            align=row.align,
            segments=_group_segments(resolved[:-1]),
            right=_group_segments(resolved[-1:]),
        )

    return RenderedRow(align=row.align, segments=_group_segments(resolved))


def compose_rows(rows: Sequence[TemplateRow], entity: Any, context: FieldContext = None) -> Tuple[RenderedRow, ...]:
    """Compose every row for one entity, dropping absent rows."""
    composed = (compose(row, entity, context) for row in rows)
    return tuple(row for row in composed if row is not None)

"""
Template Editing Operations

The edits the template builder offers, as copy-on-write functions: each takes a
schema and returns a new one, leaving its input untouched. Row owners are
"header" (contact rows), "experience", "education" and "custom".

Field order inside a row is the rendering order; only move_field changes it.

Example:
    >>> schema = add_field(schema, "header", row_index=0)
    >>> schema = update_field(schema, "header", 0, 4, separator=" | ")
    >>> schema = move_section(schema, "skills", "down")
"""

from typing import List

from folio.contexts.templating.template_schema import (
    TemplateField,
    TemplateRow,
    TemplateSchema,
    create_empty_row,
    create_field,
)
from folio.contexts.templating.vocabulary import SECTION_TYPES, vocabulary_for

EDITABLE_FIELD_ATTRIBUTES = ("name", "style", "separator", "font_size")


def _edit(schema: TemplateSchema, owner: str):
    """Copy the schema and return (copy, the copy's live rows for owner)."""
    edited = schema.copy()
    return edited, edited.rows_for(owner)


def _row(rows: List[TemplateRow], row_index: int) -> TemplateRow:
    if not 0 <= row_index < len(rows):
        raise IndexError(f"Row index {row_index} out of range (0-{len(rows) - 1})")
    return rows[row_index]


def _field_index(row: TemplateRow, field_index: int) -> int:
    if not 0 <= field_index < len(row.fields):
        raise IndexError(f"Field index {field_index} out of range (0-{len(row.fields) - 1})")
    return field_index


def add_row(schema: TemplateSchema, owner: str) -> TemplateSchema:
    """Append an empty left-aligned row."""
    edited, rows = _edit(schema, owner)
    rows.append(create_empty_row())
    return edited


def remove_row(schema: TemplateSchema, owner: str, row_index: int) -> TemplateSchema:
    """Remove a row. The last remaining row is never removed."""
    edited, rows = _edit(schema, owner)
    _row(rows, row_index)
    if len(rows) > 1:
        del rows[row_index]
    return edited


def set_row_align(schema: TemplateSchema, owner: str, row_index: int, align: str) -> TemplateSchema:
    edited, rows = _edit(schema, owner)
    _row(rows, row_index).align = align
    return edited


def add_field(schema: TemplateSchema, owner: str, row_index: int) -> TemplateSchema:
    """
    Append the first vocabulary field the row does not use yet.

    When every vocabulary field is already in the row, the schema is returned
    unchanged (as a copy).
    """
    edited, rows = _edit(schema, owner)
    row = _row(rows, row_index)
    used = {f.name for f in row.fields}
    available = [name for name in vocabulary_for(owner) if name not in used]
    if available:
        row.fields.append(create_field(available[0]))
    return edited


def insert_field(
    schema: TemplateSchema, owner: str, row_index: int, field_index: int, template_field: TemplateField
) -> TemplateSchema:
    """Insert a copy of template_field before position field_index (clamped to the row)."""
    edited, rows = _edit(schema, owner)
    row = _row(rows, row_index)
    position = max(0, min(field_index, len(row.fields)))
    row.fields.insert(
        position,
        TemplateField(
            name=template_field.name,
            style=template_field.style,
            separator=template_field.separator,
            font_size=template_field.font_size,
        ),
    )
    return edited


def remove_field(schema: TemplateSchema, owner: str, row_index: int, field_index: int) -> TemplateSchema:
    edited, rows = _edit(schema, owner)
    row = _row(rows, row_index)
    del row.fields[_field_index(row, field_index)]
    return edited


def move_field(
    schema: TemplateSchema, owner: str, row_index: int, from_index: int, to_index: int
) -> TemplateSchema:
    """Move a field to a new position in its row; other fields keep their relative order."""
    edited, rows = _edit(schema, owner)
    row = _row(rows, row_index)
    moved = row.fields.pop(_field_index(row, from_index))
    row.fields.insert(max(0, min(to_index, len(row.fields))), moved)
    return edited


def update_field(schema: TemplateSchema, owner: str, row_index: int, field_index: int, **changes) -> TemplateSchema:
    """
    Change attributes of one field in place (its position is kept).

    Args:
        changes: Any of name, style, separator, font_size

    Raises:
        ValueError: For any other attribute name
    """
    unknown = sorted(set(changes) - set(EDITABLE_FIELD_ATTRIBUTES))
    if unknown:
        raise ValueError(f"Unknown field attribute(s): {unknown}. Editable: {list(EDITABLE_FIELD_ATTRIBUTES)}")

    edited, rows = _edit(schema, owner)
    row = _row(rows, row_index)
    template_field = row.fields[_field_index(row, field_index)]
    for attribute, value in changes.items():
        setattr(template_field, attribute, value)
    return edited


def move_section(schema: TemplateSchema, section: str, direction: str) -> TemplateSchema:
    """
    Swap a section with its neighbour in the section order.

    Moving the first section up, the last one down, or a section that is not in
    the order is a no-op.

    Args:
        section: Section type in the order
        direction: "up" or "down"
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Direction must be 'up' or 'down', got {direction!r}")

    edited = schema.copy()
    order = edited.section_order
    if section not in order:
        return edited

    index = order.index(section)
    target = index - 1 if direction == "up" else index + 1
    if 0 <= target < len(order):
        order[index], order[target] = order[target], order[index]
    return edited


def toggle_section(schema: TemplateSchema, section: str) -> TemplateSchema:
    """Hide a section by removing it from the order, or show it by appending it."""
    if section not in SECTION_TYPES:
        raise ValueError(f"Unknown section type {section!r}. Known: {list(SECTION_TYPES)}")

    edited = schema.copy()
    if section in edited.section_order:
        edited.section_order = [s for s in edited.section_order if s != section]
    else:
        edited.section_order.append(section)
    return edited


def hidden_sections(schema: TemplateSchema) -> List[str]:
    """Section types not in the order, i.e. the ones toggle_section would add."""
    return [section for section in SECTION_TYPES if section not in schema.section_order]

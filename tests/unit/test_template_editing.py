"""Unit tests for the template builder's copy-on-write edits."""

import pytest

from folio.contexts.templating import TemplateField
from folio.contexts.templating.template_editing import (
    add_field,
    add_row,
    hidden_sections,
    insert_field,
    move_field,
    move_section,
    remove_field,
    remove_row,
    set_row_align,
    toggle_section,
    update_field,
)


def _names(schema, owner, row_index=0):
    return [f.name for f in schema.rows_for(owner)[row_index].fields]


@pytest.mark.unit
def test_edits_never_touch_the_input(ats_template):
    before = ats_template.to_dict()

    add_row(ats_template, "header")
    remove_field(ats_template, "header", 0, 0)
    update_field(ats_template, "experience", 0, 0, style="italic")
    move_section(ats_template, "skills", "down")
    toggle_section(ats_template, "summary")

    assert ats_template.to_dict() == before


@pytest.mark.unit
def test_add_and_remove_rows(ats_template):
    edited = add_row(ats_template, "education")

    assert len(edited.education.rows) == 3
    assert edited.education.rows[-1].fields == []
    assert edited.education.rows[-1].align == "left"

    assert len(remove_row(edited, "education", 2).education.rows) == 2


@pytest.mark.unit
def test_last_row_is_kept(ats_template):
    assert len(ats_template.header.contact_rows) == 1
    assert len(remove_row(ats_template, "header", 0).header.contact_rows) == 1


@pytest.mark.unit
def test_bad_row_index(ats_template):
    with pytest.raises(IndexError):
        remove_row(ats_template, "header", 5)


@pytest.mark.unit
def test_set_row_align(ats_template):
    assert set_row_align(ats_template, "header", 0, "space-between").header.contact_rows[0].align == "space-between"


@pytest.mark.unit
def test_add_field_picks_first_unused_name(ats_template):
    edited = add_field(ats_template, "header", 0)

    assert _names(edited, "header") == ["email", "phone", "location", "linkedin", "github"]
    assert _names(add_field(edited, "header", 0), "header")[-1] == "website"


@pytest.mark.unit
def test_add_field_when_vocabulary_is_exhausted(ats_template):
    edited = add_field(add_field(ats_template, "header", 0), "header", 0)
    assert _names(add_field(edited, "header", 0), "header") == _names(edited, "header")


@pytest.mark.unit
def test_insert_field_clamps_position(ats_template):
    edited = insert_field(ats_template, "experience", 0, 99, TemplateField("location", "italic"))
    assert _names(edited, "experience") == ["title", "dates", "location"]

    edited = insert_field(ats_template, "experience", 0, -4, TemplateField("company"))
    assert _names(edited, "experience") == ["company", "title", "dates"]


@pytest.mark.unit
def test_move_field_changes_order(ats_template):
    edited = move_field(ats_template, "header", 0, 0, 2)
    assert _names(edited, "header") == ["phone", "location", "email", "linkedin"]


@pytest.mark.unit
def test_remove_field(ats_template):
    assert _names(remove_field(ats_template, "header", 0, 1), "header") == ["email", "location", "linkedin"]
    with pytest.raises(IndexError):
        remove_field(ats_template, "header", 0, 4)


@pytest.mark.unit
def test_update_field_keeps_position(ats_template):
    edited = update_field(ats_template, "header", 0, 1, separator=" • ", style="bold", font_size="small")
    template_field = edited.header.contact_rows[0].fields[1]

    assert template_field.name == "phone"
    assert (template_field.separator, template_field.style, template_field.font_size) == (" • ", "bold", "small")


@pytest.mark.unit
def test_update_field_rejects_unknown_attributes(ats_template):
    with pytest.raises(ValueError, match="color"):
        update_field(ats_template, "header", 0, 0, color="#fff")


@pytest.mark.unit
def test_move_section(ats_template):
    assert move_section(ats_template, "skills", "up").section_order == ["skills", "summary", "experience", "education"]
    assert move_section(ats_template, "skills", "down").section_order == ["summary", "experience", "skills", "education"]


@pytest.mark.unit
def test_move_section_edges_are_no_ops(ats_template):
    order = ats_template.section_order

    assert move_section(ats_template, "summary", "up").section_order == order
    assert move_section(ats_template, "education", "down").section_order == order
    assert move_section(ats_template, "custom", "up").section_order == order


@pytest.mark.unit
def test_move_section_bad_direction(ats_template):
    with pytest.raises(ValueError):
        move_section(ats_template, "skills", "left")


@pytest.mark.unit
def test_toggle_section(ats_template):
    hidden = toggle_section(ats_template, "summary")
    assert hidden.section_order == ["skills", "experience", "education"]
    assert hidden_sections(hidden) == ["summary", "custom"]

    shown = toggle_section(hidden, "summary")
    assert shown.section_order == ["skills", "experience", "education", "summary"]

    with pytest.raises(ValueError):
        toggle_section(ats_template, "projects")

"""Unit tests for template normalization."""

import pytest

from folio.contexts.templating import (
    TemplateField,
    TemplateRow,
    TemplateSchema,
    normalize_template,
    normalize_template_with_report,
)


@pytest.fixture
def schema():
    return TemplateSchema(id="t1", name="Mine", created_by="user-1")


@pytest.mark.unit
def test_default_template_needs_no_changes(ats_template):
    report = normalize_template_with_report(ats_template)

    assert not report.changed
    assert report.template == ats_template


@pytest.mark.unit
def test_input_is_not_modified(schema):
    schema.typography.sizes.body = -3
    normalize_template(schema)

    assert schema.typography.sizes.body == -3


@pytest.mark.unit
@pytest.mark.parametrize("bad_size", [-3, 0, "big", None, "nan", "inf", float("inf"), float("nan"), 10**400])
def test_bad_font_sizes_fall_back(schema, bad_size):
    schema.typography.sizes.body = bad_size
    assert normalize_template(schema).typography.sizes.body == 11


@pytest.mark.unit
def test_numeric_strings_are_accepted(schema):
    schema.typography.sizes.name = "20"
    assert normalize_template(schema).typography.sizes.name == 20.0


@pytest.mark.unit
def test_zero_spacing_and_margins_are_allowed(schema):
    schema.experience.spacing_before = 0
    schema.page.margins.left = 0

    normalized = normalize_template(schema)

    assert normalized.experience.spacing_before == 0
    assert normalized.page.margins.left == 0


@pytest.mark.unit
def test_negative_margin_falls_back(schema):
    schema.page.margins.top = -1
    assert normalize_template(schema).page.margins.top == 0.5


@pytest.mark.unit
def test_non_finite_spacing_falls_back(schema):
    schema.page.margins.top = "-inf"
    schema.experience.spacing_after = float("nan")

    normalized = normalize_template(schema)

    assert normalized.page.margins.top == 0.5
    assert normalized.experience.spacing_after == 8


@pytest.mark.unit
@pytest.mark.parametrize(
    "attribute, value, expected",
    [
        ("date_format", "DD/MM/YYYY", "MMM YYYY"),
        ("date_format", "YYYY", "YYYY"),
    ],
)
def test_date_format_vocabulary(schema, attribute, value, expected):
    setattr(schema, attribute, value)
    assert getattr(normalize_template(schema), attribute) == expected


@pytest.mark.unit
def test_vocabulary_values_fall_back(schema):
    schema.header.name_align = "justify"
    schema.section_headers.style = "shouting"
    schema.section_headers.divider_style = "dotted"
    schema.experience.bullet_style = "*"
    schema.skills.layout = "grid"
    schema.links.style = "blink"
    schema.page_numbers.format = "X/Y"

    normalized = normalize_template(schema)

    assert normalized.header.name_align == "center"
    assert normalized.section_headers.style == "bold-uppercase"
    assert normalized.section_headers.divider_style == "line"
    assert normalized.experience.bullet_style == "•"
    assert normalized.skills.layout == "key-value"
    assert normalized.links.style == "color"
    assert normalized.page_numbers.format == "Page X"


@pytest.mark.unit
def test_extended_bullet_glyphs_are_kept(schema):
    schema.experience.bullet_style = "➤"
    assert normalize_template(schema).experience.bullet_style == "➤"


@pytest.mark.unit
def test_row_and_field_values_fall_back(schema):
    schema.experience.rows = [
        TemplateRow(
            fields=[TemplateField("title", style="underline", font_size="huge")],
            align="middle",
        )
    ]

    row = normalize_template(schema).experience.rows[0]

    assert row.align == "left"
    assert row.fields[0].style == "normal"
    assert row.fields[0].font_size == "inherit"


@pytest.mark.unit
def test_unknown_field_names_are_kept(schema):
    schema.experience.rows[0].fields.append(TemplateField("salary"))

    names = [f.name for f in normalize_template(schema).experience.rows[0].fields]

    assert names[-1] == "salary"


@pytest.mark.unit
def test_colors_fall_back(schema):
    schema.typography.colors.accent = "blue"
    schema.typography.colors.body = ""
    schema.section_headers.divider_color = "#12345"

    normalized = normalize_template(schema)

    assert normalized.typography.colors.accent == "#2563eb"
    assert normalized.typography.colors.body == "#333333"
    assert normalized.section_headers.divider_color is None


@pytest.mark.unit
def test_short_hex_colors_are_valid(schema):
    schema.typography.colors.name = "#000"
    assert normalize_template(schema).typography.colors.name == "#000"


@pytest.mark.unit
def test_blank_font_family_falls_back(schema):
    schema.typography.font_family = "  "
    assert normalize_template(schema).typography.font_family == "Roboto"


@pytest.mark.unit
def test_section_order_drops_unknown_and_repeated(schema):
    schema.section_order = ["experience", "projects", "experience", "custom"]

    report = normalize_template_with_report(schema)

    assert report.template.section_order == ["experience", "custom"]
    assert len(report.changes) == 2
    assert any("projects" in change for change in report.changes)


@pytest.mark.unit
def test_report_lists_each_substitution(schema):
    schema.typography.sizes.body = "big"
    schema.links.style = "blink"

    report = normalize_template_with_report(schema)

    assert report.changed
    assert report.changes == [
        "typography.sizes.body: 'big' -> 11",
        "links.style: 'blink' -> 'color'",
    ]

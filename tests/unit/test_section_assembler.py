"""Unit tests for section assembly: headings, item blocks and skills layouts."""

import pytest

from folio.contexts.rendering.rendered import BulletList, ItemBlock, RenderedRow, TextBlock
from folio.contexts.rendering.section_assembler import assemble, assemble_header, build_heading
from folio.contexts.templating import (
    CustomItem,
    EducationItem,
    ExperienceItem,
    ResumeData,
    TemplateField,
    TemplateRow,
    TemplateSchema,
)


@pytest.fixture
def schema():
    return TemplateSchema(id="t1", name="Mine", created_by="user-1")


def _texts(segments):
    return [s.text for s in segments]


@pytest.mark.unit
def test_heading_styles(schema):
    heading = build_heading("Experience", schema)
    assert (heading.title, heading.bold, heading.underline) == ("EXPERIENCE", True, False)
    assert heading.divider_color == schema.typography.colors.accent

    schema.section_headers.style = "underline"
    schema.section_headers.divider_style = "none"
    heading = build_heading("Experience", schema)
    assert (heading.title, heading.bold, heading.underline, heading.divider) == ("Experience", False, True, False)


@pytest.mark.unit
def test_divider_color_override(schema):
    schema.section_headers.divider_color = "#000000"
    assert build_heading("Skills", schema).divider_color == "#000000"


@pytest.mark.unit
def test_experience_item_parts_in_order(schema):
    item = ExperienceItem(
        title="Senior Engineer",
        company="Acme Corp",
        start_date="2021-08",
        current=True,
        bullets=("Cut latency by **40%**", "Mentored four engineers"),
    )

    section = assemble("experience", (item,), schema)
    block = section.blocks[0]

    assert section.title == "EXPERIENCE"
    assert isinstance(block, ItemBlock)
    first_row, second_row, bullets = block.parts
    assert _texts(first_row.segments) == ["Senior Engineer"]
    assert _texts(second_row.segments) == ["Acme Corp"]
    assert isinstance(bullets, BulletList)
    assert bullets.glyph == "•"
    assert _texts(bullets.items[0]) == ["Cut latency by ", "40%"]


@pytest.mark.unit
def test_items_keep_stored_order_and_indexes(schema):
    items = (ExperienceItem(title="B"), ExperienceItem(), ExperienceItem(title="A"))

    blocks = assemble("experience", items, schema).blocks

    assert [block.parts[0].text for block in blocks] == ["B", "A"]
    assert [block.index for block in blocks] == [0, 1]
    assert blocks[0].spacing_after == schema.experience.spacing_after


@pytest.mark.unit
def test_empty_section_hidden_or_kept(schema):
    assert assemble("education", (), schema) is None
    assert assemble("experience", (ExperienceItem(),), schema) is None

    schema.hide_empty_sections = False
    section = assemble("education", (), schema)
    assert section.is_empty
    assert section.title == "EDUCATION"


@pytest.mark.unit
def test_unknown_section_type(schema):
    assert assemble("projects", ["x"], schema) is None


@pytest.mark.unit
def test_education_gpa_line_when_no_row_places_it(schema):
    item = EducationItem(school="UT", degree="B.S.", field="CS", graduation_date="2016-05", gpa="3.8")

    parts = assemble("education", (item,), schema).blocks[0].parts

    assert _texts(parts[0].segments) == ["B.S.", " in ", "CS"]
    assert _texts(parts[0].right) == ["May 2016"]
    assert isinstance(parts[-1], TextBlock)
    assert _texts(parts[-1].segments) == ["GPA: 3.8"]

    schema.education.show_gpa = False
    assert not any(isinstance(p, TextBlock) for p in assemble("education", (item,), schema).blocks[0].parts)


@pytest.mark.unit
def test_education_gpa_in_a_row_is_not_repeated(schema):
    schema.education.rows[1].fields.append(TemplateField("gpa"))
    item = EducationItem(school="UT", gpa="3.8")

    parts = assemble("education", (item,), schema).blocks[0].parts

    assert all(isinstance(p, RenderedRow) for p in parts)
    assert parts[-1].text == "UTGPA: 3.8"


@pytest.mark.unit
def test_custom_items(schema):
    items = (CustomItem(title="Scheduler", description="Runs **jobs**"), CustomItem(description="Only text"))

    section = assemble("custom", items, schema, title="Projects", section_id="section_projects")

    assert section.title == "PROJECTS"
    assert section.section_id == "section_projects"
    first, second = section.blocks
    assert first.parts[0].text == "Scheduler"
    assert _texts(first.parts[1].segments) == ["Runs ", "jobs"]
    assert len(second.parts) == 1


@pytest.mark.unit
def test_summary_paragraph(schema):
    schema.summary.align = "justify"

    block = assemble("summary", "Builder of **things**", schema).blocks[0]

    assert block.align == "justify"
    assert _texts(block.segments) == ["Builder of ", "things"]
    assert assemble("summary", "   ", schema) is None


SKILL_CATEGORIES = {"languages": ("Python", "Go"), "cloudPlatforms": ("AWS",), "empty": ()}


@pytest.mark.unit
def test_skills_key_value(schema):
    (bullets,) = assemble("skills", SKILL_CATEGORIES, schema).blocks

    assert isinstance(bullets, BulletList)
    assert [_texts(item) for item in bullets.items] == [["Languages: ", "Python, Go"], ["Cloud Platforms: ", "AWS"]]
    assert bullets.items[0][0].bold


@pytest.mark.unit
def test_skills_key_value_without_category_names(schema):
    schema.skills.show_category_names = False
    (bullets,) = assemble("skills", SKILL_CATEGORIES, schema).blocks

    assert [_texts(item) for item in bullets.items] == [["Python, Go"], ["AWS"]]


@pytest.mark.unit
def test_skills_categories(schema):
    schema.skills.layout = "categories"
    schema.skills.separator = " | "

    blocks = assemble("skills", SKILL_CATEGORIES, schema).blocks

    assert [block.role for block in blocks] == ["label", "paragraph", "label", "paragraph"]
    assert [_texts(block.segments) for block in blocks] == [
        ["Languages"], ["Python | Go"], ["Cloud Platforms"], ["AWS"]
    ]


@pytest.mark.unit
def test_skills_bullets_and_inline(schema):
    schema.skills.layout = "bullets"
    (bullets,) = assemble("skills", SKILL_CATEGORIES, schema).blocks
    assert [_texts(item) for item in bullets.items] == [["Python"], ["Go"], ["AWS"]]

    schema.skills.layout = "inline"
    (paragraph,) = assemble("skills", SKILL_CATEGORIES, schema).blocks
    assert _texts(paragraph.segments) == ["Python, Go, AWS"]


@pytest.mark.unit
def test_flat_skills_list(schema):
    flat = ("**Languages**: Python, Go", "", "**Cloud**: AWS")

    (bullets,) = assemble("skills", flat, schema).blocks
    assert [_texts(item) for item in bullets.items] == [["Languages", ": Python, Go"], ["Cloud", ": AWS"]]

    schema.skills.layout = "categories"
    (paragraph,) = assemble("skills", ("Python", "Go"), schema).blocks
    assert _texts(paragraph.segments) == ["Python, Go"]


@pytest.mark.unit
def test_no_skills_is_absent(schema):
    assert assemble("skills", {"languages": ()}, schema) is None
    assert assemble("skills", (), schema) is None


@pytest.mark.unit
def test_header(schema):
    data = ResumeData.from_dict({"personalInfo": {"name": "Jane Doe", "email": "jane@example.com"}})

    header = assemble_header(schema, data)

    assert header.name == "Jane Doe"
    assert [row.text for row in header.contact_rows] == ["jane@example.com"]


@pytest.mark.unit
def test_header_placeholder_and_uppercase(schema):
    schema.header.name_style = "bold-uppercase"

    header = assemble_header(schema, ResumeData())

    assert header.name == "YOUR NAME"
    assert header.name_bold
    assert header.contact_rows == ()


@pytest.mark.unit
def test_custom_row_layout(schema):
    schema.custom_sections.default_layout = [
        TemplateRow(fields=[TemplateField("title", "bold"), TemplateField("dates")], align="space-between"),
        TemplateRow(fields=[TemplateField("description")]),
    ]
    item = CustomItem(title="Scheduler", description="Runs jobs", dates="2020")

    parts = assemble("custom", (item,), schema, title="Projects").blocks[0].parts

    assert len(parts) == 2
    assert parts[0].is_split
    assert parts[1].text == "Runs jobs"

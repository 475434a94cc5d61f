"""Unit tests for section ordering and visibility."""

import pytest

from folio.contexts.rendering.section_order import compose_resume, order_sections, plan_sections, section_content
from folio.contexts.templating import ExperienceItem, ResumeData, TemplateSchema


@pytest.fixture
def schema():
    return TemplateSchema(id="t1", name="Mine", created_by="user-1")


@pytest.mark.unit
def test_only_listed_sections_render(schema):
    schema.section_order = ["experience", "education"]
    data = ResumeData(summary="Builder", experience=(ExperienceItem(title="Senior Engineer"),))

    sections = order_sections(schema, data)

    assert [s.section_type for s in sections] == ["experience"]


@pytest.mark.unit
def test_order_follows_template(schema, resume):
    schema.section_order = ["education", "summary", "experience"]
    assert [s.section_type for s in order_sections(schema, resume)] == ["education", "summary", "experience"]

    schema.section_order = ["experience", "education", "summary"]
    assert [s.section_type for s in order_sections(schema, resume)] == ["experience", "education", "summary"]


@pytest.mark.unit
def test_custom_expands_to_every_custom_section(schema, resume):
    schema.section_order = ["custom", "experience"]

    sections = order_sections(schema, resume)

    assert [(s.section_type, s.section_id) for s in sections] == [
        ("custom", "section_projects"),
        ("custom", "section_awards"),
        ("experience", None),
    ]
    assert [s.title for s in sections] == ["PROJECTS", "AWARDS", "EXPERIENCE"]


@pytest.mark.unit
def test_repeated_entries_render_once(schema, resume):
    schema.section_order = ["summary", "summary"]
    assert len(plan_sections(schema, resume)) == 1


@pytest.mark.unit
def test_skills_prefer_categories(resume):
    assert list(section_content("skills", resume)) == ["languages", "cloudPlatforms"]
    assert section_content("skills", ResumeData(technical_skills=("Python",))) == ("Python",)
    assert section_content("skills", ResumeData(technical_skills=("Go",), skill_categories={"x": ()})) == ("Go",)


@pytest.mark.unit
def test_unknown_order_entries_are_skipped(schema, resume):
    schema.section_order = ["projects", "summary"]
    assert [s.section_type for s in order_sections(schema, resume)] == ["summary"]


@pytest.mark.unit
def test_compose_resume(schema, resume):
    rendered = compose_resume(schema, resume)

    assert rendered.display_name == "Jane Doe"
    assert rendered.header.name == "Jane Doe"
    assert rendered.section_types() == ("summary", "skills", "experience", "education")


@pytest.mark.unit
def test_compose_resume_does_not_modify_inputs(schema, resume):
    schema_before = schema.to_dict()
    data_before = resume.to_dict()

    compose_resume(schema, resume)

    assert schema.to_dict() == schema_before
    assert resume.to_dict() == data_before


@pytest.mark.unit
def test_compose_is_deterministic(schema, resume):
    assert compose_resume(schema, resume) == compose_resume(schema, resume)

"""Unit tests for the résumé content model."""

import pytest

from folio.contexts.templating import InvalidTemplateStructureError, ResumeData


@pytest.mark.unit
def test_sample_resume(resume):
    assert resume.display_name == "Jane Doe"
    assert resume.personal_info.github == ""
    assert [item.company for item in resume.experience] == ["Acme Corp", "Globex"]
    assert resume.experience[0].current is True
    assert resume.experience[0].bullets[0] == "Cut p99 latency by **40%** across the ingestion tier"
    assert resume.education[0].gpa == "3.8"
    assert resume.technical_skills == ("Python", "Go", "PostgreSQL")
    assert list(resume.skill_categories) == ["languages", "cloudPlatforms"]


@pytest.mark.unit
def test_custom_sections_keep_stored_order(resume):
    assert list(resume.custom_sections) == ["section_projects", "section_awards"]
    projects = resume.custom_sections["section_projects"]
    assert projects.name == "Projects"
    assert projects.items[0].dates == "2020"


@pytest.mark.unit
def test_legacy_aliases():
    data = ResumeData.from_dict(
        {
            "personalInfo": {"fullName": "Sam Lee"},
            "professionalSummary": "Analyst",
            "experience": [{"company": "Initech", "highlights": ["Shipped TPS reports"]}],
            "education": [{"institution": "State U", "graduationYear": 2015}],
        }
    )

    assert data.display_name == "Sam Lee"
    assert data.summary == "Analyst"
    assert data.experience[0].bullets == ("Shipped TPS reports",)
    assert data.education[0].school == "State U"
    assert data.education[0].graduation_date == "2015"


@pytest.mark.unit
def test_object_values_display_as_empty():
    data = ResumeData.from_dict({"personalInfo": {"name": "Sam", "location": {"city": "Austin"}}})
    assert data.personal_info.location == ""


@pytest.mark.unit
def test_skill_category_shapes():
    data = ResumeData.from_dict(
        {
            "technicalSkills": {
                "languages": "Python, Go ,",
                "cloud": {"aws": ["EC2", "S3"], "gcp": "GKE"},
                "empty": [],
            }
        }
    )

    assert data.skill_categories["languages"] == ("Python", "Go")
    assert data.skill_categories["cloud"] == ("EC2", "S3", "GKE")
    assert data.skill_categories["empty"] == ()


@pytest.mark.unit
def test_blank_name_has_no_display_name():
    assert ResumeData.from_dict({"personalInfo": {"name": "   "}}).display_name is None
    assert ResumeData().display_name is None


@pytest.mark.unit
def test_malformed_lists_are_ignored():
    data = ResumeData.from_dict({"experience": "Acme", "education": [None, {"school": "MIT"}]})

    assert data.experience == ()
    assert [item.school for item in data.education] == ["MIT"]


@pytest.mark.unit
def test_non_mapping_document_is_rejected():
    with pytest.raises(InvalidTemplateStructureError):
        ResumeData.from_dict("Jane Doe")


@pytest.mark.unit
def test_to_dict_feeds_back_into_from_dict(resume):
    assert ResumeData.from_dict(resume.to_dict()) == resume


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [("false", False), ("true", True), (None, False), (True, True)])
def test_current_flag_reads_strings(raw, expected):
    data = ResumeData.from_dict({"experience": [{"company": "Acme Corp", "current": raw}]})

    assert data.experience[0].current is expected

"""
Resume Data Structure

Structured representation of resume content, independent of layout. This is the
interface between whatever edits or imports resume content and the rendering
context, which reads it but never mutates it.

from_dict() accepts the camelCase document the editor persists, including the
legacy aliases older exports used (fullName, professionalSummary, highlights, ...).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from folio.contexts.templating.exceptions import InvalidTemplateStructureError
from folio.utils.text_processing import non_empty_strings, to_display_text, to_flag


def _text(data: Mapping[str, Any], *keys: str) -> str:
    """First non-blank value among keys, as display text."""
    for key in keys:
        text = to_display_text(data.get(key))
        if text.strip():
            return text
    return ""


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class PersonalInfo:
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    website: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonalInfo":
        return cls(
            name=_text(data, "name", "fullName"),
            email=_text(data, "email"),
            phone=_text(data, "phone"),
            location=_text(data, "location"),
            linkedin=_text(data, "linkedin"),
            github=_text(data, "github"),
            website=_text(data, "website"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
            "linkedin": self.linkedin,
            "github": self.github,
            "website": self.website,
        }


@dataclass(frozen=True)
class ExperienceItem:
    """
    One position held.

    Attributes:
        start_date: Raw date string (e.g. "2021-08", "Aug 2021")
        end_date: Raw date string; empty while the position is current
        current: Whether the position is ongoing
        bullets: Achievement lines, may carry **bold** markup
    """

    company: str = ""
    title: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    bullets: tuple = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExperienceItem":
        bullets = data.get("bullets") or data.get("highlights") or data.get("responsibilities") or []
        return cls(
            company=_text(data, "company"),
            title=_text(data, "title"),
            location=_text(data, "location"),
            start_date=_text(data, "startDate"),
            end_date=_text(data, "endDate"),
            current=to_flag(data.get("current"), False),
            bullets=tuple(non_empty_strings(bullets if isinstance(bullets, list) else [bullets])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company,
            "title": self.title,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "current": self.current,
            "bullets": list(self.bullets),
        }


@dataclass(frozen=True)
class EducationItem:
    school: str = ""
    degree: str = ""
    field: str = ""
    location: str = ""
    graduation_date: str = ""
    gpa: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationItem":
        return cls(
            school=_text(data, "school", "institution"),
            degree=_text(data, "degree"),
            field=_text(data, "field"),
            location=_text(data, "location"),
            graduation_date=_text(data, "graduationDate", "graduationYear", "endDate"),
            gpa=_text(data, "gpa"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "school": self.school,
            "degree": self.degree,
            "field": self.field,
            "location": self.location,
            "graduationDate": self.graduation_date,
            "gpa": self.gpa,
        }


@dataclass(frozen=True)
class CustomItem:
    title: str = ""
    description: str = ""
    dates: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomItem":
        return cls(
            title=_text(data, "title"),
            description=_text(data, "description"),
            dates=_text(data, "dates", "date"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "description": self.description, "dates": self.dates}


@dataclass(frozen=True)
class CustomSection:
    """
    A user-defined section (e.g. "Projects", "Certifications").

    Attributes:
        id: Generated section id the section is keyed by
        name: Display name used as the section heading
        items: Entries in stored order
    """

    id: str
    name: str = "Custom Section"
    items: tuple = ()

    @classmethod
    def from_dict(cls, section_id: str, data: Mapping[str, Any]) -> "CustomSection":
        items = data.get("items")
        return cls(
            id=section_id,
            name=_text(data, "name", "title") or "Custom Section",
            items=tuple(
                CustomItem.from_dict(item)
                for item in (items if isinstance(items, list) else [])
                if isinstance(item, Mapping)
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class ResumeData:
    """
    Complete resume content.

    Attributes:
        personal_info: Name and contact details
        summary: Professional summary, may carry **bold** markup
        experience: Positions in stored order (never re-sorted)
        education: Degrees in stored order
        technical_skills: Flat skills list (skills.technical)
        skill_categories: Optional category -> skills mapping, in stored order
        custom_sections: Custom sections keyed by section id, in stored order
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    summary: str = ""
    experience: tuple = ()
    education: tuple = ()
    technical_skills: tuple = ()
    skill_categories: Dict[str, tuple] = field(default_factory=dict)
    custom_sections: Dict[str, CustomSection] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResumeData":
        """
        Build resume data from the editor's JSON document.

        Args:
            data: Resume document (personalInfo, summary, experience, education,
                  skills.technical, technicalSkills, customSections)

        Returns:
            ResumeData instance

        Raises:
            InvalidTemplateStructureError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise InvalidTemplateStructureError(
                f"Resume document must be a mapping, got {type(data).__name__}"
            )

        experience = data.get("experience")
        education = data.get("education")
        skills = _mapping(data.get("skills"))
        technical = skills.get("technical")

        categories: Dict[str, tuple] = {}
        for category, values in _mapping(data.get("technicalSkills")).items():
            if isinstance(values, str):
                values = [part.strip() for part in values.split(",")]
            if isinstance(values, Mapping):
                values = [item for group in values.values() for item in (group if isinstance(group, list) else [group])]
            categories[str(category)] = tuple(non_empty_strings(values if isinstance(values, list) else []))

        custom_sections = {
            str(section_id): CustomSection.from_dict(str(section_id), section)
            for section_id, section in _mapping(data.get("customSections")).items()
            if isinstance(section, Mapping)
        }

        return cls(
            personal_info=PersonalInfo.from_dict(_mapping(data.get("personalInfo"))),
            summary=_text(data, "summary", "professionalSummary"),
            experience=tuple(
                ExperienceItem.from_dict(item)
                for item in (experience if isinstance(experience, list) else [])
                if isinstance(item, Mapping)
            ),
            education=tuple(
                EducationItem.from_dict(item)
                for item in (education if isinstance(education, list) else [])
                if isinstance(item, Mapping)
            ),
            technical_skills=tuple(non_empty_strings(technical if isinstance(technical, list) else [])),
            skill_categories=categories,
            custom_sections=custom_sections,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personalInfo": self.personal_info.to_dict(),
            "summary": self.summary,
            "experience": [item.to_dict() for item in self.experience],
            "education": [item.to_dict() for item in self.education],
            "skills": {"technical": list(self.technical_skills)},
            "technicalSkills": {name: list(values) for name, values in self.skill_categories.items()},
            "customSections": {
                section_id: section.to_dict() for section_id, section in self.custom_sections.items()
            },
        }

    @property
    def display_name(self) -> Optional[str]:
        """The subject's name, or None when blank."""
        return self.personal_info.name.strip() or None

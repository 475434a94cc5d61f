"""
Template Vocabularies

Closed sets of names a template may use: section types, the fields each row owner
can reference, and the style/alignment/layout variants. Anything outside these sets
is handled by degrading to a default (or to absent, for field names), never by
raising.
"""

from enum import Enum
from typing import Dict, Tuple, Type


class SectionType(str, Enum):
    SUMMARY = "summary"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    CUSTOM = "custom"


class HeaderField(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    LINKEDIN = "linkedin"
    GITHUB = "github"
    LOCATION = "location"
    WEBSITE = "website"


class ExperienceField(str, Enum):
    TITLE = "title"
    COMPANY = "company"
    LOCATION = "location"
    DATES = "dates"


class EducationField(str, Enum):
    DEGREE = "degree"
    FIELD = "field"
    SCHOOL = "school"
    LOCATION = "location"
    DATES = "dates"
    GPA = "gpa"


class CustomField(str, Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    DATES = "dates"


# Row owners: the parts of a template that hold TemplateRows
HEADER_OWNER = "header"
FIELD_VOCABULARIES: Dict[str, Type[Enum]] = {
    HEADER_OWNER: HeaderField,
    SectionType.EXPERIENCE.value: ExperienceField,
    SectionType.EDUCATION.value: EducationField,
    SectionType.CUSTOM.value: CustomField,
}

SECTION_TYPES: Tuple[str, ...] = tuple(member.value for member in SectionType)

FIELD_STYLES = ("normal", "bold", "italic")
FONT_SIZE_HINTS = ("inherit", "small")
ROW_ALIGNMENTS = ("left", "center", "right", "space-between")
NAME_ALIGNMENTS = ("left", "center", "right")
NAME_STYLES = ("normal", "bold", "uppercase", "bold-uppercase")
SECTION_HEADER_STYLES = ("bold", "uppercase", "bold-uppercase", "underline")
DIVIDER_STYLES = ("line", "double", "none")
SUMMARY_ALIGNMENTS = ("left", "justify")
SKILLS_LAYOUTS = ("key-value", "categories", "bullets", "inline")
BULLET_STYLES = ("•", "-", "▸", "◦", "→", "➤", "◆", "★", "■", "›")
LINK_STYLES = ("underline", "color", "plain")
PAGE_NUMBER_POSITIONS = ("bottom-center", "bottom-right")
PAGE_NUMBER_FORMATS = ("Page X", "X of Y", "X")


def vocabulary_for(owner: str) -> Tuple[str, ...]:
    """
    Get the field names a row owner may reference.

    Args:
        owner: "header", "experience", "education" or "custom"

    Returns:
        Field names in vocabulary order; empty for owners without rows
    """
    vocabulary = FIELD_VOCABULARIES.get(owner)
    if vocabulary is None:
        return ()
    return tuple(member.value for member in vocabulary)


def is_known_field(owner: str, field_name: str) -> bool:
    """Check whether field_name belongs to the owner's vocabulary."""
    return field_name in vocabulary_for(owner)


def is_section_type(value: str) -> bool:
    return value in SECTION_TYPES

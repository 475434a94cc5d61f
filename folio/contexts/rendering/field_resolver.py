"""
Field Resolver

Maps a template field name plus a résumé entity to display text, or to None
("absent"). Every template row is built from these lookups.

Resolution rules:
- The field name must belong to the vocabulary of the entity's owner (header,
  experience, education, custom); anything else is absent
- Empty, whitespace-only and missing values are absent
- Composite fields are formatted here: experience "dates" (start/end/current),
  education "dates" (graduation date) and "gpa" (label + value, only when the
  template shows GPA)

Rich text (summary, custom descriptions, bullets, skills) resolves to styled
segments instead: **bold** markup becomes bold segments and newlines (real or a
literal backslash-n) become line breaks.

Pure: results depend only on the arguments and the FieldContext.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.render_config import RenderConfig, default_render_config
from folio.contexts.rendering.rendered import Segment
from folio.contexts.templating.resume_data import (
    CustomItem,
    EducationItem,
    ExperienceItem,
    PersonalInfo,
    ResumeData,
)
from folio.contexts.templating.template_schema import TemplateSchema
from folio.contexts.templating.vocabulary import (
    HEADER_OWNER,
    CustomField,
    EducationField,
    ExperienceField,
    HeaderField,
    SectionType,
)
from folio.utils.dates import DEFAULT_DATE_FORMAT, format_date, format_date_range
from folio.utils.markdown import parse_inline_markup


@dataclass(frozen=True)
class FieldContext:
    """
    Template settings and ambient tables that field resolution depends on.

    Attributes:
        date_format: Template date-format variant
        show_gpa: Whether the education gpa field resolves at all
        config: Ambient tables (month names, labels)
    """

    date_format: str = DEFAULT_DATE_FORMAT
    show_gpa: bool = True
    config: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_schema(cls, schema: TemplateSchema, config: RenderConfig = None) -> "FieldContext":
        return cls(
            date_format=schema.date_format,
            show_gpa=schema.education.show_gpa,
            config=config or default_render_config(),
        )

    def format_date(self, date_str: str) -> str:
        return format_date(
            date_str,
            self.date_format,
            month_names=self.config.month_names,
            month_abbreviations=self.config.month_abbreviations,
            present_label=self.config.present_label,
        )


def _experience_dates(item: ExperienceItem, context: FieldContext) -> str:
    config = context.config
    return format_date_range(
        item.start_date,
        item.end_date,
        current=item.current,
        date_format=context.date_format,
        month_names=config.month_names,
        month_abbreviations=config.month_abbreviations,
        present_label=config.present_label,
        joiner=config.date_joiner,
    )


def _education_gpa(item: EducationItem, context: FieldContext) -> str:
    if not context.show_gpa or not item.gpa.strip():
        return ""
    return f"{context.config.gpa_label}{item.gpa.strip()}"


Getter = Callable[[Any, FieldContext], str]

# Field lookups per entity type, keyed by vocabulary member
FIELD_GETTERS: Dict[type, Dict[str, Getter]] = {
    PersonalInfo: {
        HeaderField.EMAIL.value: lambda p, ctx: p.email,
        HeaderField.PHONE.value: lambda p, ctx: p.phone,
        HeaderField.LINKEDIN.value: lambda p, ctx: p.linkedin,
        HeaderField.GITHUB.value: lambda p, ctx: p.github,
        HeaderField.LOCATION.value: lambda p, ctx: p.location,
        HeaderField.WEBSITE.value: lambda p, ctx: p.website,
    },
    ExperienceItem: {
        ExperienceField.TITLE.value: lambda e, ctx: e.title,
        ExperienceField.COMPANY.value: lambda e, ctx: e.company,
        ExperienceField.LOCATION.value: lambda e, ctx: e.location,
        ExperienceField.DATES.value: _experience_dates,
    },
    EducationItem: {
        EducationField.DEGREE.value: lambda e, ctx: e.degree,
        EducationField.FIELD.value: lambda e, ctx: e.field,
        EducationField.SCHOOL.value: lambda e, ctx: e.school,
        EducationField.LOCATION.value: lambda e, ctx: e.location,
        EducationField.DATES.value: lambda e, ctx: ctx.format_date(e.graduation_date),
        EducationField.GPA.value: _education_gpa,
    },
    CustomItem: {
        CustomField.TITLE.value: lambda c, ctx: c.title,
        CustomField.DESCRIPTION.value: lambda c, ctx: c.description,
        CustomField.DATES.value: lambda c, ctx: ctx.format_date(c.dates),
    },
}

ENTITY_OWNERS = {
    PersonalInfo: HEADER_OWNER,
    ExperienceItem: SectionType.EXPERIENCE.value,
    EducationItem: SectionType.EDUCATION.value,
    CustomItem: SectionType.CUSTOM.value,
}


def owner_of(entity: Any) -> Optional[str]:
    """Row owner whose vocabulary applies to entity, or None for unknown entities."""
    return ENTITY_OWNERS.get(type(entity))


def resolve(field_name: str, entity: Any, context: FieldContext = None) -> Optional[str]:
    """
    Resolve one template field against one résumé entity.

    Args:
        field_name: Template field name (e.g. "email", "dates", "degree")
        entity: PersonalInfo, ExperienceItem, EducationItem or CustomItem
        context: Template date format / GPA setting and ambient tables

    Returns:
        Display text, or None when the field is absent (unknown name, missing
        or blank value)

    Examples:
        >>> resolve("dates", ExperienceItem(start_date="2020-01", current=True))
        'Jan 2020 - Present'
        >>> resolve("degree", ExperienceItem(title="Engineer")) is None
        True
    """
    getters = FIELD_GETTERS.get(type(entity))
    if getters is None or field_name not in getters:
        _log_debug(f"Field {field_name!r} is not in the {owner_of(entity) or type(entity).__name__} vocabulary")
        return None

    value = getters[field_name](entity, context or FieldContext())
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def rich_segments(text: str, bold: bool = False) -> Tuple[Segment, ...]:
    """
    Parse inline markup into segments.

    Args:
        text: Text with optional **bold** markup and line breaks
        bold: Make every text segment bold (e.g. a category label)

    Returns:
        Segments in reading order; empty for blank text. Leading and trailing
        line breaks are dropped.
    """
    if not text or not text.strip():
        return ()

    segments = [
        Segment("", line_break=True) if span.line_break else Segment(span.text, bold=bold or span.bold)
        for span in parse_inline_markup(text.strip())
    ]
    while segments and segments[0].line_break:
        segments.pop(0)
    while segments and segments[-1].line_break:
        segments.pop()
    return tuple(segments)


def resolve_rich(field_name: str, entity: Any, context: FieldContext = None) -> Optional[Tuple[Segment, ...]]:
    """
    Resolve a free-text field to styled segments.

    Handles "summary" on ResumeData plus every field resolve() knows (for example
    a custom item's "description").

    Returns:
        Segments, or None when the field is absent
    """
    if isinstance(entity, ResumeData):
        text = entity.summary if field_name == SectionType.SUMMARY.value else None
        if text is None:
            _log_debug(f"Field {field_name!r} is not a rich résumé field")
    else:
        text = resolve(field_name, entity, context)

    segments = rich_segments(text or "")
    return segments or None

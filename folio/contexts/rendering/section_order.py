"""
Section Order Controller

Decides which sections render and in what order. The template's section_order is
the only visibility switch: a section type missing from it never renders, whatever
the résumé contains. "custom" stands for every custom section, in the order the
résumé stores them.
"""

from typing import Any, List, Tuple

from folio.contexts.rendering.field_resolver import FieldContext
from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.render_config import RenderConfig, default_render_config
from folio.contexts.rendering.rendered import RenderedResume, RenderedSection
from folio.contexts.rendering.section_assembler import assemble, assemble_header
from folio.contexts.templating.resume_data import ResumeData
from folio.contexts.templating.template_schema import TemplateSchema
from folio.contexts.templating.vocabulary import SectionType


def section_content(section_type: str, data: ResumeData) -> Any:
    """The slice of résumé data a built-in section type renders."""
    if section_type == SectionType.SUMMARY.value:
        return data.summary
    if section_type == SectionType.SKILLS.value:
        has_categories = any(skills for skills in data.skill_categories.values())
        return data.skill_categories if has_categories else data.technical_skills
    if section_type == SectionType.EXPERIENCE.value:
        return data.experience
    if section_type == SectionType.EDUCATION.value:
        return data.education
    return None


def plan_sections(schema: TemplateSchema, data: ResumeData) -> List[Tuple[str, Any, str, str]]:
    """
    Expand section_order into (section_type, content, title, section_id) entries.

    Titles are None for built-in section types (the configured title applies).
    Repeated entries are rendered once.
    """
    plan = []
    seen = set()
    for section_type in schema.section_order:
        if section_type in seen:
            continue
        seen.add(section_type)

        if section_type == SectionType.CUSTOM.value:
            for section_id, section in data.custom_sections.items():
                plan.append((section_type, section.items, section.name, section_id))
        else:
            plan.append((section_type, section_content(section_type, data), None, None))
    return plan


def order_sections(schema: TemplateSchema, data: ResumeData, config: RenderConfig = None) -> List[RenderedSection]:
    """
    Render the template's sections in order, dropping absent ones.

    Args:
        schema: Normalized template
        data: Résumé content (never modified)
        config: Ambient tables (defaults to the loaded render config)

    Returns:
        Rendered sections in template order

    Example:
        >>> schema.section_order = ["experience", "education"]
        >>> [s.section_type for s in order_sections(schema, data)]
        ['experience']   # no education items and hide_empty_sections on
    """
    context = FieldContext.from_schema(schema, config or default_render_config())

    sections = []
    for section_type, content, title, section_id in plan_sections(schema, data):
        section = assemble(section_type, content, schema, context, title=title, section_id=section_id)
        if section is None:
            _log_debug(f"Section {section_id or section_type} is absent")
            continue
        sections.append(section)
    return sections


def compose_resume(schema: TemplateSchema, data: ResumeData, config: RenderConfig = None) -> RenderedResume:
    """Compose the header and every ordered section into one RenderedResume."""
    config = config or default_render_config()
    context = FieldContext.from_schema(schema, config)
    return RenderedResume(
        header=assemble_header(schema, data, context),
        sections=tuple(order_sections(schema, data, config)),
        display_name=data.display_name,
    )

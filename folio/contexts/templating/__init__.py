"""
Templating Context

Responsibilities:
- Defines the declarative layout template (TemplateSchema: rows of named fields
  with style, alignment and separator metadata, plus typography and page settings)
- Defines the résumé content model (ResumeData) the renderer reads
- Ships the built-in templates and enforces their immutability
- Manages user templates: clone, create, save, delete, publish, with ownership checks
- Offers the template builder's copy-on-write editing operations
- Normalizes templates so malformed values degrade to documented defaults
- Applies named presets (density, colors, header style)

Owns: Template schema, field vocabularies, résumé data model, template library
Never: Renders anything (see contexts/rendering)
"""

from folio.contexts.templating.config_resolver import apply_presets, apply_presets_to_schema
from folio.contexts.templating.defaults import get_default_template, load_builtin_templates
from folio.contexts.templating.exceptions import (
    BuiltInTemplateError,
    InvalidTemplateStructureError,
    TemplateFileError,
    TemplateNotFoundError,
    TemplatePermissionError,
    TemplateValidationError,
)
from folio.contexts.templating.normalizer import (
    NormalizationResult,
    normalize_template,
    normalize_template_with_report,
)
from folio.contexts.templating.resume_data import (
    CustomItem,
    CustomSection,
    EducationItem,
    ExperienceItem,
    PersonalInfo,
    ResumeData,
)
from folio.contexts.templating.template_library import TemplateLibrary, validate_template
from folio.contexts.templating.template_schema import (
    SYSTEM_OWNER,
    TemplateField,
    TemplateRow,
    TemplateSchema,
)
from folio.contexts.templating.vocabulary import SectionType

__all__ = [
    # Schema and vocabularies
    "TemplateSchema",
    "TemplateRow",
    "TemplateField",
    "SectionType",
    "SYSTEM_OWNER",
    # Résumé content
    "ResumeData",
    "PersonalInfo",
    "ExperienceItem",
    "EducationItem",
    "CustomSection",
    "CustomItem",
    # Built-ins, library and presets
    "get_default_template",
    "load_builtin_templates",
    "TemplateLibrary",
    "validate_template",
    "apply_presets",
    "apply_presets_to_schema",
    # Normalization
    "normalize_template",
    "normalize_template_with_report",
    "NormalizationResult",
    # Exceptions
    "InvalidTemplateStructureError",
    "TemplateNotFoundError",
    "TemplateValidationError",
    "BuiltInTemplateError",
    "TemplatePermissionError",
    "TemplateFileError",
]

"""
Template Normalization

Makes any template renderable: every value outside its vocabulary or valid range is
replaced by the documented default, so rendering never has to guard against a
malformed template.

Operations:
1. Alignments, styles, layouts and formats outside their vocabularies -> defaults
2. Non-numeric or out-of-range sizes, margins, spacings -> defaults
3. Empty or malformed colors -> defaults
4. Section order: unknown types and repeats dropped (first occurrence kept)

Unknown field names are left in place: they resolve to absent at render time.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from folio.contexts.templating.logger import log_normalization_changes
from folio.contexts.templating.template_schema import (
    ColorPalette,
    FontSizes,
    Margins,
    TemplateRow,
    TemplateSchema,
)
from folio.contexts.templating.vocabulary import (
    BULLET_STYLES,
    DIVIDER_STYLES,
    FIELD_STYLES,
    FONT_SIZE_HINTS,
    LINK_STYLES,
    NAME_ALIGNMENTS,
    NAME_STYLES,
    PAGE_NUMBER_FORMATS,
    PAGE_NUMBER_POSITIONS,
    ROW_ALIGNMENTS,
    SECTION_HEADER_STYLES,
    SECTION_TYPES,
    SKILLS_LAYOUTS,
    SUMMARY_ALIGNMENTS,
)
from folio.utils.dates import DATE_FORMATS, DEFAULT_DATE_FORMAT

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
DEFAULT_FONT_FAMILY = "Roboto"
DEFAULT_LINE_SPACING = 1.15
DEFAULT_DIVIDER_WEIGHT = 1.0
DEFAULT_BULLET_INDENT = 12


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and bool(HEX_COLOR.match(value.strip()))


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, (int, float)) else float(str(value).strip())
        # "nan" and "inf" parse as floats but are never usable sizes
        finite = math.isfinite(number)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if finite else None


@dataclass
class NormalizationResult:
    """Result of normalize_template_with_report()."""

    template: TemplateSchema
    changes: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes)


class _Normalizer:
    """Applies replacements to a template copy, recording each one."""

    def __init__(self):
        self.changes: List[str] = []

    def choice(self, path: str, value: Any, allowed: Sequence[str], default: str) -> str:
        if value in allowed:
            return value
        self.changes.append(f"{path}: {value!r} -> {default!r}")
        return default

    def number(self, path: str, value: Any, default: float, allow_zero: bool = False) -> float:
        number = _as_number(value)
        if number is None or number < 0 or (number == 0 and not allow_zero):
            self.changes.append(f"{path}: {value!r} -> {default!r}")
            return default
        return number

    def color(self, path: str, value: Any, default: Optional[str]) -> Optional[str]:
        if is_hex_color(value):
            return value.strip()
        self.changes.append(f"{path}: {value!r} -> {default!r}")
        return default

    def rows(self, path: str, rows: List[TemplateRow]) -> None:
        for row_index, row in enumerate(rows):
            row_path = f"{path}[{row_index}]"
            row.align = self.choice(f"{row_path}.align", row.align, ROW_ALIGNMENTS, "left")
            for field_index, template_field in enumerate(row.fields):
                field_path = f"{row_path}.fields[{field_index}]"
                template_field.style = self.choice(
                    f"{field_path}.style", template_field.style, FIELD_STYLES, "normal"
                )
                template_field.font_size = self.choice(
                    f"{field_path}.fontSize", template_field.font_size, FONT_SIZE_HINTS, "inherit"
                )
                if not isinstance(template_field.separator, str):
                    template_field.separator = ""

    def section_order(self, order: List[str]) -> List[str]:
        result = []
        for section in order:
            if section not in SECTION_TYPES:
                self.changes.append(f"sectionOrder: dropped unknown section {section!r}")
            elif section in result:
                self.changes.append(f"sectionOrder: dropped repeated section {section!r}")
            else:
                result.append(section)
        return result


def normalize_template_with_report(schema: TemplateSchema) -> NormalizationResult:
    """
    Normalize a template and report every substitution made.

    Args:
        schema: Template to normalize (not modified)

    Returns:
        NormalizationResult with the normalized copy and the list of changes
    """
    t = schema.copy()
    n = _Normalizer()

    t.section_order = n.section_order(t.section_order)
    t.date_format = n.choice("dateFormat", t.date_format, DATE_FORMATS, DEFAULT_DATE_FORMAT)

    t.header.name_align = n.choice("header.nameAlign", t.header.name_align, NAME_ALIGNMENTS, "center")
    t.header.name_style = n.choice("header.nameStyle", t.header.name_style, NAME_STYLES, "bold")
    n.rows("header.contactRows", t.header.contact_rows)

    headers = t.section_headers
    headers.style = n.choice("sectionHeaders.style", headers.style, SECTION_HEADER_STYLES, "bold-uppercase")
    headers.divider_style = n.choice("sectionHeaders.dividerStyle", headers.divider_style, DIVIDER_STYLES, "line")
    headers.divider_weight = n.number("sectionHeaders.dividerWeight", headers.divider_weight, DEFAULT_DIVIDER_WEIGHT)
    if headers.divider_color is not None:
        headers.divider_color = n.color("sectionHeaders.dividerColor", headers.divider_color, None)

    t.summary.align = n.choice("summary.align", t.summary.align, SUMMARY_ALIGNMENTS, "left")

    experience = t.experience
    n.rows("experience.rows", experience.rows)
    experience.bullet_style = n.choice("experience.bulletStyle", experience.bullet_style, BULLET_STYLES, "•")
    experience.bullet_indent = n.number(
        "experience.bulletIndent", experience.bullet_indent, DEFAULT_BULLET_INDENT, allow_zero=True
    )
    experience.spacing_before = n.number("experience.spacing.beforeItem", experience.spacing_before, 4, allow_zero=True)
    experience.spacing_after = n.number("experience.spacing.afterItem", experience.spacing_after, 8, allow_zero=True)

    education = t.education
    n.rows("education.rows", education.rows)
    education.spacing_before = n.number("education.spacing.beforeItem", education.spacing_before, 4, allow_zero=True)
    education.spacing_after = n.number("education.spacing.afterItem", education.spacing_after, 8, allow_zero=True)

    n.rows("customSections.defaultLayout", t.custom_sections.default_layout)

    t.skills.layout = n.choice("skills.layout", t.skills.layout, SKILLS_LAYOUTS, "key-value")
    if not isinstance(t.skills.separator, str):
        t.skills.separator = ", "

    typography = t.typography
    if not typography.font_family or not typography.font_family.strip():
        n.changes.append(f"typography.fontFamily: {typography.font_family!r} -> {DEFAULT_FONT_FAMILY!r}")
        typography.font_family = DEFAULT_FONT_FAMILY
    default_sizes = FontSizes()
    for role in ("name", "section_header", "item_title", "body"):
        setattr(
            typography.sizes,
            role,
            n.number(f"typography.sizes.{role}", getattr(typography.sizes, role), getattr(default_sizes, role)),
        )
    default_colors = ColorPalette()
    for role in ("name", "headers", "body", "accent", "links"):
        setattr(
            typography.colors,
            role,
            n.color(f"typography.colors.{role}", getattr(typography.colors, role), getattr(default_colors, role)),
        )

    default_margins = Margins()
    for side in ("top", "right", "bottom", "left"):
        setattr(
            t.page.margins,
            side,
            n.number(f"page.margins.{side}", getattr(t.page.margins, side), getattr(default_margins, side), allow_zero=True),
        )
    t.page.line_spacing = n.number("page.lineSpacing", t.page.line_spacing, DEFAULT_LINE_SPACING)

    t.links.style = n.choice("links.style", t.links.style, LINK_STYLES, "color")
    t.links.color = n.color("links.color", t.links.color, default_colors.links)
    t.page_numbers.position = n.choice(
        "pageNumbers.position", t.page_numbers.position, PAGE_NUMBER_POSITIONS, "bottom-right"
    )
    t.page_numbers.format = n.choice("pageNumbers.format", t.page_numbers.format, PAGE_NUMBER_FORMATS, "Page X")

    log_normalization_changes(t.id or "<unsaved>", n.changes)
    return NormalizationResult(template=t, changes=n.changes)


def normalize_template(schema: TemplateSchema) -> TemplateSchema:
    """
    Return a normalized copy of schema, safe to render.

    Example:
        >>> schema.typography.sizes.body = -3
        >>> normalize_template(schema).typography.sizes.body
        11
    """
    return normalize_template_with_report(schema).template

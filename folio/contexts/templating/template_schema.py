"""
Template Schema

Data classes for the declarative layout template: which fields appear in which row,
in what order, with what separators and text styles, plus typography, page and
section-header settings.

The wire format is the JSON document produced by the template builder (camelCase
keys). from_dict() accepts partial documents and fills every missing value with the
ATS Professional default; to_dict() writes the full document back out.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from folio.contexts.templating.exceptions import InvalidTemplateStructureError
from folio.utils.text_processing import to_flag

SYSTEM_OWNER = "system"


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Get a nested mapping, treating anything that is not a mapping as empty."""
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _value(data: Mapping[str, Any], key: str, default: Any) -> Any:
    """Get a value, falling back to default when the key is missing or null."""
    value = data.get(key)
    return default if value is None else value


def _flag(data: Mapping[str, Any], key: str, default: bool) -> bool:
    return to_flag(data.get(key), default)


def _rows(data: Mapping[str, Any], key: str, default: List["TemplateRow"]) -> List["TemplateRow"]:
    value = data.get(key)
    if not isinstance(value, list):
        return copy.deepcopy(default)
    return [TemplateRow.from_dict(row) for row in value if isinstance(row, Mapping)]


@dataclass
class TemplateField:
    """
    One field slot in a template row.

    Attributes:
        name: Field identifier from the owning section's vocabulary (e.g. "email", "dates")
        style: "normal", "bold" or "italic"
        separator: Literal text emitted after this field when a later field in the row resolves
        font_size: "inherit" or "small"
    """

    name: str
    style: str = "normal"
    separator: str = ""
    font_size: str = "inherit"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateField":
        return cls(
            name=str(_value(data, "name", "")),
            style=str(_value(data, "style", "normal")),
            separator=str(_value(data, "separator", "")),
            font_size=str(_value(data, "fontSize", "inherit")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "style": self.style,
            "separator": self.separator,
            "fontSize": self.font_size,
        }


@dataclass
class TemplateRow:
    """
    An ordered row of fields. Field order is the rendering order.

    Attributes:
        fields: Field slots, left to right
        align: "left", "center", "right" or "space-between"
    """

    fields: List[TemplateField] = field(default_factory=list)
    align: str = "left"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateRow":
        raw_fields = data.get("fields")
        fields = [
            TemplateField.from_dict(item)
            for item in (raw_fields if isinstance(raw_fields, list) else [])
            if isinstance(item, Mapping)
        ]
        return cls(fields=fields, align=str(_value(data, "align", "left")))

    def to_dict(self) -> Dict[str, Any]:
        return {"align": self.align, "fields": [f.to_dict() for f in self.fields]}


def _row(align: str, *fields: TemplateField) -> TemplateRow:
    return TemplateRow(fields=list(fields), align=align)


DEFAULT_CONTACT_ROWS = [
    _row(
        "center",
        TemplateField("email", "normal", " | "),
        TemplateField("phone", "normal", " | "),
        TemplateField("location", "normal", " | "),
        TemplateField("linkedin", "normal", ""),
    )
]
DEFAULT_EXPERIENCE_ROWS = [
    _row("space-between", TemplateField("title", "bold"), TemplateField("dates")),
    _row("space-between", TemplateField("company", "italic"), TemplateField("location")),
]
DEFAULT_EDUCATION_ROWS = [
    _row(
        "space-between",
        TemplateField("degree", "bold", " in "),
        TemplateField("field"),
        TemplateField("dates"),
    ),
    _row("left", TemplateField("school", "italic")),
]
DEFAULT_CUSTOM_ROWS = [_row("left", TemplateField("title", "bold"))]


@dataclass
class HeaderConfig:
    name_align: str = "center"
    name_style: str = "bold"
    contact_rows: List[TemplateRow] = field(default_factory=lambda: copy.deepcopy(DEFAULT_CONTACT_ROWS))
    show_icons: bool = False
    hide_empty_fields: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HeaderConfig":
        return cls(
            name_align=str(_value(data, "nameAlign", "center")),
            name_style=str(_value(data, "nameStyle", "bold")),
            contact_rows=_rows(data, "contactRows", DEFAULT_CONTACT_ROWS),
            show_icons=_flag(data, "showIcons", False),
            hide_empty_fields=_flag(data, "hideEmptyFields", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nameAlign": self.name_align,
            "nameStyle": self.name_style,
            "contactRows": [row.to_dict() for row in self.contact_rows],
            "showIcons": self.show_icons,
            "hideEmptyFields": self.hide_empty_fields,
        }


@dataclass
class SectionHeaderConfig:
    """
    Section heading appearance.

    divider_color of None means "use the typography accent color".
    """

    style: str = "bold-uppercase"
    divider: bool = True
    divider_style: str = "line"
    divider_weight: float = 1.0
    divider_color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SectionHeaderConfig":
        return cls(
            style=str(_value(data, "style", "bold-uppercase")),
            divider=_flag(data, "divider", True),
            divider_style=str(_value(data, "dividerStyle", "line")),
            divider_weight=_value(data, "dividerWeight", 1.0),
            divider_color=data.get("dividerColor"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "style": self.style,
            "divider": self.divider,
            "dividerStyle": self.divider_style,
            "dividerWeight": self.divider_weight,
            "dividerColor": self.divider_color,
        }


@dataclass
class SummaryConfig:
    align: str = "left"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SummaryConfig":
        return cls(align=str(_value(data, "align", "left")))

    def to_dict(self) -> Dict[str, Any]:
        return {"align": self.align}


@dataclass
class ExperienceConfig:
    rows: List[TemplateRow] = field(default_factory=lambda: copy.deepcopy(DEFAULT_EXPERIENCE_ROWS))
    bullet_style: str = "•"
    bullet_indent: float = 12
    spacing_before: float = 4
    spacing_after: float = 8
    wrap_long_text: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExperienceConfig":
        spacing = _section(data, "spacing")
        return cls(
            rows=_rows(data, "rows", DEFAULT_EXPERIENCE_ROWS),
            bullet_style=str(_value(data, "bulletStyle", "•")),
            bullet_indent=_value(data, "bulletIndent", 12),
            spacing_before=_value(spacing, "beforeItem", 4),
            spacing_after=_value(spacing, "afterItem", 8),
            wrap_long_text=_flag(data, "wrapLongText", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "bulletStyle": self.bullet_style,
            "bulletIndent": self.bullet_indent,
            "spacing": {"beforeItem": self.spacing_before, "afterItem": self.spacing_after},
            "wrapLongText": self.wrap_long_text,
        }


@dataclass
class EducationConfig:
    rows: List[TemplateRow] = field(default_factory=lambda: copy.deepcopy(DEFAULT_EDUCATION_ROWS))
    show_gpa: bool = True
    spacing_before: float = 4
    spacing_after: float = 8

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationConfig":
        spacing = _section(data, "spacing")
        return cls(
            rows=_rows(data, "rows", DEFAULT_EDUCATION_ROWS),
            show_gpa=_flag(data, "showGPA", True),
            spacing_before=_value(spacing, "beforeItem", 4),
            spacing_after=_value(spacing, "afterItem", 8),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "showGPA": self.show_gpa,
            "spacing": {"beforeItem": self.spacing_before, "afterItem": self.spacing_after},
        }


@dataclass
class SkillsConfig:
    layout: str = "key-value"
    separator: str = ", "
    show_category_names: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkillsConfig":
        return cls(
            layout=str(_value(data, "layout", "key-value")),
            separator=str(_value(data, "separator", ", ")),
            show_category_names=_flag(data, "showCategoryNames", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout": self.layout,
            "separator": self.separator,
            "showCategoryNames": self.show_category_names,
        }


@dataclass
class CustomSectionsConfig:
    default_layout: List[TemplateRow] = field(default_factory=lambda: copy.deepcopy(DEFAULT_CUSTOM_ROWS))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomSectionsConfig":
        return cls(default_layout=_rows(data, "defaultLayout", DEFAULT_CUSTOM_ROWS))

    def to_dict(self) -> Dict[str, Any]:
        return {"defaultLayout": [row.to_dict() for row in self.default_layout]}


@dataclass
class FontSizes:
    """Point sizes per typographic role."""

    name: float = 24
    section_header: float = 14
    item_title: float = 11
    body: float = 11

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FontSizes":
        return cls(
            name=_value(data, "name", 24),
            section_header=_value(data, "sectionHeader", 14),
            item_title=_value(data, "itemTitle", 11),
            body=_value(data, "body", 11),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sectionHeader": self.section_header,
            "itemTitle": self.item_title,
            "body": self.body,
        }


@dataclass
class ColorPalette:
    """Hex colors per typographic role."""

    name: str = "#1a1a1a"
    headers: str = "#1a1a1a"
    body: str = "#333333"
    accent: str = "#2563eb"
    links: str = "#2563eb"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColorPalette":
        defaults = cls()
        return cls(**{key: str(_value(data, key, getattr(defaults, key))) for key in defaults.to_dict()})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "headers": self.headers,
            "body": self.body,
            "accent": self.accent,
            "links": self.links,
        }


@dataclass
class Typography:
    font_family: str = "Roboto"
    sizes: FontSizes = field(default_factory=FontSizes)
    colors: ColorPalette = field(default_factory=ColorPalette)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Typography":
        return cls(
            font_family=str(_value(data, "fontFamily", "Roboto")),
            sizes=FontSizes.from_dict(_section(data, "sizes")),
            colors=ColorPalette.from_dict(_section(data, "colors")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fontFamily": self.font_family,
            "sizes": self.sizes.to_dict(),
            "colors": self.colors.to_dict(),
        }


@dataclass
class Margins:
    """Page margins in inches."""

    top: float = 0.5
    right: float = 0.5
    bottom: float = 0.5
    left: float = 0.5

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Margins":
        return cls(
            top=_value(data, "top", 0.5),
            right=_value(data, "right", 0.5),
            bottom=_value(data, "bottom", 0.5),
            left=_value(data, "left", 0.5),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass
class PageConfig:
    margins: Margins = field(default_factory=Margins)
    line_spacing: float = 1.15

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageConfig":
        return cls(
            margins=Margins.from_dict(_section(data, "margins")),
            line_spacing=_value(data, "lineSpacing", 1.15),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"margins": self.margins.to_dict(), "lineSpacing": self.line_spacing}


@dataclass
class LinksConfig:
    style: str = "color"
    color: str = "#2563eb"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LinksConfig":
        return cls(style=str(_value(data, "style", "color")), color=str(_value(data, "color", "#2563eb")))

    def to_dict(self) -> Dict[str, Any]:
        return {"style": self.style, "color": self.color}


@dataclass
class PageNumbersConfig:
    show: bool = True
    position: str = "bottom-right"
    format: str = "Page X"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageNumbersConfig":
        return cls(
            show=_flag(data, "show", True),
            position=str(_value(data, "position", "bottom-right")),
            format=str(_value(data, "format", "Page X")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"show": self.show, "position": self.position, "format": self.format}


@dataclass
class TemplateSchema:
    """
    A complete named layout template.

    Built-in templates are owned by SYSTEM_OWNER and never edited in place; user
    templates are clones with their own id and owner.

    Attributes:
        id: Template identifier
        name: Display name
        description: Short description shown in template pickers
        created_by: Owner identity, or SYSTEM_OWNER for built-ins
        section_order: Section types in render order; omission hides a section
        hide_empty_sections: Drop sections with nothing to show (header included)
        date_format: One of "MMM YYYY", "MM/YYYY", "MMMM YYYY", "YYYY"
    """

    id: str
    name: str
    description: str = ""
    created_by: str = SYSTEM_OWNER
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    version: int = 1
    is_published: bool = True
    ats_compatible: bool = True
    ats_warning: Optional[str] = None
    hide_empty_sections: bool = True
    section_order: List[str] = field(
        default_factory=lambda: ["summary", "skills", "experience", "education"]
    )
    header: HeaderConfig = field(default_factory=HeaderConfig)
    section_headers: SectionHeaderConfig = field(default_factory=SectionHeaderConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    experience: ExperienceConfig = field(default_factory=ExperienceConfig)
    education: EducationConfig = field(default_factory=EducationConfig)
    skills: SkillsConfig = field(default_factory=SkillsConfig)
    custom_sections: CustomSectionsConfig = field(default_factory=CustomSectionsConfig)
    typography: Typography = field(default_factory=Typography)
    page: PageConfig = field(default_factory=PageConfig)
    links: LinksConfig = field(default_factory=LinksConfig)
    page_numbers: PageNumbersConfig = field(default_factory=PageNumbersConfig)
    header_on_first_page_only: bool = True
    date_format: str = "MMM YYYY"

    @property
    def is_built_in(self) -> bool:
        """True for system templates, which may only be cloned, never saved."""
        return self.created_by == SYSTEM_OWNER

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateSchema":
        """
        Build a schema from a (possibly partial) template document.

        Args:
            data: Template document with camelCase keys

        Returns:
            TemplateSchema with defaults filled in for every missing value

        Raises:
            InvalidTemplateStructureError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise InvalidTemplateStructureError(
                f"Template document must be a mapping, got {type(data).__name__}"
            )

        section_order = data.get("sectionOrder")
        if not isinstance(section_order, list):
            section_order = ["summary", "skills", "experience", "education"]

        return cls(
            id=str(_value(data, "id", "")),
            name=str(_value(data, "name", "")),
            description=str(_value(data, "description", "")),
            created_by=str(_value(data, "createdBy", SYSTEM_OWNER)),
            created_at=_optional_str(data.get("createdAt")),
            updated_at=_optional_str(data.get("updatedAt")),
            version=_value(data, "version", 1),
            is_published=_flag(data, "isPublished", True),
            ats_compatible=_flag(data, "atsCompatible", True),
            ats_warning=data.get("atsWarning"),
            hide_empty_sections=_flag(data, "hideEmptySections", True),
            section_order=[str(section) for section in section_order],
            header=HeaderConfig.from_dict(_section(data, "header")),
            section_headers=SectionHeaderConfig.from_dict(_section(data, "sectionHeaders")),
            summary=SummaryConfig.from_dict(_section(data, "summary")),
            experience=ExperienceConfig.from_dict(_section(data, "experience")),
            education=EducationConfig.from_dict(_section(data, "education")),
            skills=SkillsConfig.from_dict(_section(data, "skills")),
            custom_sections=CustomSectionsConfig.from_dict(_section(data, "customSections")),
            typography=Typography.from_dict(_section(data, "typography")),
            page=PageConfig.from_dict(_section(data, "page")),
            links=LinksConfig.from_dict(_section(data, "links")),
            page_numbers=PageNumbersConfig.from_dict(_section(data, "pageNumbers")),
            header_on_first_page_only=_flag(data, "headerOnFirstPageOnly", True),
            date_format=str(_value(data, "dateFormat", "MMM YYYY")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase template document (JSON/YAML safe)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "version": self.version,
            "isPublished": self.is_published,
            "atsCompatible": self.ats_compatible,
            "atsWarning": self.ats_warning,
            "hideEmptySections": self.hide_empty_sections,
            "sectionOrder": list(self.section_order),
            "header": self.header.to_dict(),
            "sectionHeaders": self.section_headers.to_dict(),
            "summary": self.summary.to_dict(),
            "experience": self.experience.to_dict(),
            "education": self.education.to_dict(),
            "skills": self.skills.to_dict(),
            "customSections": self.custom_sections.to_dict(),
            "typography": self.typography.to_dict(),
            "page": self.page.to_dict(),
            "links": self.links.to_dict(),
            "pageNumbers": self.page_numbers.to_dict(),
            "headerOnFirstPageOnly": self.header_on_first_page_only,
            "dateFormat": self.date_format,
        }

    def copy(self) -> "TemplateSchema":
        """Deep copy; edits to the copy never reach this schema."""
        return copy.deepcopy(self)

    def rows_for(self, owner: str) -> List[TemplateRow]:
        """
        Get the row list owned by a template part.

        Args:
            owner: "header", "experience", "education" or "custom"

        Returns:
            The live row list (callers that edit must copy the schema first)

        Raises:
            KeyError: If owner has no rows
        """
        rows_by_owner = {
            "header": self.header.contact_rows,
            "experience": self.experience.rows,
            "education": self.education.rows,
            "custom": self.custom_sections.default_layout,
        }
        return rows_by_owner[owner]


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def create_field(name: str, style: str = "normal", separator: str = "") -> TemplateField:
    return TemplateField(name=name, style=style, separator=separator)


def create_empty_row() -> TemplateRow:
    return TemplateRow(fields=[], align="left")

"""
Render Configuration

The ambient tables the renderer depends on (section titles, month names, font
stacks, page geometry) loaded from render_defaults.yaml with OmegaConf and passed
explicitly into every rendering function. Nothing in the rendering context reads
module-level lookup tables, so a render is a pure function of its inputs.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.utils.dates import MONTH_ABBREVIATIONS, MONTH_NAMES, PRESENT_LABEL

load_dotenv()
RENDER_CONFIG_PATH = Path(
    os.getenv("FOLIO_RENDER_CONFIG_PATH", str(Path(__file__).parent / "render_defaults.yaml"))
)

DEFAULT_SECTION_TITLES = {
    "summary": "Professional Summary",
    "skills": "Skills",
    "experience": "Experience",
    "education": "Education",
    "custom": "Custom Section",
}


@dataclass(frozen=True)
class RenderConfig:
    """
    Ambient rendering tables.

    Attributes:
        placeholder_name: Shown when the résumé has no name
        present_label: End-date label for current positions
        date_joiner: Text between start and end dates
        gpa_label: Prefix for the education gpa field
        section_titles: Display name per section type
        month_names: Full month names, January first
        month_abbreviations: Abbreviated month names, January first
        font_stacks: Font family -> CSS font stack for the preview target
        page_width / page_height: Page size in inches
        points_per_inch: Conversion used by the document target
        section_top: Space above each section, in points
        heading_bottom: Space below a section heading, in points
        name_bottom: Space below the name line, in points
        small_size_delta: Points subtracted from body size for "small" fields
    """

    placeholder_name: str = "Your Name"
    present_label: str = PRESENT_LABEL
    date_joiner: str = " - "
    gpa_label: str = "GPA: "
    section_titles: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SECTION_TITLES))
    month_names: Tuple[str, ...] = MONTH_NAMES
    month_abbreviations: Tuple[str, ...] = MONTH_ABBREVIATIONS
    font_stacks: Dict[str, str] = field(default_factory=dict)
    page_width: float = 8.5
    page_height: float = 11.0
    points_per_inch: float = 72.0
    section_top: float = 12
    heading_bottom: float = 6
    name_bottom: float = 6
    small_size_delta: float = 1

    def font_stack(self, font_family: str) -> str:
        """CSS font stack for a family; unknown families are used as given."""
        return self.font_stacks.get(font_family, font_family)

    def section_title(self, section_type: str) -> str:
        return self.section_titles.get(section_type, DEFAULT_SECTION_TITLES.get(section_type, section_type.title()))

    def to_points(self, inches: float) -> float:
        return inches * self.points_per_inch

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderConfig":
        page = data.get("page") or {}
        spacing = data.get("spacing") or {}
        defaults = cls()
        return cls(
            placeholder_name=data.get("placeholder_name", defaults.placeholder_name),
            present_label=data.get("present_label", defaults.present_label),
            date_joiner=data.get("date_joiner", defaults.date_joiner),
            gpa_label=data.get("gpa_label", defaults.gpa_label),
            section_titles={**DEFAULT_SECTION_TITLES, **(data.get("section_titles") or {})},
            month_names=tuple(data.get("month_names") or MONTH_NAMES),
            month_abbreviations=tuple(data.get("month_abbreviations") or MONTH_ABBREVIATIONS),
            font_stacks=dict(data.get("font_stacks") or {}),
            page_width=page.get("width", defaults.page_width),
            page_height=page.get("height", defaults.page_height),
            points_per_inch=page.get("points_per_inch", defaults.points_per_inch),
            section_top=spacing.get("section_top", defaults.section_top),
            heading_bottom=spacing.get("heading_bottom", defaults.heading_bottom),
            name_bottom=spacing.get("name_bottom", defaults.name_bottom),
            small_size_delta=spacing.get("small_size_delta", defaults.small_size_delta),
        )


def load_render_config(config_path: Path = None) -> RenderConfig:
    """
    Load render configuration from YAML.

    Args:
        config_path: Optional path (defaults to FOLIO_RENDER_CONFIG_PATH)

    Returns:
        RenderConfig; keys missing from the file keep their defaults
    """
    if config_path is None:
        config_path = RENDER_CONFIG_PATH

    return RenderConfig.from_dict(OmegaConf.to_container(OmegaConf.load(config_path), resolve=True))


@lru_cache(maxsize=1)
def default_render_config() -> RenderConfig:
    """The configuration from FOLIO_RENDER_CONFIG_PATH, loaded once."""
    return load_render_config()

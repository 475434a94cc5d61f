"""
Template Presets

Named, partial template documents kept in template_presets.yaml and grouped by
category (density, colors, headers). A preset is referred to as
<category>_<name>, e.g. density_compact.

Presets only change layout and styling. Keys that carry identity or ownership
(id, createdBy, version, ...) are dropped from a preset before merging, so
applying presets to a user's clone can never hand it to someone else or make
it look built-in.

Examples:
    >>> apply_presets(template_document, ["density_compact", "colors_mono"])
    >>> schema = apply_presets_to_schema(schema, ["headers_minimal"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.templating.logger import _log_debug, _log_warning
from folio.contexts.templating.template_schema import TemplateSchema

load_dotenv()
PRESETS_PATH = Path(
    os.getenv("FOLIO_PRESETS_PATH", str(Path(__file__).parent / "template_presets.yaml"))
)

# Top-level template keys a preset may never set
IDENTITY_KEYS = ("id", "createdBy", "createdAt", "updatedAt", "version", "isBuiltIn", "isPublished")


def _load_nested(config_path: Path = None) -> Dict[str, Dict[str, Any]]:
    return OmegaConf.to_container(OmegaConf.load(config_path or PRESETS_PATH), resolve=True)


def list_presets(config_path: Path = None) -> Dict[str, List[str]]:
    """Preset names grouped by category, in file order: {"density": ["compact", ...], ...}."""
    return {category: list(presets) for category, presets in _load_nested(config_path).items()}


def load_template_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load the presets file keyed by flat preset name.

    Args:
        config_path: Presets file. Defaults to FOLIO_PRESETS_PATH.

    Returns:
        {"density_compact": {...partial template document...}, ...}
    """
    return {
        f"{category}_{name}": config
        for category, presets in _load_nested(config_path).items()
        for name, config in presets.items()
    }


def _layout_only(preset_name: str, preset: Dict[str, Any]) -> Dict[str, Any]:
    blocked = [key for key in IDENTITY_KEYS if key in preset]
    if blocked:
        _log_warning(f"Preset {preset_name} ignores identity keys: {', '.join(blocked)}")
    return {key: value for key, value in preset.items() if key not in IDENTITY_KEYS}


def apply_presets(
    template_data: Dict[str, Any],
    preset_names: List[str],
    config_path: Path = None,
) -> Dict[str, Any]:
    """
    Deep-merge named presets over a template document, in order.

    Args:
        template_data: Template document (camelCase keys); not modified
        preset_names: e.g. ["density_compact", "colors_mono"]; later names win
        config_path: Presets file. Defaults to FOLIO_PRESETS_PATH.

    Returns:
        New template document

    Raises:
        ValueError: If a preset name is unknown (the message lists the available names)
    """
    presets = load_template_presets(config_path)

    merged = OmegaConf.create(template_data)
    for preset_name in preset_names:
        if preset_name not in presets:
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {sorted(presets)}")

        _log_debug(f"Applying preset {preset_name}")
        merged = OmegaConf.merge(merged, OmegaConf.create(_layout_only(preset_name, presets[preset_name])))

    return OmegaConf.to_container(merged, resolve=True)


def apply_presets_to_schema(
    schema: TemplateSchema,
    preset_names: List[str],
    config_path: Path = None,
) -> TemplateSchema:
    """Schema form of apply_presets(); returns a new schema with the same identity and owner."""
    return TemplateSchema.from_dict(apply_presets(schema.to_dict(), preset_names, config_path))

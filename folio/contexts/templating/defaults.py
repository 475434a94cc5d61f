"""
Built-in templates.

The system templates ship as YAML documents in builtin_templates/. A document may
name a base with `extends:`; it is merged over the base with OmegaConf, so a
derived template only spells out what it changes. Lists (rows, section order) are
replaced wholesale, never merged element-wise.

All built-ins are owned by SYSTEM_OWNER and are therefore read-only: the template
library hands out copies and rejects saves against them.
"""

import os
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.templating.exceptions import TemplateFileError, TemplateNotFoundError
from folio.contexts.templating.template_schema import SYSTEM_OWNER, TemplateSchema

load_dotenv()
BUILTIN_TEMPLATES_PATH = Path(
    os.getenv("FOLIO_BUILTIN_TEMPLATES_PATH", str(Path(__file__).parent / "builtin_templates"))
)

DEFAULT_TEMPLATE_ID = "ats-default"

# Picker order; any other built-in files follow alphabetically
BUILTIN_TEMPLATE_ORDER = ["ats-default", "modern-default", "builtin-classic", "builtin-modern"]


def _read_documents(templates_dir: Path) -> Dict[str, Dict[str, Any]]:
    if not templates_dir.is_dir():
        raise TemplateFileError("Built-in templates directory not found", path=templates_dir)

    documents = {}
    for path in sorted(templates_dir.glob("*.yaml")):
        try:
            document = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
        except Exception as e:
            raise TemplateFileError("Failed to load built-in template", path=path, original_error=e) from e
        documents[document.get("id") or path.stem] = document
    return documents


def _resolve_extends(
    template_id: str,
    documents: Dict[str, Dict[str, Any]],
    resolved: Dict[str, Dict[str, Any]],
    chain: List[str],
) -> Dict[str, Any]:
    if template_id in resolved:
        return resolved[template_id]
    if template_id in chain:
        raise ValueError(f"Circular extends: {' -> '.join(chain + [template_id])}")
    if template_id not in documents:
        raise TemplateNotFoundError(template_id, available=sorted(documents))

    document = dict(documents[template_id])
    base_id = document.pop("extends", None)
    if base_id:
        base = _resolve_extends(base_id, documents, resolved, chain + [template_id])
        merged = OmegaConf.merge(OmegaConf.create(base), OmegaConf.create(document))
        document = OmegaConf.to_container(merged, resolve=True)

    document["id"] = template_id
    document["createdBy"] = SYSTEM_OWNER
    resolved[template_id] = document
    return document


def load_builtin_documents(templates_dir: Path = None) -> Dict[str, Dict[str, Any]]:
    """
    Load every built-in template document with `extends:` resolved.

    Args:
        templates_dir: Directory of *.yaml templates (defaults to FOLIO_BUILTIN_TEMPLATES_PATH)

    Returns:
        Template documents keyed by id, in picker order

    Raises:
        TemplateFileError: If the directory or a file cannot be read
        TemplateNotFoundError: If a template extends an unknown base
        ValueError: If extends chains form a cycle
    """
    documents = _read_documents(templates_dir or BUILTIN_TEMPLATES_PATH)

    resolved: Dict[str, Dict[str, Any]] = {}
    for template_id in documents:
        _resolve_extends(template_id, documents, resolved, [])

    ordered_ids = [tid for tid in BUILTIN_TEMPLATE_ORDER if tid in resolved]
    ordered_ids += sorted(tid for tid in resolved if tid not in BUILTIN_TEMPLATE_ORDER)
    return {tid: resolved[tid] for tid in ordered_ids}


def load_builtin_templates(templates_dir: Path = None) -> Dict[str, TemplateSchema]:
    """Load the built-in templates as schemas, keyed by id in picker order."""
    return {
        template_id: TemplateSchema.from_dict(document)
        for template_id, document in load_builtin_documents(templates_dir).items()
    }


def get_default_template(templates_dir: Path = None) -> TemplateSchema:
    """
    Get the ATS Professional template, the fallback for résumés with no template.

    Example:
        >>> get_default_template().name
        'ATS Professional'
    """
    return load_builtin_templates(templates_dir)[DEFAULT_TEMPLATE_ID]

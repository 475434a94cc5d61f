"""
Template Library

Registry of every template a user can pick: the read-only built-ins plus user
templates (clones and new templates). The library is the only place ownership
rules are enforced; the rendering context never sees them.

Rules:
- Built-ins (created_by == SYSTEM_OWNER) are never saved, deleted or published;
  they can only be cloned
- A user template can only be changed by its owner, or by ADMIN_ROLE
- get() hands out copies, so edits never reach the library until save()
"""

import json
import secrets
from pathlib import Path
from typing import Dict, List, Optional

from omegaconf import OmegaConf

from folio.contexts.templating.defaults import load_builtin_templates
from folio.contexts.templating.exceptions import (
    BuiltInTemplateError,
    TemplateFileError,
    TemplateNotFoundError,
    TemplatePermissionError,
    TemplateValidationError,
)
from folio.contexts.templating.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_template_cloned,
    log_template_saved,
)
from folio.contexts.templating.template_schema import SYSTEM_OWNER, TemplateSchema
from folio.utils.timestamp import epoch_millis, now_exact

ADMIN_ROLE = "admin"
USER_ROLE = "user"
TEMPLATE_FILE_SUFFIXES = (".yaml", ".yml", ".json")


def generate_template_id() -> str:
    """New user template id: template_<epoch millis>_<6 hex chars>."""
    return f"template_{epoch_millis()}_{secrets.token_hex(3)}"


def validate_template(schema: TemplateSchema) -> List[str]:
    """
    Check that a template has the minimum needed to render a useful résumé.

    Args:
        schema: Template to check

    Returns:
        Validation messages; empty when the template is valid
    """
    errors = []
    if not schema.name or not schema.name.strip():
        errors.append("Template name is required")
    if not schema.header.contact_rows:
        errors.append("At least one contact row is required")
    if not schema.experience.rows:
        errors.append("At least one experience row is required")
    if not schema.education.rows:
        errors.append("At least one education row is required")
    if not schema.section_order:
        errors.append("Section order must contain at least one section")
    return errors


class TemplateLibrary:
    """
    In-memory template registry, seeded with the built-in templates.

    Example:
        library = TemplateLibrary()
        mine = library.clone("ats-default", created_by="user-42")
        mine.typography.font_family = "Georgia"
        library.save(mine, user_id="user-42")
    """

    def __init__(self, builtins: Optional[Dict[str, TemplateSchema]] = None, builtins_dir: Path = None):
        """
        Initialize the library.

        Args:
            builtins: Built-in templates keyed by id. Defaults to the shipped
                      built-ins loaded from builtins_dir
            builtins_dir: Directory of built-in YAML templates (defaults to
                          FOLIO_BUILTIN_TEMPLATES_PATH)
        """
        if builtins is None:
            builtins = load_builtin_templates(builtins_dir)

        self._builtins: Dict[str, TemplateSchema] = {tid: t.copy() for tid, t in builtins.items()}
        self._templates: Dict[str, TemplateSchema] = {}

    def _lookup(self, template_id: str) -> TemplateSchema:
        template = self._builtins.get(template_id) or self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id, available=self.template_ids())
        return template

    def _check_can_modify(self, template: TemplateSchema, user_id: str, role: str, action: str) -> None:
        if template.is_built_in or template.id in self._builtins:
            raise BuiltInTemplateError(template.id, action=action)
        if template.created_by != user_id and role != ADMIN_ROLE:
            raise TemplatePermissionError(template.id, owner=template.created_by, user_id=user_id)

    def template_ids(self) -> List[str]:
        return list(self._builtins) + sorted(self._templates)

    def exists(self, template_id: str) -> bool:
        return template_id in self._builtins or template_id in self._templates

    def get(self, template_id: str) -> TemplateSchema:
        """
        Get a copy of a template.

        Raises:
            TemplateNotFoundError: If template_id is unknown
        """
        return self._lookup(template_id).copy()

    def list_templates(self, published_only: bool = False) -> List[TemplateSchema]:
        """
        List templates: built-ins first (in picker order), then user templates by name.

        Args:
            published_only: Skip unpublished templates

        Returns:
            Copies of the matching templates
        """
        user_templates = sorted(self._templates.values(), key=lambda t: (t.name.lower(), t.id))
        templates = list(self._builtins.values()) + user_templates
        return [t.copy() for t in templates if t.is_published or not published_only]

    def create(self, schema: TemplateSchema, created_by: str) -> TemplateSchema:
        """
        Add a new user template.

        The template gets a fresh id, created_by, version 1 and timestamps; the
        passed schema is not modified.

        Raises:
            TemplateValidationError: If the template fails validate_template()
            BuiltInTemplateError: If created_by is the system owner
        """
        if created_by == SYSTEM_OWNER:
            raise BuiltInTemplateError(schema.id or "<new>", action="create")

        errors = validate_template(schema)
        if errors:
            raise TemplateValidationError(errors, template_id=schema.id or None)

        template = schema.copy()
        template.id = generate_template_id()
        template.created_by = created_by
        template.version = 1
        template.created_at = now_exact()
        template.updated_at = template.created_at

        self._templates[template.id] = template
        _log_info(f"Created template {template.id} ({template.name!r}) for {created_by}")
        return template.copy()

    def clone(self, source_id: str, created_by: str, name: Optional[str] = None) -> TemplateSchema:
        """
        Clone any template into a new user template.

        The clone differs from its source only in id and created_by (and name,
        when given), so it renders exactly like the source and is editable by
        created_by.

        Args:
            source_id: Template to clone (built-in or user)
            created_by: Owner of the clone
            name: Optional display name for the clone

        Returns:
            Copy of the stored clone

        Raises:
            TemplateNotFoundError: If source_id is unknown
        """
        if created_by == SYSTEM_OWNER:
            raise BuiltInTemplateError(source_id, action="clone as system")

        clone = self._lookup(source_id).copy()
        clone.id = generate_template_id()
        clone.created_by = created_by
        if name is not None:
            clone.name = name

        self._templates[clone.id] = clone
        log_template_cloned(source_id, clone.id, created_by)
        return clone.copy()

    def save(
        self,
        schema: TemplateSchema,
        user_id: str,
        role: str = USER_ROLE,
        bump_version: bool = False,
    ) -> TemplateSchema:
        """
        Save edits to an existing user template.

        Args:
            schema: Edited template (usually obtained from get() or clone())
            user_id: User saving the template
            role: USER_ROLE, or ADMIN_ROLE to edit templates owned by others
            bump_version: Increment the version number

        Returns:
            Copy of the stored template

        Raises:
            BuiltInTemplateError: If schema is a built-in
            TemplatePermissionError: If user_id does not own the template
            TemplateNotFoundError: If the template was never created
            TemplateValidationError: If the template fails validate_template()
        """
        if schema.is_built_in or schema.id in self._builtins:
            raise BuiltInTemplateError(schema.id, action="save")

        stored = self._lookup(schema.id)
        self._check_can_modify(stored, user_id, role, action="save")

        errors = validate_template(schema)
        if errors:
            raise TemplateValidationError(errors, template_id=schema.id)

        template = schema.copy()
        template.created_by = stored.created_by
        template.created_at = stored.created_at
        template.version = stored.version + 1 if bump_version else stored.version
        template.updated_at = now_exact()

        self._templates[template.id] = template
        log_template_saved(template.id, user_id, template.version)
        return template.copy()

    def delete(self, template_id: str, user_id: str, role: str = USER_ROLE) -> None:
        """Delete a user template (same ownership rules as save())."""
        self._check_can_modify(self._lookup(template_id), user_id, role, action="delete")
        del self._templates[template_id]
        _log_info(f"Deleted template {template_id} for {user_id}")

    def publish(self, template_id: str, user_id: str, role: str = USER_ROLE) -> TemplateSchema:
        return self._set_published(template_id, user_id, role, True)

    def unpublish(self, template_id: str, user_id: str, role: str = USER_ROLE) -> TemplateSchema:
        return self._set_published(template_id, user_id, role, False)

    def _set_published(self, template_id: str, user_id: str, role: str, published: bool) -> TemplateSchema:
        template = self._lookup(template_id)
        self._check_can_modify(template, user_id, role, action="publish" if published else "unpublish")
        template.is_published = published
        template.updated_at = now_exact()
        _log_info(f"{'Published' if published else 'Unpublished'} template {template_id}")
        return template.copy()

    def load_directory(self, templates_dir: Path, default_owner: Optional[str] = None) -> int:
        """
        Load user templates from *.yaml / *.yml / *.json files.

        Files owned by the system sentinel, or reusing a built-in id, are skipped
        with a warning: built-ins only come from the built-in directory. A file
        with no createdBy owner is given default_owner, or skipped with a warning
        when there is none.

        Args:
            templates_dir: Directory to scan (not recursive)
            default_owner: Owner for files that do not name one

        Returns:
            Number of templates loaded

        Raises:
            TemplateFileError: If the directory is missing or a file cannot be parsed
        """
        if not templates_dir.is_dir():
            raise TemplateFileError("Templates directory not found", path=templates_dir)

        loaded = 0
        for path in sorted(templates_dir.iterdir()):
            if path.suffix not in TEMPLATE_FILE_SUFFIXES:
                continue
            try:
                document = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
            except Exception as e:
                raise TemplateFileError("Failed to load template", path=path, original_error=e) from e

            if isinstance(document, dict) and not str(document.get("createdBy") or "").strip():
                if not default_owner:
                    _log_warning(f"Skipping {path.name}: no createdBy owner and no default owner given")
                    continue
                _log_info(f"{path.name} has no createdBy owner; loading it as {default_owner}")
                document = {**document, "createdBy": default_owner}

            template = TemplateSchema.from_dict(document)
            if not template.id:
                template.id = path.stem
            if template.is_built_in or template.id in self._builtins:
                _log_warning(f"Skipping {path.name}: built-in templates cannot be loaded as user templates")
                continue

            self._templates[template.id] = template
            _log_debug(f"Loaded template {template.id} from {path}")
            loaded += 1

        _log_info(f"Loaded {loaded} template(s) from {templates_dir}")
        return loaded

    def export_template(self, template_id: str, output_path: Path) -> Path:
        """
        Write a template document to YAML (or JSON, for a .json path).

        Raises:
            TemplateNotFoundError: If template_id is unknown
            TemplateFileError: If the file cannot be written
        """
        document = self._lookup(template_id).to_dict()
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            if output_path.suffix == ".json":
                output_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
            else:
                OmegaConf.save(OmegaConf.create(document), output_path)
        except OSError as e:
            raise TemplateFileError("Failed to write template", path=output_path, original_error=e) from e

        _log_info(f"Exported template {template_id} to {output_path}")
        return output_path

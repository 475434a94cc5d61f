"""Custom exceptions for the templating context."""

from pathlib import Path
from typing import List, Optional


class InvalidTemplateStructureError(ValueError):
    """
    Raised when a template or resume document is not shaped like one at all
    (e.g. a list or scalar where a mapping is expected).

    Partial or oddly-valued documents are not errors: they are filled with
    defaults and normalized instead.
    """

    pass


class TemplateNotFoundError(KeyError):
    """Raised when a template id is not known to the library."""

    def __init__(self, template_id: str, available: Optional[List[str]] = None):
        self.template_id = template_id
        self.available = available or []
        message = f"Template '{template_id}' not found"
        if self.available:
            message += f". Available templates: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class TemplateValidationError(ValueError):
    """
    Raised when a template fails validation before being created or saved.

    Attributes:
        errors: Human-readable validation messages
        template_id: Id of the offending template, when known
    """

    def __init__(self, errors: List[str], template_id: Optional[str] = None):
        self.errors = list(errors)
        self.template_id = template_id

        parts = ["Template validation failed"]
        if template_id:
            parts[0] += f" for '{template_id}'"
        parts.extend(f"  - {error}" for error in self.errors)

        super().__init__("\n".join(parts))


class BuiltInTemplateError(PermissionError):
    """Raised when saving or deleting a built-in template. Built-ins must be cloned first."""

    def __init__(self, template_id: str, action: str = "modify"):
        self.template_id = template_id
        self.action = action
        super().__init__(f"Cannot {action} built-in template '{template_id}'. Clone it first.")


class TemplatePermissionError(PermissionError):
    """
    Raised when a user edits a template owned by someone else.

    Attributes:
        template_id: Template being edited
        owner: The template's owner
        user_id: The user attempting the edit
    """

    def __init__(self, template_id: str, owner: str, user_id: str):
        self.template_id = template_id
        self.owner = owner
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' cannot modify template '{template_id}' owned by '{owner}'"
        )


class TemplateFileError(OSError):
    """Raised when a template file cannot be read or written."""

    def __init__(self, message: str, path: Optional[Path] = None, original_error: Optional[Exception] = None):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"\nFile: {path}")
        if original_error:
            parts.append(f"\nOriginal error: {original_error}")

        super().__init__("\n".join(parts))

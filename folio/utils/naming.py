"""Export file naming."""

import re
from typing import Optional

_UNSAFE_CHARACTERS = re.compile(r'[\\/:*?"<>|]')
_WHITESPACE = re.compile(r"\s+")


def export_filename(display_name: Optional[str], extension: str = "pdf") -> str:
    """
    Build the download name for an exported résumé.

    Args:
        display_name: Subject's name, or None
        extension: File extension, with or without the leading dot

    Returns:
        "<Name_With_Underscores>_Resume.<ext>", or "Resume.<ext>" without a name

    Examples:
        >>> export_filename("Jane Q. Doe", "docx")
        'Jane_Q._Doe_Resume.docx'
        >>> export_filename("", "pdf")
        'Resume.pdf'
    """
    extension = extension.lstrip(".")
    name = _UNSAFE_CHARACTERS.sub("", display_name or "").strip()
    if not name:
        return f"Resume.{extension}"
    return f"{_WHITESPACE.sub('_', name)}_Resume.{extension}"


def document_title(display_name: Optional[str]) -> str:
    """Human-readable title for page and file metadata: "Jane Doe Resume", or "Resume"."""
    return export_filename(display_name, "txt").rsplit(".", 1)[0].replace("_", " ")

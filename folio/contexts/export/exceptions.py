"""Custom exceptions for the export context."""

from pathlib import Path
from typing import Optional


class DocumentExportError(Exception):
    """
    Raised when an output file cannot be produced.

    Attributes:
        message: What failed
        output_path: File being written
        original_error: Underlying exception, when there is one
    """

    def __init__(self, message: str, output_path: Optional[Path] = None, original_error: Optional[Exception] = None):
        self.message = message
        self.output_path = output_path
        self.original_error = original_error

        parts = [message]
        if output_path:
            parts.append(f"\nOutput: {output_path}")
        if original_error:
            parts.append(f"\nOriginal error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))

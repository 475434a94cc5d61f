from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class ExportResult:
    """
    Result of painting an output tree to a file.

    Attributes:
        success: Whether the file was written
        output_path: Target file
        block_count: Top-level blocks painted (sections for HTML, content blocks for DOCX)
        error: Error message when success is False
    """

    success: bool
    output_path: Path
    block_count: int = 0
    error: Optional[str] = None

"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logging setup
- Date formatting
- Inline markup parsing
- Text coercion helpers
- Export file naming
"""

from folio.utils.dates import format_date, format_date_range
from folio.utils.naming import document_title, export_filename
from folio.utils.timestamp import epoch_millis, now, now_exact

__all__ = ["format_date", "format_date_range", "export_filename", "document_title", "epoch_millis", "now", "now_exact"]

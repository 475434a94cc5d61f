"""
Export Context

Responsibilities:
- Paints preview trees to HTML (Jinja2)
- Writes document trees to .docx (python-docx) and .pdf (reportlab)
- Owns every file write of a rendered résumé

Owns: Output files, HTML templates
Never: Resolves fields or decides layout (see contexts/rendering)
"""

from folio.contexts.export.docx_writer import DocxWriter, write_docx
from folio.contexts.export.exceptions import DocumentExportError
from folio.contexts.export.export_result import ExportResult
from folio.contexts.export.html_painter import HtmlTemplateRegistry, paint_fragment, paint_html, write_html
from folio.contexts.export.pdf_writer import PdfWriter, write_pdf

__all__ = [
    "paint_html",
    "paint_fragment",
    "write_html",
    "HtmlTemplateRegistry",
    "write_docx",
    "DocxWriter",
    "write_pdf",
    "PdfWriter",
    "ExportResult",
    "DocumentExportError",
]

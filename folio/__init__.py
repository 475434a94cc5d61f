"""
FOLIO - Field-Oriented Layout for Itemized Output

A template-driven resume rendering engine. A declarative template describes how each
resume section is laid out; the engine turns template + resume data into two render
trees (interactive preview and paginated document) that always carry the same text.

Architecture:
- Templating Context: template schema, resume data model, built-in templates, editing
- Rendering Context: field resolution, row composition, section assembly, emission
- Export Context: painting preview trees to HTML and document trees to DOCX or PDF
"""

__version__ = "0.1.0"

"""
Rendering Context

Responsibilities:
- Resolves template fields against résumé entities (absent when missing or unknown)
- Composes template rows (separators, inline styles, space-between splitting)
- Assembles sections (items, summary, skills layouts, headings, empty-section policy)
- Orders sections by the template's section order
- Emits two output trees from one composed résumé: a preview tree and a
  fixed-page document tree with identical text content

Owns: The template-driven rendering engine (pure, synchronous, no I/O)
Never: Enforces template ownership, writes files (see contexts/export)
"""

from folio.contexts.rendering.document_tree import DocumentTree
from folio.contexts.rendering.emitter import EmitResult, emit, render
from folio.contexts.rendering.field_resolver import FieldContext, resolve, resolve_rich
from folio.contexts.rendering.preview_tree import PreviewNode
from folio.contexts.rendering.render_config import RenderConfig, default_render_config, load_render_config
from folio.contexts.rendering.rendered import RenderedResume, RenderedRow, RenderedSection
from folio.contexts.rendering.row_compositor import compose
from folio.contexts.rendering.section_assembler import assemble, assemble_header
from folio.contexts.rendering.section_order import compose_resume, order_sections

__all__ = [
    # Entry points
    "render",
    "emit",
    "EmitResult",
    # Pipeline stages
    "resolve",
    "resolve_rich",
    "compose",
    "assemble",
    "assemble_header",
    "order_sections",
    "compose_resume",
    # Types
    "FieldContext",
    "RenderConfig",
    "RenderedResume",
    "RenderedSection",
    "RenderedRow",
    "PreviewNode",
    "DocumentTree",
    # Configuration
    "load_render_config",
    "default_render_config",
]

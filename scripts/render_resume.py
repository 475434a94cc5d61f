#!/usr/bin/env python3
"""
Render a Résumé with a Template

Renders résumé data (YAML or JSON) with a built-in or user template and writes
the preview as HTML or the document as DOCX or PDF.

Examples:
    # HTML preview with the default ATS template
    python scripts/render_resume.py preview data/jane_doe.yaml

    # DOCX export with a built-in template and presets
    python scripts/render_resume.py export data/jane_doe.yaml -t builtin-modern -p density_compact

    # PDF export
    python scripts/render_resume.py export data/jane_doe.yaml -f pdf

    # Check that both output trees carry the same text
    python scripts/render_resume.py parity data/jane_doe.yaml -t modern-default
"""

import json
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from folio.contexts.export import DocumentExportError, write_docx, write_html, write_pdf
from folio.contexts.export.logger import setup_export_logger
from folio.contexts.rendering import render
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.contexts.templating import (
    InvalidTemplateStructureError,
    ResumeData,
    TemplateFileError,
    TemplateLibrary,
    TemplateNotFoundError,
    TemplateSchema,
    apply_presets_to_schema,
)
from folio.utils.logger import run_log_dir
from folio.utils.naming import document_title, export_filename

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

WRITERS = {"docx": write_docx, "pdf": write_pdf}

app = typer.Typer(
    help="Render résumé data with a layout template",
    add_completion=False,
)


def _load_document(path: Path) -> dict:
    if not path.exists():
        typer.secho(f"File not found: {path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return OmegaConf.to_container(OmegaConf.load(path), resolve=True)


def _load_inputs(
    resume_file: Path,
    template_id: str,
    template_file: Optional[Path],
    templates_dir: Optional[Path],
    presets: List[str],
):
    """Load résumé data and the template (with presets applied)."""
    try:
        data = ResumeData.from_dict(_load_document(resume_file))

        if template_file:
            schema = TemplateSchema.from_dict(_load_document(template_file))
        else:
            library = TemplateLibrary()
            if templates_dir:
                library.load_directory(templates_dir)
            schema = library.get(template_id)

        if presets:
            schema = apply_presets_to_schema(schema, presets)
    except (TemplateNotFoundError, TemplateFileError, InvalidTemplateStructureError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    return data, schema


TemplateOption = Annotated[str, typer.Option("--template", "-t", help="Template id (built-in or user)")]
TemplateFileOption = Annotated[
    Optional[Path], typer.Option("--template-file", help="Render with a template document instead of an id")
]
TemplatesDirOption = Annotated[
    Optional[Path], typer.Option("--templates-dir", help="Directory of user templates to load")
]
PresetsOption = Annotated[
    Optional[List[str]], typer.Option("--preset", "-p", help="Preset to apply (repeatable)")
]


@app.command("preview")
def preview_command(
    resume_file: Annotated[Path, typer.Argument(help="Résumé data (YAML or JSON)")],
    template: TemplateOption = "ats-default",
    template_file: TemplateFileOption = None,
    templates_dir: TemplatesDirOption = None,
    preset: PresetsOption = None,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output HTML path")] = None,
):
    """
    Render the interactive preview to a standalone HTML page.

    Examples:\n
        $ render_resume.py preview data/jane_doe.yaml -o outs/jane.html
    """
    setup_export_logger(run_log_dir("preview", LOGS_PATH), output_format="html", template_id=template)
    data, schema = _load_inputs(resume_file, template, template_file, templates_dir, preset or [])

    result = render(schema, data)
    output_path = output or Path("outs") / export_filename(data.display_name, "html")
    try:
        write_html(result.preview, output_path, title=document_title(data.display_name))
    except DocumentExportError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Preview written", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output_path}")


@app.command("export")
def export_command(
    resume_file: Annotated[Path, typer.Argument(help="Résumé data (YAML or JSON)")],
    template: TemplateOption = "ats-default",
    template_file: TemplateFileOption = None,
    templates_dir: TemplatesDirOption = None,
    preset: PresetsOption = None,
    output_format: Annotated[str, typer.Option("--format", "-f", help="Output format: docx or pdf")] = "docx",
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Output file path")] = None,
    dump_tree: Annotated[
        bool, typer.Option("--dump-tree", help="Also write the document definition as JSON")
    ] = False,
):
    """
    Export the document tree to a .docx or .pdf file named after the subject.

    Examples:\n
        $ render_resume.py export data/jane_doe.yaml -t builtin-classic\n
        $ render_resume.py export data/jane_doe.yaml -f pdf
    """
    output_format = output_format.lower()
    if output_format not in WRITERS:
        typer.secho(f"Unknown format: {output_format} (choose from {', '.join(WRITERS)})", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_export_logger(run_log_dir("export", LOGS_PATH), output_format=output_format, template_id=template)
    data, schema = _load_inputs(resume_file, template, template_file, templates_dir, preset or [])

    result = render(schema, data)
    output_path = output or Path("outs") / result.document.filename(output_format)
    try:
        WRITERS[output_format](result.document, output_path)
    except DocumentExportError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if dump_tree:
        tree_path = output_path.with_suffix(".json")
        tree_path.write_text(json.dumps(result.document.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        typer.echo(f"  Tree: {tree_path}")

    typer.secho("✓ Document exported", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output_path}")


@app.command("parity")
def parity_command(
    resume_file: Annotated[Path, typer.Argument(help="Résumé data (YAML or JSON)")],
    template: TemplateOption = "ats-default",
    template_file: TemplateFileOption = None,
    templates_dir: TemplatesDirOption = None,
    preset: PresetsOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Print every text segment")] = False,
):
    """
    Check that the preview and document trees carry identical text.

    Exits with code 1 on a mismatch.
    """
    setup_rendering_logger(run_log_dir("parity", LOGS_PATH), template_id=template)
    data, schema = _load_inputs(resume_file, template, template_file, templates_dir, preset or [])
    result = render(schema, data)

    preview_segments = result.preview.text_segments()
    if verbose:
        for index, text in enumerate(preview_segments):
            typer.echo(f"{index:4d}  {text}")

    if not result.content_matches():
        typer.secho("✗ Preview and document differ", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Both targets carry the same {len(preview_segments)} text segments", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()

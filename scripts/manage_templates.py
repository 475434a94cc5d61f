#!/usr/bin/env python3
"""
Command-line interface for layout templates.

Commands:
    list     - List built-in (and optionally user) templates
    show     - Print a template document as YAML
    clone    - Clone a template into a user template file
    presets  - List presets, or apply presets to a template file
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from folio.contexts.templating import (
    TemplateFileError,
    TemplateLibrary,
    TemplateNotFoundError,
    TemplateSchema,
    apply_presets_to_schema,
    normalize_template_with_report,
)
from folio.contexts.templating.config_resolver import list_presets
from folio.contexts.templating.logger import setup_templating_logger
from folio.utils.logger import run_log_dir

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Manage résumé layout templates",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _library(templates_dir: Optional[Path]) -> TemplateLibrary:
    library = TemplateLibrary()
    if templates_dir:
        try:
            library.load_directory(templates_dir)
        except TemplateFileError as e:
            typer.secho(str(e), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    return library


TemplatesDirOption = Annotated[
    Optional[Path], typer.Option("--templates-dir", help="Directory of user templates to include")
]


@app.command("list")
def list_command(
    templates_dir: TemplatesDirOption = None,
    published_only: Annotated[bool, typer.Option("--published", help="Only published templates")] = False,
):
    """List templates, built-ins first."""
    for template in _library(templates_dir).list_templates(published_only=published_only):
        marker = "built-in" if template.is_built_in else f"by {template.created_by}"
        ats = "ATS" if template.ats_compatible else "   "
        typer.echo(f"{template.id:<32} {ats}  {template.name} ({marker})")


@app.command("show")
def show_command(
    template_id: Annotated[str, typer.Argument(help="Template id")],
    templates_dir: TemplatesDirOption = None,
    check: Annotated[bool, typer.Option("--check", help="Report values normalization would replace")] = False,
):
    """Print a template document as YAML."""
    try:
        template = _library(templates_dir).get(template_id)
    except TemplateNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(OmegaConf.to_yaml(OmegaConf.create(template.to_dict())).rstrip())

    if check:
        report = normalize_template_with_report(template)
        if report.changed:
            typer.secho(f"\n{len(report.changes)} value(s) would be replaced:", fg=typer.colors.YELLOW)
            for change in report.changes:
                typer.echo(f"  {change}")
        else:
            typer.secho("\n✓ Template is already normalized", fg=typer.colors.GREEN)


@app.command("clone")
def clone_command(
    template_id: Annotated[str, typer.Argument(help="Template to clone")],
    user: Annotated[str, typer.Option("--user", "-u", help="Owner of the clone")],
    output_dir: Annotated[Path, typer.Option("--output-dir", "-o", help="Directory for the clone file")],
    name: Annotated[Optional[str], typer.Option("--name", help="Name for the clone")] = None,
    templates_dir: TemplatesDirOption = None,
):
    """
    Clone a template and save it as a user template file.

    Examples:\n
        $ manage_templates.py clone ats-default --user jane -o templates/
    """
    setup_templating_logger(run_log_dir("template", LOGS_PATH), operation="clone")
    library = _library(templates_dir)
    try:
        clone = library.clone(template_id, created_by=user, name=name)
        output_path = library.export_template(clone.id, output_dir / f"{clone.id}.yaml")
    except (TemplateNotFoundError, TemplateFileError, PermissionError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Cloned {template_id} -> {clone.id}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output_path}")


@app.command("presets")
def presets_command(
    template_file: Annotated[
        Optional[Path], typer.Argument(help="Template file to apply presets to (omit to list presets)")
    ] = None,
    presets: Annotated[Optional[List[str]], typer.Argument(help="Preset names, applied in order")] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Output path (defaults to overwriting input)")
    ] = None,
):
    """
    List presets, or apply presets to a template file.

    Examples:\n
        $ manage_templates.py presets

        $ manage_templates.py presets templates/mine.yaml density_compact colors_mono
    """
    if template_file is None:
        for category, names in list_presets().items():
            typer.secho(category, bold=True)
            for preset_name in names:
                typer.echo(f"  {category}_{preset_name}")
        return

    if not presets:
        typer.secho("Give at least one preset name", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_templating_logger(run_log_dir("template", LOGS_PATH), operation="presets")
    template = TemplateSchema.from_dict(OmegaConf.to_container(OmegaConf.load(template_file), resolve=True))
    if template.is_built_in:
        typer.secho("Built-in templates cannot be modified. Clone it first.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        updated = apply_presets_to_schema(template, presets)
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output_path = output or template_file
    OmegaConf.save(OmegaConf.create(updated.to_dict()), output_path)
    typer.secho(f"✓ Applied {len(presets)} preset(s) to {updated.id}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output_path}")


if __name__ == "__main__":
    app()

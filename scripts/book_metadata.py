#!/usr/bin/env python3
"""
Command-line interface for book metadata files.

Reads front-matter metadata (a bare metadata file or a Markdown file with a
``---`` header), shows the canonical record, re-exports it and checks that it
survives a serialize/parse roundtrip.

Commands:
    show      - Show canonical fields, passthrough fields and input files
    export    - Re-export a metadata file as canonical front matter
    roundtrip - Check that parse(stringify(metadata)) reproduces the metadata

Examples:\n

    book_metadata.py show config/metadata.yaml

    book_metadata.py show book.md --raw

    book_metadata.py export book.md outs/metadata.yaml

    book_metadata.py roundtrip config/metadata.yaml
"""

import os
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from bookcreator.contexts.metadata import export_metadata, import_metadata, stringify, validate_roundtrip
from bookcreator.contexts.metadata.exceptions import MetadataExportError, MetadataImportError
from bookcreator.contexts.metadata.logger import (
    log_import_result,
    log_roundtrip_result,
    setup_metadata_logger,
)
from bookcreator.utils.report_formatter import Column, TableFormatter

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Inspect, re-export and roundtrip-check book metadata files",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _session_dir(phase: str) -> Path:
    return LOGS_PATH / f"metadata_{phase}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"


def _import_or_exit(path: Path):
    try:
        return import_metadata(path)
    except MetadataImportError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("show")
def show_command(
    path: Annotated[Path, typer.Argument(help="Metadata or Markdown file with front matter")],
    raw: Annotated[
        bool,
        typer.Option("--raw", help="Print the parsed front matter as written instead of the canonical fields"),
    ] = False,
):
    """
    Show the canonical metadata of a file.

    Examples:\n

        $ book_metadata.py show config/metadata.yaml

        $ book_metadata.py show book.md --raw
    """
    setup_metadata_logger(_session_dir("show"), phase="import")
    result = _import_or_exit(path)
    log_import_result(path, result)

    if raw:
        typer.echo(stringify(result.external), nl=False)
        return

    record = result.record
    table = TableFormatter([Column("Field", 20), Column("Value", 59)], total_width=80)
    table.title(f"Metadata: {path.name}")
    table.header().rule()
    for name in record.ordered_fields():
        table.row(name, record.get_text(name))
    if record.extra:
        table.blank().row("(passthrough)", "").rule()
        for name in record.extra:
            table.row(name, record.get_text(name))
    typer.echo(table.render())

    if result.input_files:
        typer.secho(f"\nInput files ({len(result.input_files)}):", bold=True)
        for index, name in enumerate(result.input_files):
            typer.echo(f"  {index:>3}  {name}")


@app.command("export")
def export_command(
    source: Annotated[Path, typer.Argument(help="Metadata or Markdown file to read")],
    output: Annotated[Path, typer.Argument(help="Front-matter file to write")],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", "-f", help="Replace the output file if it exists"),
    ] = False,
):
    """
    Re-export a metadata file with canonical field names.

    Examples:\n

        $ book_metadata.py export book.md outs/metadata.yaml
    """
    if output.exists() and not overwrite:
        typer.secho(f"Error: {output} exists (use --overwrite)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_metadata_logger(_session_dir("export"), phase="export")
    result = _import_or_exit(source)

    try:
        written = export_metadata(result.record, output)
    except MetadataExportError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Exported {len(result.record.fields)} fields to {written}", fg=typer.colors.GREEN)


@app.command("roundtrip")
def roundtrip_command(
    paths: Annotated[list[Path], typer.Argument(help="Metadata files to check")],
):
    """
    Check that serializing then parsing each file reproduces its metadata.

    Exits with code 1 if any file changes.

    Examples:\n

        $ book_metadata.py roundtrip config/metadata.yaml book.md
    """
    setup_metadata_logger(_session_dir("roundtrip"), phase="roundtrip")

    failures = 0
    for path in paths:
        result = _import_or_exit(path)
        matches = validate_roundtrip(result.external)
        log_roundtrip_result(path.name, matches)
        if matches:
            typer.secho(f"✓ {path.name}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"✗ {path.name}", fg=typer.colors.RED)
            failures += 1

    if failures:
        typer.secho(f"\n{failures}/{len(paths)} files changed in roundtrip", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

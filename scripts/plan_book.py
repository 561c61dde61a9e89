#!/usr/bin/env python3
"""
Plan the documents of a book project without touching the layout application.

Loads the book project, reads its metadata, lists its content files, then
prints the template chosen for each content file and the documents that would
be generated, in book order, with the content each one receives.

Content files come from the metadata's ``input-files`` list, or else from the
project's content directory (Markdown and text files).

Usage:
    python scripts/plan_book.py
    python scripts/plan_book.py --project books/dune/book.yaml --verbose
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from bookcreator.contexts.assembly import (
    BOOK_PROJECT_PATH,
    BookProject,
    BookProjectError,
    load_book_project,
    plan_documents,
    template_descriptors,
)
from bookcreator.contexts.assembly.logger import log_generation_plan, setup_assembly_logger
from bookcreator.contexts.matching import build_match_plan
from bookcreator.contexts.matching.logger import log_match_plan, setup_matching_logger
from bookcreator.contexts.metadata import MetadataRecord, import_metadata
from bookcreator.contexts.metadata.exceptions import MetadataImportError
from bookcreator.utils.report_formatter import Column, TableFormatter

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

CONTENT_EXTENSIONS = {".md", ".markdown", ".txt"}

app = typer.Typer(add_completion=False, help="Plan the documents of a book project.")


def list_content_files(project: BookProject, record: Optional[MetadataRecord]) -> List[str]:
    """Content files listed in the metadata, else those found in the content directory."""
    if record is not None and record.input_files:
        return record.input_files
    if project.content_dir is None or not project.content_dir.is_dir():
        return []
    return [path.name for path in project.content_dir.iterdir() if path.suffix.lower() in CONTENT_EXTENSIONS]


@app.command()
def main(
    project_path: Annotated[
        Path,
        typer.Option("--project", "-p", help="Book project YAML file"),
    ] = BOOK_PROJECT_PATH,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every match decision"),
    ] = False,
):
    """Print the template match plan and the generation plan of a book project."""
    try:
        project = load_book_project(project_path)
    except BookProjectError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    session = LOGS_PATH / f"plan_{project.name or 'book'}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    setup_assembly_logger(session, book_name=project.name)

    record = None
    if project.metadata_path is not None:
        try:
            record = import_metadata(project.metadata_path).record
        except MetadataImportError as e:
            typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    content_files = list_content_files(project, record)

    try:
        plan = plan_documents(project, content_files if project.inject_content else None, record)
    except BookProjectError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_generation_plan(plan)

    if content_files:
        setup_matching_logger(session, strategy=project.strategy)
        match_plan = build_match_plan(content_files, template_descriptors(project))
        log_match_plan(match_plan, verbose=verbose)

        matches = TableFormatter(
            [Column("#", 4, ">"), Column("Content", 32), Column("Template", 32), Column("Score", 6, ">"), Column("", 8)]
        )
        matches.title(f"Template matches ({len(match_plan)} content files)")
        matches.header().rule()
        for entry in match_plan:
            template = entry.template.identifier if entry.template else "-"
            matches.row(
                match_plan.ordinal_of(entry.content.name),
                entry.content.name,
                template,
                entry.score,
                "fallback" if entry.fallback else "",
            )
        typer.echo(matches.render())
        typer.echo("")

    documents = TableFormatter([Column("Document", 34), Column("Role", 8), Column("Book", 5), Column("Content", 50)])
    documents.title(f"Generation plan: {plan.book_file}")
    documents.header().rule()
    documents.rows(
        (d.output_name, d.role.value, "yes" if d.in_book else "no", d.content or "-") for d in plan.documents
    )
    typer.echo(documents.render())

    if plan.unpaired_content:
        typer.secho(f"\n{len(plan.unpaired_content)} content files without a document:", fg=typer.colors.YELLOW)
        for name in plan.unpaired_content:
            typer.echo(f"  {name}")


if __name__ == "__main__":
    app()

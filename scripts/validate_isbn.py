#!/usr/bin/env python3
"""
Validate ISBN (EAN-13) identifiers and show their barcode pattern.

Usage:
    python scripts/validate_isbn.py 978-2-07-036822-8
    python scripts/validate_isbn.py 978207036822 --barcode
    python scripts/validate_isbn.py 978-88-XXXX-XXX-X
"""

import typer
from typing_extensions import Annotated

from bookcreator.contexts.identifiers import barcode_pattern, validate

app = typer.Typer(add_completion=False, help="Validate ISBN identifiers.")


@app.command()
def main(
    identifiers: Annotated[list[str], typer.Argument(help="ISBNs to check (hyphens and spaces allowed)")],
    barcode: Annotated[
        bool,
        typer.Option("--barcode", "-b", help="Also print the 95-module EAN-13 bar pattern"),
    ] = False,
):
    """Validate identifiers; exits with code 1 if any is invalid."""
    invalid = 0

    for raw in identifiers:
        result = validate(raw)
        if not result.valid:
            typer.secho(f"✗ {raw}: {result.message}", fg=typer.colors.RED, err=True)
            invalid += 1
            continue

        note = f" ({result.message})" if result.message else ""
        typer.secho(f"✓ {raw} -> {result.normalized_code}{note}", fg=typer.colors.GREEN)

        if barcode:
            pattern = barcode_pattern(raw)
            if pattern is None:
                typer.echo("  (no barcode for placeholder identifiers)")
            else:
                typer.echo(f"  {pattern}")

    if invalid:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

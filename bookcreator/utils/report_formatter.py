"""
Plain-text tables for the plan and metadata reports printed by scripts.

    table = TableFormatter([Column("Document", 34), Column("Book", 5)])
    table.title("Generation plan").header().rule()
    table.rows([("DUNE-Chapter_1.indd", "yes"), ("DUNE-COVER.indd", "no")])
    typer.echo(table.render())
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from bookcreator.utils.text_processing import truncate_display

SECTION_RULE = "="
TABLE_RULE = "-"


@dataclass(frozen=True)
class Column:
    """One table column; align is a format alignment ('<', '>' or '^')."""

    name: str
    width: int
    align: str = "<"

    def cell(self, value: Any) -> str:
        """Value padded to the column width, truncated with '...' when too long."""
        return f"{truncate_display(str(value), self.width):{self.align}{self.width}}"


class TableFormatter:
    """Accumulates report lines; every adder returns self for chaining."""

    def __init__(self, columns: Sequence[Column], total_width: int = 100):
        self.columns = list(columns)
        self.total_width = total_width
        self.lines: List[str] = []

    def title(self, text: str) -> "TableFormatter":
        self.lines.extend([SECTION_RULE * self.total_width, text, SECTION_RULE * self.total_width])
        return self

    def header(self) -> "TableFormatter":
        return self._append_cells(column.name for column in self.columns)

    def rule(self, char: str = TABLE_RULE) -> "TableFormatter":
        self.lines.append(char * self.total_width)
        return self

    def row(self, *values: Any) -> "TableFormatter":
        """
        Add one row.

        Raises:
            ValueError: If the value count differs from the column count
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")
        return self._append_cells(values)

    def rows(self, rows: Iterable[Sequence[Any]]) -> "TableFormatter":
        for values in rows:
            self.row(*values)
        return self

    def blank(self) -> "TableFormatter":
        self.lines.append("")
        return self

    def render(self) -> str:
        return "\n".join(self.lines)

    def _append_cells(self, values: Iterable[Any]) -> "TableFormatter":
        self.lines.append(" ".join(column.cell(value) for column, value in zip(self.columns, values)))
        return self

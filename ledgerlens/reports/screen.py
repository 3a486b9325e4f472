"""Terminal rendering with rich."""

from io import StringIO

from rich.console import Console
from rich.table import Table

from ledgerlens.models.enums import RowKind
from ledgerlens.models.statements import Statement
from ledgerlens.reports.base import EMPHASIZED_ROWS, Renderer, format_amount, issue_lines, period_label


class ScreenRenderer(Renderer):
    extension = "ansi"

    def table(self, statement: Statement) -> Table:
        """Build a rich Table from the statement's row model."""
        tbl = Table(
            title=f"{statement.rows.title} - {period_label(statement)}",
            show_header=True,
            caption="\n".join(issue_lines(statement)),
        )
        tbl.add_column("Account", style="cyan")
        for header in self.column_headers(statement):
            tbl.add_column(header, justify="right")

        for row in statement.rows.rows:
            if row.kind == RowKind.BLANK:
                tbl.add_section()
                continue
            style = "bold" if row.kind in EMPHASIZED_ROWS else None
            if row.kind == RowKind.GRAND_TOTAL:
                style = "bold green" if statement.is_balanced else "bold red"
            label = "  " * row.indent + row.label
            tbl.add_row(label, *(format_amount(v) for v in row.values), style=style)
        return tbl

    def render(self, statement: Statement) -> bytes:
        buffer = StringIO()
        console = Console(file=buffer, width=100, force_terminal=False)
        console.print(self.table(statement))
        return buffer.getvalue().encode("utf-8")

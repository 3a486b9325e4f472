"""Plain-text statement report."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ledgerlens.models.statements import Statement
from ledgerlens.reports.base import Renderer, format_amount, issue_lines, period_label

TEMPLATE_DIR = Path(__file__).parent / "templates"

MIN_LABEL_WIDTH = 40
VALUE_WIDTH = 20


class TextRenderer(Renderer):
    """Renders a statement as a fixed-width text report using Jinja2.

    The label column widens to fit the longest label; labels are never cut.
    """

    extension = "txt"

    def __init__(self, currency: str = "EUR"):
        super().__init__(currency)
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_text(self, statement: Statement) -> str:
        headers = self.column_headers(statement)
        rows = [
            {
                "kind": row.kind.value,
                "label": "  " * row.indent + row.label,
                "amounts": [format_amount(v) for v in row.values],
            }
            for row in statement.rows.rows
        ]
        label_width = max([MIN_LABEL_WIDTH] + [len(row["label"]) + 2 for row in rows])
        template = self.env.get_template("statement.txt")
        return template.render(
            title=statement.rows.title,
            period=period_label(statement),
            headers=headers,
            rows=rows,
            issues=issue_lines(statement),
            label_width=label_width,
            value_width=VALUE_WIDTH,
            width=label_width + VALUE_WIDTH * len(headers),
        )

    def render(self, statement: Statement) -> bytes:
        return self.render_text(statement).encode("utf-8")

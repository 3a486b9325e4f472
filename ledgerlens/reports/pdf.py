"""PDF statement export with fpdf2."""

from pathlib import Path

from fpdf import FPDF

from ledgerlens.models.enums import RowKind
from ledgerlens.models.statements import Statement
from ledgerlens.reports.base import EMPHASIZED_ROWS, Renderer, format_amount, issue_lines, period_label

FONT_DIR = Path(__file__).parent / "fonts"
FONT_FAMILY = "DejaVu"

PAGE_WIDTH = 190
VALUE_WIDTH = 40
ROW_HEIGHT = 7
INDENT_WIDTH = 6


class PdfRenderer(Renderer):
    """A4 statement in DejaVu Sans, so labels keep every character they carry."""

    extension = "pdf"

    def _new_document(self) -> FPDF:
        pdf = FPDF(orientation="P", unit="mm", format="A4")
        pdf.add_font(FONT_FAMILY, "", str(FONT_DIR / "DejaVuSans.ttf"))
        pdf.add_font(FONT_FAMILY, "B", str(FONT_DIR / "DejaVuSans-Bold.ttf"))
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.add_page()
        return pdf

    def render(self, statement: Statement) -> bytes:
        pdf = self._new_document()

        pdf.set_font(FONT_FAMILY, "B", 16)
        pdf.cell(0, 10, statement.rows.title, new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(FONT_FAMILY, size=10)
        pdf.cell(0, 6, period_label(statement), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)

        headers = self.column_headers(statement)
        label_width = PAGE_WIDTH - VALUE_WIDTH * len(headers)
        pdf.set_font(FONT_FAMILY, "B", 10)
        pdf.cell(label_width, ROW_HEIGHT, "Account", border="B")
        for header in headers:
            pdf.cell(VALUE_WIDTH, ROW_HEIGHT, header, border="B", align="R")
        pdf.ln(ROW_HEIGHT)

        for row in statement.rows.rows:
            if row.kind == RowKind.BLANK:
                pdf.ln(ROW_HEIGHT / 2)
                continue
            pdf.set_font(FONT_FAMILY, "B" if row.kind in EMPHASIZED_ROWS else "", 10)
            border = "T" if row.kind == RowKind.GRAND_TOTAL else 0
            indent = INDENT_WIDTH * row.indent
            if indent:
                pdf.cell(indent, ROW_HEIGHT, "")
            pdf.cell(label_width - indent, ROW_HEIGHT, row.label, border=border)
            for value in row.values:
                pdf.cell(VALUE_WIDTH, ROW_HEIGHT, format_amount(value), border=border, align="R")
            pdf.ln(ROW_HEIGHT)

        pdf.ln(ROW_HEIGHT)
        pdf.set_font(FONT_FAMILY, size=8)
        for line in issue_lines(statement):
            pdf.multi_cell(0, 5, line, new_x="LMARGIN", new_y="NEXT")

        return bytes(pdf.output())

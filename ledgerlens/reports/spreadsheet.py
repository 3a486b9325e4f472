"""Spreadsheet statement export with openpyxl."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from ledgerlens.models.enums import RowKind
from ledgerlens.models.statements import Statement
from ledgerlens.reports.base import EMPHASIZED_ROWS, Renderer, period_label

NUMBER_FORMAT = "#,##0.00"
HEADER_ROW = 4

_BOLD = Font(bold=True)
_TOP_BORDER = Border(top=Side(style="thin"))


class SpreadsheetRenderer(Renderer):
    """Writes the row model to an .xlsx workbook.

    Amounts are stored as numbers with a two-decimal format, so the sheet
    stays usable for further calculation. A second sheet lists the issues.
    """

    extension = "xlsx"

    def workbook(self, statement: Statement) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = statement.rows.title

        ws.cell(row=1, column=1, value=statement.rows.title).font = Font(bold=True, size=14)
        ws.cell(row=2, column=1, value=period_label(statement))

        ws.cell(row=HEADER_ROW, column=1, value="Account").font = _BOLD
        for col, header in enumerate(self.column_headers(statement), start=2):
            cell = ws.cell(row=HEADER_ROW, column=col, value=header)
            cell.font = _BOLD
            cell.alignment = Alignment(horizontal="right")

        row_idx = HEADER_ROW
        for row in statement.rows.rows:
            row_idx += 1
            if row.kind == RowKind.BLANK:
                continue
            label = ws.cell(row=row_idx, column=1, value=row.label)
            label.alignment = Alignment(indent=row.indent)
            emphasized = row.kind in EMPHASIZED_ROWS
            if emphasized:
                label.font = _BOLD
            for col, value in enumerate(row.values, start=2):
                if value is None:
                    continue
                cell = ws.cell(row=row_idx, column=col, value=value)
                cell.number_format = NUMBER_FORMAT
                if emphasized:
                    cell.font = _BOLD
                if row.kind == RowKind.GRAND_TOTAL:
                    cell.border = _TOP_BORDER

        ws.column_dimensions["A"].width = 42
        for col in range(2, 2 + len(statement.rows.columns)):
            ws.column_dimensions[get_column_letter(col)].width = 20

        issues = wb.create_sheet("Issues")
        issues.append(["Severity", "Code", "Entry", "Message"])
        for cell in issues[1]:
            cell.font = _BOLD
        issues.append(["SUMMARY", "", "", statement.issues.summary])
        for issue in statement.issues.details:
            issues.append([issue.severity.value, issue.code.value, issue.entry_id or "", issue.message])
        return wb

    def render(self, statement: Statement) -> bytes:
        buffer = BytesIO()
        self.workbook(statement).save(buffer)
        return buffer.getvalue()

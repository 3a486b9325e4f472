"""Canonical export row model.

Every renderer (screen, text, PDF, spreadsheet) consumes the same RowModel,
so a statement looks the same wherever it is shown.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import assert_never

from ledgerlens.models.enums import STATEMENT_TITLES, AccountGroup, LineRole, RowKind, StatementKind
from ledgerlens.models.statements import ExportRow, RowModel, StatementBody, total_key

CENT = Decimal("0.01")

TRIAL_BALANCE_COLUMNS = ("Debit (Dr.)", "Credit (Cr.)")
AMOUNT_COLUMNS = ("Amount",)


def quantize(value: Decimal | None) -> Decimal | None:
    """Round a currency value to two decimals, half up."""
    if value is None:
        return None
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def export_filename(kind: StatementKind, as_of: date, ext: str) -> str:
    """File name for an exported statement, e.g. financial-statement-balance-sheet-2024-03-31.pdf."""
    return f"financial-statement-{kind.value}-{as_of.isoformat()}.{ext.lstrip('.')}"


class ExportFormatter:
    """Turns a statement body into the ordered, renderer-neutral row model."""

    def build(self, body: StatementBody) -> RowModel:
        match body.kind:
            case StatementKind.TRIAL_BALANCE:
                columns, rows = TRIAL_BALANCE_COLUMNS, self._trial_balance(body)
            case StatementKind.BALANCE_SHEET:
                columns, rows = AMOUNT_COLUMNS, self._balance_sheet(body)
            case StatementKind.PROFIT_AND_LOSS:
                columns, rows = AMOUNT_COLUMNS, self._profit_loss(body)
            case StatementKind.CASH_FLOW:
                columns, rows = AMOUNT_COLUMNS, self._cash_flow(body)
            case _:
                assert_never(body.kind)
        return RowModel(
            kind=body.kind,
            title=STATEMENT_TITLES[body.kind],
            columns=columns,
            rows=tuple(rows),
        )

    @staticmethod
    def _row(kind: RowKind, group: str = "", label: str = "", *values: Decimal | None, indent: int = 0) -> ExportRow:
        return ExportRow(
            kind=kind,
            group=group,
            label=label,
            values=tuple(quantize(v) for v in values),
            indent=indent,
        )

    def _trial_balance(self, body: StatementBody) -> list[ExportRow]:
        rows: list[ExportRow] = []
        for group, lines in body.groups.items():
            rows.append(self._row(RowKind.HEADER, group.value, group.value, None, None))
            for line in lines:
                rows.append(self._row(RowKind.ITEM, group.value, line.account, line.debit, line.credit, indent=1))
            rows.append(self._row(
                RowKind.GROUP_TOTAL,
                group.value,
                f"Total {group.value}",
                body.totals[total_key(group, "debit")],
                body.totals[total_key(group, "credit")],
            ))
            rows.append(self._row(RowKind.BLANK, group.value, "", None, None))
        rows.append(self._row(RowKind.GRAND_TOTAL, "", "Grand Total", body.totals["debit"], body.totals["credit"]))
        return rows

    def _balance_sheet(self, body: StatementBody) -> list[ExportRow]:
        rows: list[ExportRow] = []
        for group, lines in body.groups.items():
            rows.append(self._row(RowKind.HEADER, group.value, group.value, None))
            for line in lines:
                rows.append(self._row(RowKind.ITEM, group.value, line.account, line.amount, indent=1))
            rows.append(self._row(RowKind.GROUP_TOTAL, group.value, f"Total {group.value}", body.totals[total_key(group)]))
            rows.append(self._row(RowKind.BLANK, group.value, "", None))
        rows.append(self._row(
            RowKind.GRAND_TOTAL,
            "",
            f"Total {AccountGroup.LIABILITIES.value} and {AccountGroup.EQUITY.value}",
            body.totals["liabilities_and_equity"],
        ))
        return rows

    def _profit_loss(self, body: StatementBody) -> list[ExportRow]:
        rows: list[ExportRow] = []
        section = ""
        for line in body.profit_loss:
            match line.role:
                case LineRole.HEADER:
                    section = line.label
                    rows.append(self._row(RowKind.HEADER, section, line.label, None))
                case LineRole.ITEM:
                    rows.append(self._row(RowKind.ITEM, section, line.label, line.amount, indent=1))
                case LineRole.TOTAL:
                    rows.append(self._row(RowKind.GROUP_TOTAL, section, line.label, line.amount))
                    rows.append(self._row(RowKind.BLANK, section, "", None))
                case LineRole.SUBTOTAL:
                    rows.append(self._row(RowKind.SUBTOTAL, "", line.label, line.amount))
                    rows.append(self._row(RowKind.BLANK, "", "", None))
                case LineRole.FINAL:
                    rows.append(self._row(RowKind.GRAND_TOTAL, "", line.label, line.amount))
                case _:
                    assert_never(line.role)
        return rows

    def _cash_flow(self, body: StatementBody) -> list[ExportRow]:
        rows: list[ExportRow] = []
        current = None
        for line in body.cash_flow:
            if line.role == LineRole.FINAL:
                rows.append(self._row(RowKind.GRAND_TOTAL, "", line.description, line.amount))
                continue
            group = line.section.value if line.section is not None else ""
            if line.section != current:
                current = line.section
                rows.append(self._row(RowKind.HEADER, group, f"{group} Activities", None))
            if line.role == LineRole.SUBTOTAL:
                rows.append(self._row(RowKind.GROUP_TOTAL, group, line.description, line.amount))
                rows.append(self._row(RowKind.BLANK, group, "", None))
            else:
                rows.append(self._row(RowKind.ITEM, group, line.description, line.amount, indent=1))
        return rows

"""Statement output models: line items, issues, export rows, statements."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ledgerlens.exceptions import BalanceMismatchError
from ledgerlens.models.enums import (
    AccountGroup,
    CashFlowSection,
    IssueCode,
    IssueSeverity,
    LineRole,
    RowKind,
    StatementKind,
)


class TrialBalanceLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: str
    debit: Decimal
    credit: Decimal


class BalanceSheetLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: str
    amount: Decimal


class ProfitLossLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    amount: Decimal | None
    role: LineRole


class CashFlowLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: CashFlowSection | None
    description: str
    amount: Decimal
    role: LineRole = LineRole.ITEM


class StatementIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: IssueSeverity
    code: IssueCode
    message: str
    entry_id: str | None = None


class StatementIssues(BaseModel):
    """Issue counts and details shown alongside a statement's numbers."""

    model_config = ConfigDict(frozen=True)

    rejected_entries: int = 0
    unclassified_entries: int = 0
    balance_mismatches: int = 0
    details: tuple[StatementIssue, ...] = ()

    @property
    def has_errors(self) -> bool:
        return any(i.severity == IssueSeverity.ERROR for i in self.details)

    @property
    def summary(self) -> str:
        return (
            f"{self.rejected_entries} rejected entr{'y' if self.rejected_entries == 1 else 'ies'}, "
            f"{self.unclassified_entries} unclassified, "
            f"{self.balance_mismatches} balance mismatch{'' if self.balance_mismatches == 1 else 'es'}"
        )


@dataclass
class StatementBody:
    """Aggregated statement content before it is formatted and frozen."""

    kind: StatementKind
    groups: dict[AccountGroup, tuple[TrialBalanceLine | BalanceSheetLine, ...]] = field(default_factory=dict)
    profit_loss: tuple[ProfitLossLine, ...] = ()
    cash_flow: tuple[CashFlowLine, ...] = ()
    totals: dict[str, Decimal] = field(default_factory=dict)
    mismatches: list[BalanceMismatchError] = field(default_factory=list)
    entry_count: int = 0


def total_key(group: AccountGroup | CashFlowSection, column: str = "amount") -> str:
    """Key under which a group or section subtotal is stored in ``totals``."""
    return f"{group.value.lower()}.{column}"


class ExportRow(BaseModel):
    """One row of the canonical export row model.

    ``values`` lines up with ``RowModel.columns``; ``None`` renders as an
    empty cell. Amounts are already rounded to two decimals.
    """

    model_config = ConfigDict(frozen=True)

    kind: RowKind
    group: str = ""
    label: str = ""
    values: tuple[Decimal | None, ...] = ()
    indent: int = 0


class RowModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: StatementKind
    title: str
    columns: tuple[str, ...]
    rows: tuple[ExportRow, ...]

    def pairs_by_group(self) -> dict[str, list[tuple[str, tuple[Decimal | None, ...]]]]:
        """Item rows as (label, values) pairs keyed by group, in row order."""
        grouped: dict[str, list[tuple[str, tuple[Decimal | None, ...]]]] = {}
        for row in self.rows:
            if row.kind == RowKind.ITEM:
                grouped.setdefault(row.group, []).append((row.label, row.values))
        return grouped


class Statement(BaseModel):
    """A fully built financial statement. Never mutated after construction."""

    model_config = ConfigDict(frozen=True)

    kind: StatementKind
    as_of: date
    period_start: date | None = None
    groups: Mapping[AccountGroup, tuple[TrialBalanceLine | BalanceSheetLine, ...]] = Field(
        default_factory=dict, validate_default=True
    )
    profit_loss: tuple[ProfitLossLine, ...] = ()
    cash_flow: tuple[CashFlowLine, ...] = ()
    totals: Mapping[str, Decimal] = Field(default_factory=dict, validate_default=True)
    issues: StatementIssues = Field(default_factory=StatementIssues)
    entry_count: int = 0
    rows: RowModel

    @field_validator("groups", "totals", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping) -> Mapping:
        return MappingProxyType(dict(value))

    @field_serializer("groups", "totals")
    def _plain_dict(self, value: Mapping) -> dict:
        return dict(value)

    @property
    def is_balanced(self) -> bool:
        return self.issues.balance_mismatches == 0

    def raise_for_balance(self) -> None:
        """Raise BalanceMismatchError if the statement failed reconciliation."""
        if self.kind == StatementKind.TRIAL_BALANCE:
            left, right = self.totals.get("debit", Decimal("0")), self.totals.get("credit", Decimal("0"))
        elif self.kind == StatementKind.BALANCE_SHEET:
            left = self.totals.get("assets", Decimal("0"))
            right = self.totals.get("liabilities_and_equity", Decimal("0"))
        else:
            return
        if left != right:
            raise BalanceMismatchError(self.kind.value, left, right)

    def as_payload(self) -> dict[str, Any]:
        """Renderer-facing payload using the original feed's key names."""
        payload: dict[str, Any] = {
            "kind": self.kind.value,
            "asOf": self.as_of.isoformat(),
            "periodStart": self.period_start.isoformat() if self.period_start else None,
            "totals": {k: str(v) for k, v in self.totals.items()},
            "issues": self.issues.model_dump(mode="json"),
            "entryCount": self.entry_count,
            "rows": self.rows.model_dump(mode="json"),
        }
        if self.kind == StatementKind.TRIAL_BALANCE:
            payload["groupedTrialBalance"] = {
                group.value: [line.model_dump(mode="json") for line in lines]
                for group, lines in self.groups.items()
            }
        elif self.kind == StatementKind.BALANCE_SHEET:
            payload["groupedBalanceSheet"] = {
                group.value: [line.model_dump(mode="json") for line in lines]
                for group, lines in self.groups.items()
            }
        elif self.kind == StatementKind.PROFIT_AND_LOSS:
            payload["detailedProfitLoss"] = [line.model_dump(mode="json") for line in self.profit_loss]
        else:
            payload["cashFlow"] = [line.model_dump(mode="json") for line in self.cash_flow]
        return payload

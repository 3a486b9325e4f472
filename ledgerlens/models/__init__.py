"""Data models for LedgerLens."""

from ledgerlens.models.chart import ChartAccount, ChartOfAccounts, cached_chart, load_chart
from ledgerlens.models.enums import (
    AccountGroup,
    BalanceOrdering,
    CashFlowSection,
    Category,
    EntryType,
    IssueCode,
    IssueSeverity,
    LineRole,
    ProfitLossSection,
    RowKind,
    StatementKind,
)
from ledgerlens.models.ledger import NOT_AVAILABLE, LedgerEntry, Posting
from ledgerlens.models.statements import (
    BalanceSheetLine,
    CashFlowLine,
    ExportRow,
    ProfitLossLine,
    RowModel,
    Statement,
    StatementIssue,
    StatementIssues,
    TrialBalanceLine,
)

__all__ = [
    "AccountGroup",
    "BalanceOrdering",
    "BalanceSheetLine",
    "CashFlowLine",
    "CashFlowSection",
    "Category",
    "ChartAccount",
    "ChartOfAccounts",
    "EntryType",
    "ExportRow",
    "IssueCode",
    "IssueSeverity",
    "LedgerEntry",
    "LineRole",
    "NOT_AVAILABLE",
    "Posting",
    "ProfitLossLine",
    "ProfitLossSection",
    "RowKind",
    "RowModel",
    "Statement",
    "StatementIssue",
    "StatementIssues",
    "StatementKind",
    "TrialBalanceLine",
    "cached_chart",
    "load_chart",
]

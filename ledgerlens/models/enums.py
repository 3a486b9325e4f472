"""Enumerations for LedgerLens."""

from enum import StrEnum


class Category(StrEnum):
    BANK_TRANSACTION = "bank-transactions"
    INVOICE = "invoices"
    BILL = "bills"
    INVENTORY = "inventory"
    ITEM_RESTOCK = "item-restocks"
    MANUAL_JOURNAL = "manual-journals"
    GENERAL_ENTRY = "general-entries"
    GENERAL_LEDGER = "general-ledgers"
    UNLISTED = "unlisted"


class EntryType(StrEnum):
    CREDIT = "credit"
    DEBIT = "debit"


class AccountGroup(StrEnum):
    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSES = "Expenses"
    OTHER = "Other"


class ProfitLossSection(StrEnum):
    REVENUE = "revenue"
    COGS = "cogs"
    OPERATING = "operating"
    OTHER_INCOME = "other_income"
    OTHER_EXPENSE = "other_expense"
    TAX = "tax"


class CashFlowSection(StrEnum):
    OPERATING = "Operating"
    INVESTING = "Investing"
    FINANCING = "Financing"


class StatementKind(StrEnum):
    TRIAL_BALANCE = "trial-balance"
    BALANCE_SHEET = "balance-sheet"
    PROFIT_AND_LOSS = "profit-loss"
    CASH_FLOW = "cash-flow"


class LineRole(StrEnum):
    HEADER = "header"
    ITEM = "item"
    TOTAL = "total"
    SUBTOTAL = "subtotal"
    FINAL = "final"


class RowKind(StrEnum):
    HEADER = "header"
    ITEM = "item"
    GROUP_TOTAL = "group_total"
    SUBTOTAL = "subtotal"
    BLANK = "blank"
    GRAND_TOTAL = "grand_total"


class BalanceOrdering(StrEnum):
    GLOBAL = "global"
    VIEW = "view"


class IssueSeverity(StrEnum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class IssueCode(StrEnum):
    REJECTED_ENTRY = "REJECTED_ENTRY"
    UNRESOLVED_ACCOUNT = "UNRESOLVED_ACCOUNT"
    BALANCE_MISMATCH = "BALANCE_MISMATCH"


# Natural increasing side per group; Other has none.
DEBIT_NORMAL_GROUPS = frozenset({AccountGroup.ASSETS, AccountGroup.EXPENSES})
CREDIT_NORMAL_GROUPS = frozenset(
    {AccountGroup.LIABILITIES, AccountGroup.EQUITY, AccountGroup.REVENUE}
)

STATEMENT_TITLES: dict[StatementKind, str] = {
    StatementKind.TRIAL_BALANCE: "Trial Balance",
    StatementKind.BALANCE_SHEET: "Balance Sheet",
    StatementKind.PROFIT_AND_LOSS: "Profit & Loss",
    StatementKind.CASH_FLOW: "Cash Flow",
}

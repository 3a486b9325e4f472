"""Custom exceptions for LedgerLens."""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for ledger aggregation errors."""


class ValidationError(LedgerError):
    """Raised when a raw record cannot be normalized into a ledger entry."""

    def __init__(self, record_id: str, field: str, message: str):
        self.record_id = record_id
        self.field = field
        super().__init__(f"Validation error on record {record_id} field '{field}': {message}")


class ClassificationError(LedgerError):
    """Raised when an entry names an account the chart of accounts does not know."""

    def __init__(self, entry_id: str, account_name: str):
        self.entry_id = entry_id
        self.account_name = account_name
        super().__init__(f"Unresolved account '{account_name}' on entry {entry_id}")


class BalanceMismatchError(LedgerError):
    """Raised when a statement's reconciliation invariant does not hold."""

    def __init__(self, statement_kind: str, left: Decimal, right: Decimal):
        self.statement_kind = statement_kind
        self.left = left
        self.right = right
        self.difference = left - right
        super().__init__(
            f"Balance mismatch in {statement_kind}: "
            f"{left} != {right} (difference {self.difference})"
        )


class ExportError(LedgerError):
    """Raised when a statement cannot be written to an export file."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Export to {path} failed: {message}")


class EmptyLedgerError(LedgerError):
    """Raised when there is nothing to aggregate."""

    def __init__(self, total_records: int, rejected: int):
        self.total_records = total_records
        self.rejected = rejected
        if total_records == 0:
            message = "No transaction records supplied"
        else:
            message = f"All {total_records} transaction record(s) were rejected"
        super().__init__(message)


class ChartOfAccountsError(LedgerError):
    """Raised when the chart of accounts configuration is malformed."""

    def __init__(self, message: str):
        super().__init__(f"Chart of accounts error: {message}")


class ConfigurationError(LedgerError):
    """Raised when a LEDGERLENS_* setting holds an unusable value."""

    def __init__(self, variable: str, message: str):
        self.variable = variable
        super().__init__(f"Invalid {variable}: {message}")

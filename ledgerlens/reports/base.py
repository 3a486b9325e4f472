"""Base renderer interface for statement output."""

from abc import ABC, abstractmethod
from decimal import Decimal

from ledgerlens.models.enums import RowKind
from ledgerlens.models.statements import Statement

# Row kinds rendered in bold by every renderer.
EMPHASIZED_ROWS = frozenset({RowKind.HEADER, RowKind.GROUP_TOTAL, RowKind.SUBTOTAL, RowKind.GRAND_TOTAL})


def format_amount(value: Decimal | None) -> str:
    """Thousands-separated, two-decimal text; empty for missing values."""
    if value is None:
        return ""
    return f"{value:,.2f}"


def issue_lines(statement: Statement) -> list[str]:
    """Issue summary and details shown beneath a statement's numbers."""
    lines = [f"Issues: {statement.issues.summary}"]
    for issue in statement.issues.details:
        lines.append(f"[{issue.severity.value}] {issue.message}")
    return lines


def period_label(statement: Statement) -> str:
    if statement.period_start is not None:
        return f"{statement.period_start.isoformat()} to {statement.as_of.isoformat()}"
    return f"As of {statement.as_of.isoformat()}"


class Renderer(ABC):
    """Abstract base class for statement renderers.

    Renderers only read ``statement.rows``; they never recompute amounts.
    """

    extension: str = ""

    def __init__(self, currency: str = "EUR"):
        self.currency = currency

    def column_headers(self, statement: Statement) -> list[str]:
        return [f"{column} ({self.currency})" for column in statement.rows.columns]

    @abstractmethod
    def render(self, statement: Statement) -> bytes:
        """Render the statement to the bytes of the output file."""
        ...

"""Statement generator: the end-to-end pipeline from raw records to a Statement.

Steps:
1. Normalize raw records (malformed ones are counted, not fatal)
2. Scope entries to the statement period
3. Classify entries into postings via the chart of accounts
4. Aggregate postings into the statement body
5. Build the canonical export row model
6. Freeze everything into one Statement

Each call rebuilds from the snapshot it is given, so regenerating from
unchanged input yields an identical statement.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from ledgerlens.config import get_settings
from ledgerlens.engines.aggregator import StatementAggregator
from ledgerlens.engines.classifier import AccountClassifier, ClassifiedLedger
from ledgerlens.exceptions import EmptyLedgerError
from ledgerlens.models.chart import ChartOfAccounts, cached_chart
from ledgerlens.models.enums import IssueCode, IssueSeverity, StatementKind
from ledgerlens.models.ledger import LedgerEntry
from ledgerlens.models.statements import Statement, StatementBody, StatementIssue, StatementIssues
from ledgerlens.normalization.normalizer import NormalizationResult, TransactionNormalizer
from ledgerlens.reports.rows import ExportFormatter

logger = logging.getLogger(__name__)

# Point-in-time statements see everything up to as_of; period statements
# also honour period_start.
PERIOD_KINDS = frozenset({StatementKind.PROFIT_AND_LOSS, StatementKind.CASH_FLOW})


def scope_entries(
    entries: Iterable[LedgerEntry],
    kind: StatementKind,
    as_of: date,
    period_start: date | None = None,
) -> tuple[LedgerEntry, ...]:
    """Entries that fall inside the statement's reporting window."""
    start = period_start if kind in PERIOD_KINDS else None
    return tuple(
        e for e in entries
        if e.date <= as_of and (start is None or e.date >= start)
    )


class StatementGenerator:
    """Builds frozen Statements from raw transaction records."""

    def __init__(self, chart: ChartOfAccounts | None = None):
        self.chart = chart if chart is not None else cached_chart(get_settings().chart_path)
        self.normalizer = TransactionNormalizer()
        self.classifier = AccountClassifier(self.chart)
        self.aggregator = StatementAggregator(self.chart)
        self.formatter = ExportFormatter()

    def normalize(self, records: Iterable[Mapping[str, Any]] | NormalizationResult) -> NormalizationResult:
        """Normalize records, failing only when nothing usable remains."""
        if isinstance(records, NormalizationResult):
            result = records
        else:
            result = self.normalizer.normalize_many(records)
        if not result.entries:
            raise EmptyLedgerError(result.total, len(result.rejected))
        return result

    def generate(
        self,
        kind: StatementKind,
        records: Iterable[Mapping[str, Any]] | NormalizationResult,
        as_of: date | None = None,
        period_start: date | None = None,
    ) -> Statement:
        """Generate one statement.

        Args:
            kind: Which statement to build.
            records: Raw feed records, or an already computed NormalizationResult.
            as_of: Reporting date. Defaults to the latest accepted entry date.
            period_start: First day of the P&L / Cash Flow period; unbounded when None.

        Raises:
            EmptyLedgerError: The input is empty or every record was rejected.
        """
        result = self.normalize(records)
        if as_of is None:
            as_of = max(e.date for e in result.entries)

        entries = scope_entries(result.entries, kind, as_of, period_start)
        ledger = self.classifier.classify_many(entries)
        body = self.aggregator.build(kind, ledger)
        rows = self.formatter.build(body)
        issues = self._issues(result, ledger, body)

        logger.info(
            "Generated %s as of %s from %d entries (%s)",
            kind.value, as_of.isoformat(), len(entries), issues.summary,
        )
        return Statement(
            kind=kind,
            as_of=as_of,
            period_start=period_start if kind in PERIOD_KINDS else None,
            groups=body.groups,
            profit_loss=body.profit_loss,
            cash_flow=body.cash_flow,
            totals=body.totals,
            issues=issues,
            entry_count=body.entry_count,
            rows=rows,
        )

    def generate_all(
        self,
        records: Iterable[Mapping[str, Any]] | NormalizationResult,
        as_of: date | None = None,
        period_start: date | None = None,
    ) -> dict[StatementKind, Statement]:
        """Generate every statement kind from one normalization pass."""
        result = self.normalize(records)
        return {
            kind: self.generate(kind, result, as_of=as_of, period_start=period_start)
            for kind in StatementKind
        }

    @staticmethod
    def _issues(
        result: NormalizationResult,
        ledger: ClassifiedLedger,
        body: StatementBody,
    ) -> StatementIssues:
        details: list[StatementIssue] = []
        for rejected in result.rejected:
            details.append(StatementIssue(
                severity=IssueSeverity.WARNING,
                code=IssueCode.REJECTED_ENTRY,
                message=str(rejected.error),
                entry_id=rejected.record_id,
            ))
        for error in ledger.errors:
            details.append(StatementIssue(
                severity=IssueSeverity.WARNING,
                code=IssueCode.UNRESOLVED_ACCOUNT,
                message=str(error),
                entry_id=error.entry_id,
            ))
        for mismatch in body.mismatches:
            details.append(StatementIssue(
                severity=IssueSeverity.ERROR,
                code=IssueCode.BALANCE_MISMATCH,
                message=str(mismatch),
            ))
        return StatementIssues(
            rejected_entries=len(result.rejected),
            unclassified_entries=len(ledger.unclassified_entry_ids),
            balance_mismatches=len(body.mismatches),
            details=tuple(details),
        )

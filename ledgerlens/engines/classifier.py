"""Account classification: ledger entries to account postings."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import assert_never

from ledgerlens.exceptions import ClassificationError
from ledgerlens.models.chart import (
    ACCOUNTS_PAYABLE,
    ACCOUNTS_RECEIVABLE,
    CASH,
    INVENTORY,
    OPERATING_EXPENSES,
    SALES_REVENUE,
    ChartOfAccounts,
)
from ledgerlens.models.enums import DEBIT_NORMAL_GROUPS, AccountGroup, Category, EntryType
from ledgerlens.models.ledger import NOT_AVAILABLE, LedgerEntry, Posting

logger = logging.getLogger(__name__)

# accountType values seen on general-ledger records
_ACCOUNT_TYPES: dict[str, AccountGroup] = {
    "asset": AccountGroup.ASSETS,
    "assets": AccountGroup.ASSETS,
    "liability": AccountGroup.LIABILITIES,
    "liabilities": AccountGroup.LIABILITIES,
    "equity": AccountGroup.EQUITY,
    "revenue": AccountGroup.REVENUE,
    "revenues": AccountGroup.REVENUE,
    "income": AccountGroup.REVENUE,
    "expense": AccountGroup.EXPENSES,
    "expenses": AccountGroup.EXPENSES,
}


def natural_side(group: AccountGroup) -> EntryType:
    """Side on which *group* increases. Other is treated as debit-normal."""
    if group in DEBIT_NORMAL_GROUPS or group == AccountGroup.OTHER:
        return EntryType.DEBIT
    return EntryType.CREDIT


def _opposite(side: EntryType) -> EntryType:
    return EntryType.CREDIT if side == EntryType.DEBIT else EntryType.DEBIT


@dataclass
class Classification:
    """Postings for one entry plus any unresolved-account errors."""

    entry: LedgerEntry
    postings: tuple[Posting, ...]
    errors: list[ClassificationError] = field(default_factory=list)


@dataclass
class ClassifiedLedger:
    """All postings for an entry snapshot, in entry order."""

    entries: tuple[LedgerEntry, ...]
    postings: tuple[Posting, ...]
    errors: list[ClassificationError] = field(default_factory=list)

    @property
    def unclassified_entry_ids(self) -> set[str]:
        return {e.entry_id for e in self.errors}


class AccountClassifier:
    """Resolves entries to (account, group) postings using a chart of accounts."""

    def __init__(self, chart: ChartOfAccounts):
        self.chart = chart

    def classify(self, entry: LedgerEntry) -> Classification:
        """Classify a single entry. Unresolved accounts land in Other, never dropped."""
        match entry.category:
            case Category.BANK_TRANSACTION:
                return self._single(entry, CASH, AccountGroup.ASSETS, EntryType.CREDIT)
            case Category.INVOICE:
                if entry.is_paid:
                    return self._single(entry, SALES_REVENUE, AccountGroup.REVENUE, EntryType.CREDIT)
                return self._single(entry, ACCOUNTS_RECEIVABLE, AccountGroup.ASSETS, EntryType.CREDIT)
            case Category.BILL:
                if entry.is_paid:
                    return self._single(entry, OPERATING_EXPENSES, AccountGroup.EXPENSES, EntryType.DEBIT)
                return self._single(entry, ACCOUNTS_PAYABLE, AccountGroup.LIABILITIES, EntryType.DEBIT)
            case Category.INVENTORY | Category.ITEM_RESTOCK:
                return self._single(entry, INVENTORY, AccountGroup.ASSETS, EntryType.DEBIT)
            case Category.MANUAL_JOURNAL | Category.GENERAL_ENTRY:
                return self._journal(entry)
            case Category.GENERAL_LEDGER:
                return self._general_ledger(entry)
            case Category.UNLISTED:
                error = ClassificationError(entry.id, entry.source_category)
                posting = Posting(
                    entry_id=entry.id,
                    account=entry.source_category,
                    group=AccountGroup.OTHER,
                    side=entry.type,
                    amount=entry.amount,
                )
                return Classification(entry, (posting,), [error])
            case _:
                assert_never(entry.category)

    def classify_many(self, entries: Sequence[LedgerEntry]) -> ClassifiedLedger:
        postings: list[Posting] = []
        errors: list[ClassificationError] = []
        for entry in entries:
            result = self.classify(entry)
            postings.extend(result.postings)
            for error in result.errors:
                logger.info("Routing to Other: %s", error)
            errors.extend(result.errors)
        return ClassifiedLedger(entries=tuple(entries), postings=tuple(postings), errors=errors)

    def _single(
        self,
        entry: LedgerEntry,
        account: str,
        group: AccountGroup,
        increasing_type: EntryType,
    ) -> Classification:
        """One posting; the side follows whether the entry increases the account."""
        side = natural_side(group)
        if entry.type != increasing_type:
            side = _opposite(side)
        posting = Posting(entry_id=entry.id, account=account, group=group, side=side, amount=entry.amount)
        return Classification(entry, (posting,))

    def _journal(self, entry: LedgerEntry) -> Classification:
        """Debit leg and credit leg, each resolved through the chart independently."""
        postings = []
        errors = []
        for name, side in (
            (entry.debit_account, EntryType.DEBIT),
            (entry.credit_account, EntryType.CREDIT),
        ):
            name = name or NOT_AVAILABLE
            chart_account = self.chart.lookup(name)
            if chart_account is None:
                errors.append(ClassificationError(entry.id, name))
                account, group = name, AccountGroup.OTHER
            else:
                account, group = chart_account.name, chart_account.group
            postings.append(
                Posting(entry_id=entry.id, account=account, group=group, side=side, amount=entry.amount)
            )
        return Classification(entry, tuple(postings), errors)

    def _general_ledger(self, entry: LedgerEntry) -> Classification:
        """Group comes straight from accountType; the account is the ledger's own name."""
        account = entry.account_name or entry.description
        group = _ACCOUNT_TYPES.get((entry.account_type or "").strip().lower())
        if group is None:
            error = ClassificationError(entry.id, entry.account_type or NOT_AVAILABLE)
            posting = Posting(
                entry_id=entry.id, account=account, group=AccountGroup.OTHER, side=entry.type, amount=entry.amount
            )
            return Classification(entry, (posting,), [error])
        return self._single(entry, account, group, EntryType.DEBIT)

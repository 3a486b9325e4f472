"""Running balance over an explicitly ordered entry sequence."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from itertools import accumulate

from ledgerlens.models.enums import BalanceOrdering, EntryType
from ledgerlens.models.ledger import LedgerEntry


@dataclass(frozen=True)
class BalancedEntry:
    entry: LedgerEntry
    balance: Decimal


def running_balance(entries: Sequence[LedgerEntry]) -> list[Decimal]:
    """Cumulative balance: credits add, debits subtract, starting from zero.

    balance[i] = balance[i-1] + signed(amount[i]), computed in one pass.
    """
    return list(accumulate((e.signed_amount for e in entries), initial=Decimal("0")))[1:]


class RunningBalanceSequencer:
    """Computes per-row balances for a ledger under a named ordering."""

    def sequence(
        self,
        ledger: Sequence[LedgerEntry],
        ordering: BalanceOrdering = BalanceOrdering.GLOBAL,
        predicate: Callable[[LedgerEntry], bool] | None = None,
    ) -> list[BalancedEntry]:
        """Return the visible rows with their running balances.

        Args:
            ledger: Full entry snapshot in ledger insertion order.
            ordering: GLOBAL folds over the whole ledger and then keeps the
                rows matching *predicate*, so a row's balance ignores filters.
                VIEW filters first and folds over the visible subset only.
            predicate: Row filter (search, type, category). None keeps all rows.
        """
        if ordering == BalanceOrdering.VIEW:
            visible = [e for e in ledger if predicate is None or predicate(e)]
            return [BalancedEntry(e, b) for e, b in zip(visible, running_balance(visible))]

        balances = running_balance(ledger)
        return [
            BalancedEntry(e, b)
            for e, b in zip(ledger, balances)
            if predicate is None or predicate(e)
        ]


@dataclass(frozen=True)
class BalanceTotals:
    credits: Decimal
    debits: Decimal

    @property
    def balance(self) -> Decimal:
        return self.credits - self.debits


def balance_totals(entries: Iterable[LedgerEntry]) -> BalanceTotals:
    """Credit and debit sums over *entries*; the balance is their difference."""
    credits = debits = Decimal("0")
    for entry in entries:
        if entry.type == EntryType.CREDIT:
            credits += entry.amount
        else:
            debits += entry.amount
    return BalanceTotals(credits=credits, debits=debits)

"""Statement aggregation: Trial Balance and Balance Sheet from classified postings.

Profit & Loss and Cash Flow have their own builders; StatementAggregator.build
dispatches to whichever the statement kind needs.

Invariants checked here, never assumed:
    Trial Balance:  sum(debit) == sum(credit)
    Balance Sheet:  total assets == total liabilities + total equity
A violated invariant is recorded on the statement body as a
BalanceMismatchError so the discrepancy stays visible.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from ledgerlens.engines.cash_flow import CashFlowBuilder
from ledgerlens.engines.classifier import ClassifiedLedger, natural_side
from ledgerlens.engines.profit_loss import ProfitLossBuilder
from ledgerlens.exceptions import BalanceMismatchError
from ledgerlens.models.chart import ChartOfAccounts
from ledgerlens.models.enums import AccountGroup, EntryType, StatementKind
from ledgerlens.models.ledger import Posting
from ledgerlens.models.statements import (
    BalanceSheetLine,
    StatementBody,
    TrialBalanceLine,
    total_key,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

TRIAL_BALANCE_GROUPS = (
    AccountGroup.ASSETS,
    AccountGroup.LIABILITIES,
    AccountGroup.EQUITY,
    AccountGroup.REVENUE,
    AccountGroup.EXPENSES,
)
BALANCE_SHEET_GROUPS = (AccountGroup.ASSETS, AccountGroup.LIABILITIES, AccountGroup.EQUITY)

CURRENT_EARNINGS = "Current Period Earnings"


def account_sums(postings: Iterable[Posting]) -> dict[AccountGroup, dict[str, list[Decimal]]]:
    """Gross [debit, credit] per account, keyed by group then account name."""
    sums: dict[AccountGroup, dict[str, list[Decimal]]] = {}
    for posting in postings:
        pair = sums.setdefault(posting.group, {}).setdefault(posting.account, [ZERO, ZERO])
        pair[0] += posting.debit
        pair[1] += posting.credit
    return sums


def _sorted_accounts(accounts: dict[str, list[Decimal]]) -> list[tuple[str, list[Decimal]]]:
    return sorted(accounts.items(), key=lambda item: (item[0].casefold(), item[0]))


def natural_balance(group: AccountGroup, debit: Decimal, credit: Decimal) -> Decimal:
    """Net balance measured on the group's natural side."""
    if natural_side(group) == EntryType.DEBIT:
        return debit - credit
    return credit - debit


class StatementAggregator:
    """Builds statement bodies from a classified ledger snapshot."""

    def __init__(self, chart: ChartOfAccounts):
        self.chart = chart
        self.profit_loss_builder = ProfitLossBuilder(chart)
        self.cash_flow_builder = CashFlowBuilder(chart)

    def build(self, kind: StatementKind, ledger: ClassifiedLedger) -> StatementBody:
        if kind == StatementKind.TRIAL_BALANCE:
            return self.trial_balance(ledger)
        if kind == StatementKind.BALANCE_SHEET:
            return self.balance_sheet(ledger)
        if kind == StatementKind.PROFIT_AND_LOSS:
            return self.profit_loss_builder.build(ledger)
        return self.cash_flow_builder.build(ledger)

    def trial_balance(self, ledger: ClassifiedLedger) -> StatementBody:
        """One row per account, netted onto a single side; Other shown last when present."""
        sums = account_sums(ledger.postings)
        order = list(TRIAL_BALANCE_GROUPS)
        if sums.get(AccountGroup.OTHER):
            order.append(AccountGroup.OTHER)

        groups: dict[AccountGroup, tuple[TrialBalanceLine, ...]] = {}
        totals: dict[str, Decimal] = {}
        grand_debit = grand_credit = ZERO
        for group in order:
            lines = []
            for account, (debit, credit) in _sorted_accounts(sums.get(group, {})):
                net = debit - credit
                if net >= 0:
                    lines.append(TrialBalanceLine(account=account, debit=net, credit=ZERO))
                else:
                    lines.append(TrialBalanceLine(account=account, debit=ZERO, credit=-net))
            group_debit = sum((line.debit for line in lines), ZERO)
            group_credit = sum((line.credit for line in lines), ZERO)
            groups[group] = tuple(lines)
            totals[total_key(group, "debit")] = group_debit
            totals[total_key(group, "credit")] = group_credit
            grand_debit += group_debit
            grand_credit += group_credit

        totals["debit"] = grand_debit
        totals["credit"] = grand_credit

        mismatches = []
        if grand_debit != grand_credit:
            error = BalanceMismatchError(StatementKind.TRIAL_BALANCE.value, grand_debit, grand_credit)
            logger.warning("%s", error)
            mismatches.append(error)

        return StatementBody(
            kind=StatementKind.TRIAL_BALANCE,
            groups=groups,
            totals=totals,
            mismatches=mismatches,
            entry_count=len(ledger.entries),
        )

    def balance_sheet(self, ledger: ClassifiedLedger) -> StatementBody:
        """Assets, Liabilities and Equity at their natural-side balances.

        Net Revenue less Expenses is carried into Equity as current period
        earnings. Other-group balances are listed but stay out of the equation.
        """
        sums = account_sums(ledger.postings)

        earnings = ZERO
        for group in (AccountGroup.REVENUE, AccountGroup.EXPENSES):
            sign = 1 if group == AccountGroup.REVENUE else -1
            for debit, credit in sums.get(group, {}).values():
                earnings += sign * natural_balance(group, debit, credit)

        groups: dict[AccountGroup, tuple[BalanceSheetLine, ...]] = {}
        totals: dict[str, Decimal] = {}
        order = list(BALANCE_SHEET_GROUPS)
        if sums.get(AccountGroup.OTHER):
            order.append(AccountGroup.OTHER)

        for group in order:
            balances = {
                account: natural_balance(group, debit, credit)
                for account, (debit, credit) in _sorted_accounts(sums.get(group, {}))
            }
            if group == AccountGroup.EQUITY and earnings != 0:
                balances[CURRENT_EARNINGS] = balances.get(CURRENT_EARNINGS, ZERO) + earnings
            lines = tuple(BalanceSheetLine(account=a, amount=amount) for a, amount in balances.items())
            groups[group] = lines
            totals[total_key(group)] = sum((line.amount for line in lines), ZERO)

        assets = totals[total_key(AccountGroup.ASSETS)]
        liabilities = totals[total_key(AccountGroup.LIABILITIES)]
        equity = totals[total_key(AccountGroup.EQUITY)]
        totals.update(
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            liabilities_and_equity=liabilities + equity,
            current_earnings=earnings,
        )

        mismatches = []
        if assets != liabilities + equity:
            error = BalanceMismatchError(StatementKind.BALANCE_SHEET.value, assets, liabilities + equity)
            logger.warning("%s", error)
            mismatches.append(error)

        return StatementBody(
            kind=StatementKind.BALANCE_SHEET,
            groups=groups,
            totals=totals,
            mismatches=mismatches,
            entry_count=len(ledger.entries),
        )

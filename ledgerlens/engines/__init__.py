"""Ledger aggregation engines."""

from ledgerlens.engines.aggregator import StatementAggregator
from ledgerlens.engines.cash_flow import CashFlowBuilder
from ledgerlens.engines.classifier import AccountClassifier, ClassifiedLedger
from ledgerlens.engines.generator import StatementGenerator
from ledgerlens.engines.profit_loss import ProfitLossBuilder
from ledgerlens.engines.running_balance import (
    BalancedEntry,
    BalanceTotals,
    RunningBalanceSequencer,
    balance_totals,
    running_balance,
)

__all__ = [
    "AccountClassifier",
    "BalanceTotals",
    "BalancedEntry",
    "CashFlowBuilder",
    "ClassifiedLedger",
    "ProfitLossBuilder",
    "RunningBalanceSequencer",
    "StatementAggregator",
    "StatementGenerator",
    "balance_totals",
    "running_balance",
]

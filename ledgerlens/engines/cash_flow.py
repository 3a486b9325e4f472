"""Cash Flow statement builder (direct method)."""

from decimal import Decimal

from ledgerlens.engines.classifier import ClassifiedLedger
from ledgerlens.models.chart import ChartOfAccounts
from ledgerlens.models.enums import CashFlowSection, Category, LineRole, StatementKind
from ledgerlens.models.ledger import LedgerEntry
from ledgerlens.models.statements import CashFlowLine, StatementBody, total_key

ZERO = Decimal("0")

RECEIPTS_FROM_CUSTOMERS = "Receipts from customers"
PAYMENTS_TO_SUPPLIERS = "Payments to suppliers"


def section_subtotal_label(section: CashFlowSection) -> str:
    return f"Net Cash from {section.value} Activities"


class CashFlowBuilder:
    """Collects cash movements into Operating, Investing and Financing sections.

    Each section ends with an explicit subtotal line; Net Cash Flow is the sum
    of the three subtotals and is carried as its own FINAL line.
    """

    def __init__(self, chart: ChartOfAccounts):
        self.chart = chart

    def cash_effect(self, entry: LedgerEntry) -> tuple[CashFlowSection, str, Decimal] | None:
        """Return (section, description, signed amount) or None for non-cash entries."""
        match entry.category:
            case Category.BANK_TRANSACTION:
                section = entry.cash_flow_section or CashFlowSection.OPERATING
                return section, entry.description, entry.signed_amount
            case Category.INVOICE if entry.is_paid:
                return CashFlowSection.OPERATING, RECEIPTS_FROM_CUSTOMERS, entry.amount
            case Category.BILL if entry.is_paid:
                return CashFlowSection.OPERATING, PAYMENTS_TO_SUPPLIERS, -entry.amount
            case Category.MANUAL_JOURNAL | Category.GENERAL_ENTRY:
                return self._journal_effect(entry)
            case _:
                return None

    def _journal_effect(self, entry: LedgerEntry) -> tuple[CashFlowSection, str, Decimal] | None:
        debit = self.chart.lookup(entry.debit_account)
        credit = self.chart.lookup(entry.credit_account)
        debit_is_cash = debit is not None and debit.cash
        credit_is_cash = credit is not None and credit.cash
        if debit_is_cash == credit_is_cash:
            # Transfers between cash accounts and non-cash journals move no cash.
            return None
        if debit_is_cash:
            counter, counter_name, amount = credit, entry.credit_account, entry.amount
        else:
            counter, counter_name, amount = debit, entry.debit_account, -entry.amount
        if counter is None:
            return CashFlowSection.OPERATING, counter_name or entry.description, amount
        return counter.activity, counter.name, amount

    def build(self, ledger: ClassifiedLedger) -> StatementBody:
        movements: dict[CashFlowSection, dict[str, Decimal]] = {s: {} for s in CashFlowSection}
        contributing = 0
        for entry in ledger.entries:
            effect = self.cash_effect(entry)
            if effect is None:
                continue
            section, description, amount = effect
            bucket = movements[section]
            bucket[description] = bucket.get(description, ZERO) + amount
            contributing += 1

        lines: list[CashFlowLine] = []
        totals: dict[str, Decimal] = {}
        net = ZERO
        for section in CashFlowSection:
            items = movements[section]
            lines.extend(
                CashFlowLine(section=section, description=d, amount=a, role=LineRole.ITEM)
                for d, a in items.items()
            )
            subtotal = sum(items.values(), ZERO)
            lines.append(
                CashFlowLine(
                    section=section,
                    description=section_subtotal_label(section),
                    amount=subtotal,
                    role=LineRole.SUBTOTAL,
                )
            )
            totals[total_key(section)] = subtotal
            net += subtotal

        lines.append(CashFlowLine(section=None, description="Net Cash Flow", amount=net, role=LineRole.FINAL))
        totals["net_cash_flow"] = net
        return StatementBody(
            kind=StatementKind.CASH_FLOW,
            cash_flow=tuple(lines),
            totals=totals,
            entry_count=contributing,
        )

"""Profit & Loss waterfall builder."""

from decimal import Decimal

from ledgerlens.engines.classifier import ClassifiedLedger
from ledgerlens.models.chart import ChartOfAccounts
from ledgerlens.models.enums import AccountGroup, LineRole, ProfitLossSection, StatementKind
from ledgerlens.models.statements import ProfitLossLine, StatementBody

ZERO = Decimal("0")

_SECTION_TITLES: dict[ProfitLossSection, str] = {
    ProfitLossSection.REVENUE: "Revenue",
    ProfitLossSection.COGS: "Cost of Goods Sold",
    ProfitLossSection.OPERATING: "Operating Expenses",
    ProfitLossSection.TAX: "Tax",
}
OTHER_TITLE = "Other Income / (Expenses)"


class ProfitLossBuilder:
    """Builds the ordered P&L waterfall with role-tagged computed rows.

    Revenue - COGS = Gross Profit
    Gross Profit - Operating Expenses = Operating Profit
    Operating Profit + Other Income - Other Expenses = Profit Before Tax
    Profit Before Tax - Tax = Net Profit
    """

    def __init__(self, chart: ChartOfAccounts):
        self.chart = chart

    def section_of(self, account: str, group: AccountGroup) -> ProfitLossSection:
        chart_account = self.chart.lookup(account)
        if chart_account is not None and chart_account.profit_loss_section is not None:
            return chart_account.profit_loss_section
        return ProfitLossSection.REVENUE if group == AccountGroup.REVENUE else ProfitLossSection.OPERATING

    def build(self, ledger: ClassifiedLedger) -> StatementBody:
        buckets: dict[ProfitLossSection, dict[str, Decimal]] = {s: {} for s in ProfitLossSection}
        contributing: set[str] = set()
        for posting in ledger.postings:
            if posting.group == AccountGroup.REVENUE:
                amount = posting.credit - posting.debit
            elif posting.group == AccountGroup.EXPENSES:
                amount = posting.debit - posting.credit
            else:
                continue
            contributing.add(posting.entry_id)
            bucket = buckets[self.section_of(posting.account, posting.group)]
            bucket[posting.account] = bucket.get(posting.account, ZERO) + amount

        lines: list[ProfitLossLine] = []
        totals: dict[str, Decimal] = {}

        revenue = self._section(lines, ProfitLossSection.REVENUE, buckets)
        cogs = self._section(lines, ProfitLossSection.COGS, buckets)
        gross_profit = revenue - cogs
        lines.append(ProfitLossLine(label="Gross Profit", amount=gross_profit, role=LineRole.SUBTOTAL))

        operating = self._section(lines, ProfitLossSection.OPERATING, buckets)
        operating_profit = gross_profit - operating
        lines.append(ProfitLossLine(label="Operating Profit", amount=operating_profit, role=LineRole.SUBTOTAL))

        # Other income positive, other expenses negative, one combined section.
        other_rows = [(a, v) for a, v in sorted(buckets[ProfitLossSection.OTHER_INCOME].items())]
        other_rows += [(a, -v) for a, v in sorted(buckets[ProfitLossSection.OTHER_EXPENSE].items())]
        lines.append(ProfitLossLine(label=OTHER_TITLE, amount=None, role=LineRole.HEADER))
        lines.extend(ProfitLossLine(label=a, amount=v, role=LineRole.ITEM) for a, v in other_rows)
        other_net = sum((v for _, v in other_rows), ZERO)
        lines.append(ProfitLossLine(label=f"Total {OTHER_TITLE}", amount=other_net, role=LineRole.TOTAL))

        profit_before_tax = operating_profit + other_net
        lines.append(ProfitLossLine(label="Profit Before Tax", amount=profit_before_tax, role=LineRole.SUBTOTAL))

        tax = self._section(lines, ProfitLossSection.TAX, buckets)
        net_profit = profit_before_tax - tax
        lines.append(ProfitLossLine(label="Net Profit", amount=net_profit, role=LineRole.FINAL))

        totals.update(
            revenue=revenue,
            cogs=cogs,
            gross_profit=gross_profit,
            operating_expenses=operating,
            operating_profit=operating_profit,
            other_net=other_net,
            profit_before_tax=profit_before_tax,
            tax=tax,
            net_profit=net_profit,
        )
        return StatementBody(
            kind=StatementKind.PROFIT_AND_LOSS,
            profit_loss=tuple(lines),
            totals=totals,
            entry_count=len(contributing),
        )

    @staticmethod
    def _section(
        lines: list[ProfitLossLine],
        section: ProfitLossSection,
        buckets: dict[ProfitLossSection, dict[str, Decimal]],
    ) -> Decimal:
        """Append header, item rows and section total; return the total."""
        title = _SECTION_TITLES[section]
        items = sorted(buckets[section].items(), key=lambda item: item[0].casefold())
        lines.append(ProfitLossLine(label=title, amount=None, role=LineRole.HEADER))
        lines.extend(ProfitLossLine(label=a, amount=v, role=LineRole.ITEM) for a, v in items)
        total = sum((v for _, v in items), ZERO)
        lines.append(ProfitLossLine(label=f"Total {title}", amount=total, role=LineRole.TOTAL))
        return total

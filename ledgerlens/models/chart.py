"""Chart of accounts: account name to account group lookup.

The chart is loaded once per process and never mutated. Lookups ignore case
and surrounding/duplicated whitespace, so "accounts  receivable" resolves to
"Accounts Receivable".
"""

import json
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from ledgerlens.exceptions import ChartOfAccountsError
from ledgerlens.models.enums import AccountGroup, CashFlowSection, ProfitLossSection

DEFAULT_CHART_PATH = Path(__file__).parent / "data" / "chart_of_accounts.json"

# Well-known accounts used by the category rules of the classifier.
CASH = "Cash"
ACCOUNTS_RECEIVABLE = "Accounts Receivable"
ACCOUNTS_PAYABLE = "Accounts Payable"
INVENTORY = "Inventory"
SALES_REVENUE = "Sales Revenue"
OPERATING_EXPENSES = "Operating Expenses"


def account_key(name: str) -> str:
    """Normalize an account name for lookup."""
    return " ".join(name.split()).casefold()


class ChartAccount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    group: AccountGroup
    pl_section: ProfitLossSection | None = None
    cash: bool = False
    activity: CashFlowSection = CashFlowSection.OPERATING

    @model_validator(mode="after")
    def _check_group(self) -> "ChartAccount":
        if self.group == AccountGroup.OTHER:
            raise ValueError(f"account '{self.name}' cannot be assigned to the Other group")
        return self

    @property
    def profit_loss_section(self) -> ProfitLossSection | None:
        """P&L section, defaulted from the group for Revenue/Expenses accounts."""
        if self.pl_section is not None:
            return self.pl_section
        if self.group == AccountGroup.REVENUE:
            return ProfitLossSection.REVENUE
        if self.group == AccountGroup.EXPENSES:
            return ProfitLossSection.OPERATING
        return None


class ChartOfAccounts(BaseModel):
    """Immutable mapping from account name to ChartAccount."""

    model_config = ConfigDict(frozen=True)

    accounts: tuple[ChartAccount, ...] = Field(default_factory=tuple)

    _index: dict[str, ChartAccount] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_unique(self) -> "ChartOfAccounts":
        seen: set[str] = set()
        for account in self.accounts:
            key = account_key(account.name)
            if key in seen:
                raise ValueError(f"duplicate account name '{account.name}'")
            seen.add(key)
        return self

    def model_post_init(self, __context: object) -> None:
        self._index = {account_key(a.name): a for a in self.accounts}

    def lookup(self, name: str | None) -> ChartAccount | None:
        """Return the chart account for *name*, or None if it is not in the chart."""
        if not name:
            return None
        return self._index.get(account_key(name))

    def group_of(self, name: str | None) -> AccountGroup:
        """Return the account group for *name*; unknown names map to Other."""
        account = self.lookup(name)
        return account.group if account is not None else AccountGroup.OTHER

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self.accounts)


def load_chart(path: Path) -> ChartOfAccounts:
    """Load a chart of accounts from a JSON file.

    The file holds either ``{"accounts": [...]}`` or a bare list of account
    objects, each with at least ``name`` and ``group``.
    """
    if not path.exists():
        raise ChartOfAccountsError(f"file not found: {path}")
    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ChartOfAccountsError(f"{path} is not valid JSON: {exc}") from exc

    records = raw.get("accounts", []) if isinstance(raw, dict) else raw
    try:
        return ChartOfAccounts(accounts=tuple(ChartAccount(**r) for r in records))
    except (ValidationError, TypeError) as exc:
        raise ChartOfAccountsError(f"{path}: {exc}") from exc


@lru_cache(maxsize=None)
def cached_chart(path: Path = DEFAULT_CHART_PATH) -> ChartOfAccounts:
    """Load a chart once per process; later calls reuse the same instance."""
    return load_chart(path)

"""Canonical ledger entry and posting models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ledgerlens.models.enums import AccountGroup, CashFlowSection, Category, EntryType

NOT_AVAILABLE = "N/A"


class LedgerEntry(BaseModel):
    """A normalized transaction record. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    description: str = NOT_AVAILABLE
    amount: Decimal = Field(ge=0)
    type: EntryType
    category: Category
    source_category: str
    status: str = NOT_AVAILABLE
    debit_account: str | None = None
    credit_account: str | None = None
    account_type: str | None = None
    account_name: str | None = None
    vendor_name: str | None = None
    customer_name: str | None = None
    supplier: str | None = None
    item_name: str | None = None
    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    reference: str | None = None
    cash_flow_section: CashFlowSection | None = None

    @property
    def signed_amount(self) -> Decimal:
        """Cash-perspective amount: credits add, debits subtract."""
        return self.amount if self.type == EntryType.CREDIT else -self.amount

    @property
    def is_paid(self) -> bool:
        return self.status.strip().lower() == "paid"


class Posting(BaseModel):
    """One debit or credit leg produced by classifying an entry."""

    model_config = ConfigDict(frozen=True)

    entry_id: str
    account: str
    group: AccountGroup
    side: EntryType
    amount: Decimal = Field(ge=0)

    @property
    def debit(self) -> Decimal:
        return self.amount if self.side == EntryType.DEBIT else Decimal("0")

    @property
    def credit(self) -> Decimal:
        return self.amount if self.side == EntryType.CREDIT else Decimal("0")

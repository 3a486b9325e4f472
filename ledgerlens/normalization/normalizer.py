"""Transaction normalization: raw feed records to canonical ledger entries."""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from ledgerlens.exceptions import ValidationError
from ledgerlens.models.enums import CashFlowSection, Category, EntryType
from ledgerlens.models.ledger import NOT_AVAILABLE, LedgerEntry

logger = logging.getLogger(__name__)

# Entry type assumed when a record omits it, per the original create forms.
# Bank transactions always carry an explicit type.
_DEFAULT_TYPES: dict[Category, EntryType] = {
    Category.INVOICE: EntryType.CREDIT,
    Category.BILL: EntryType.DEBIT,
    Category.INVENTORY: EntryType.DEBIT,
    Category.ITEM_RESTOCK: EntryType.DEBIT,
    Category.MANUAL_JOURNAL: EntryType.DEBIT,
    Category.GENERAL_ENTRY: EntryType.DEBIT,
    Category.GENERAL_LEDGER: EntryType.DEBIT,
}

_CURRENCY_CHARS = re.compile(r"[$€£¥\s]")


@dataclass
class RejectedRecord:
    """A raw record that failed validation, with its position in the input."""

    index: int
    record_id: str
    error: ValidationError


@dataclass
class NormalizationResult:
    """Bundles accepted entries and rejected records from one normalization pass."""

    entries: tuple[LedgerEntry, ...] = ()
    rejected: list[RejectedRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries) + len(self.rejected)


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-empty value among *keys*."""
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(raw: Mapping[str, Any], *keys: str) -> str | None:
    value = _first(raw, *keys)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_amount(value: Any, record_id: str, field_name: str = "amount") -> Decimal:
    """Parse an amount into a finite, non-negative Decimal.

    Accepts numbers and strings such as "1000", "€1,234.50" or "$ 99".
    """
    if value is None or value == "":
        raise ValidationError(record_id, field_name, "amount is missing")
    if isinstance(value, bool):
        raise ValidationError(record_id, field_name, f"not a number: {value!r}")
    cleaned = _CURRENCY_CHARS.sub("", str(value)).replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValidationError(record_id, field_name, f"not a number: {value!r}") from None
    if not amount.is_finite():
        raise ValidationError(record_id, field_name, f"not a finite number: {value!r}")
    if amount < 0:
        raise ValidationError(record_id, field_name, f"must be >= 0, got {amount}")
    return amount


def parse_entry_date(value: Any, record_id: str) -> date:
    """Parse an ISO date or timestamp into a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or str(value).strip() == "":
        raise ValidationError(record_id, "date", "date is missing")
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(record_id, "date", f"not a valid calendar date: {text!r}") from None


def _optional_decimal(value: Any) -> Decimal | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).replace(",", ""))
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


class TransactionNormalizer:
    """Maps heterogeneous feed records onto LedgerEntry.

    Pure: the same record always yields the same entry (or the same error).
    """

    def normalize(self, raw: Mapping[str, Any], index: int = 0) -> LedgerEntry:
        """Normalize a single raw record. Raises ValidationError when malformed."""
        if not isinstance(raw, Mapping):
            raise ValidationError(f"row-{index}", "record", f"expected an object, got {type(raw).__name__}")
        record_id = _text(raw, "id", "_id") or f"row-{index}"
        source_category = _text(raw, "category") or NOT_AVAILABLE
        try:
            category = Category(source_category.lower())
        except ValueError:
            category = Category.UNLISTED

        entry_type = self._resolve_type(raw, category, record_id)
        amount = parse_amount(self._raw_amount(raw, category), record_id)
        entry_date = parse_entry_date(_first(raw, "date", "dueDate", "due_date", "createdAt"), record_id)

        section = None
        raw_section = _text(raw, "cashFlowSection", "cash_flow_section")
        if raw_section:
            try:
                section = CashFlowSection(raw_section.capitalize())
            except ValueError:
                raise ValidationError(record_id, "cashFlowSection", f"unknown section {raw_section!r}") from None

        quantity = _optional_decimal(raw.get("quantity"))
        unit_price = _optional_decimal(_first(raw, "unitPrice", "unitCost", "unit_price"))

        return LedgerEntry(
            id=record_id,
            date=entry_date,
            description=_text(raw, "description", "name", "itemName", "accountName") or NOT_AVAILABLE,
            amount=amount,
            type=entry_type,
            category=category,
            source_category=source_category,
            status=_text(raw, "status") or NOT_AVAILABLE,
            debit_account=self._account_field(raw, category, "debitAccount", "debit_account"),
            credit_account=self._account_field(raw, category, "creditAccount", "credit_account"),
            account_type=_text(raw, "accountType", "account_type"),
            account_name=_text(raw, "accountName", "account_name"),
            vendor_name=_text(raw, "vendorName", "vendor_name"),
            customer_name=_text(raw, "customerName", "customer_name"),
            supplier=_text(raw, "supplier"),
            item_name=_text(raw, "itemName", "item_name", "name"),
            quantity=quantity,
            unit_price=unit_price,
            reference=_text(raw, "reference", "entryNumber", "entry_number"),
            cash_flow_section=section,
        )

    def normalize_many(self, raws: Iterable[Any]) -> NormalizationResult:
        """Normalize a batch; malformed records are logged and collected, not raised.

        Entry ids are unique within a batch: a record repeating an earlier id
        is rejected.
        """
        entries: list[LedgerEntry] = []
        rejected: list[RejectedRecord] = []
        seen: dict[str, int] = {}
        for index, raw in enumerate(raws):
            try:
                entry = self.normalize(raw, index)
                if entry.id in seen:
                    raise ValidationError(entry.id, "id", f"duplicate of record {seen[entry.id]}")
                seen[entry.id] = index
                entries.append(entry)
            except ValidationError as exc:
                logger.warning("Skipping record %d: %s", index, exc)
                rejected.append(RejectedRecord(index=index, record_id=exc.record_id, error=exc))
        return NormalizationResult(entries=tuple(entries), rejected=rejected)

    @staticmethod
    def _resolve_type(raw: Mapping[str, Any], category: Category, record_id: str) -> EntryType:
        value = _text(raw, "type")
        if value is None:
            default = _DEFAULT_TYPES.get(category)
            if default is None:
                raise ValidationError(record_id, "type", "type is missing")
            return default
        try:
            return EntryType(value.lower())
        except ValueError:
            raise ValidationError(record_id, "type", f"must be 'credit' or 'debit', got {value!r}") from None

    @staticmethod
    def _raw_amount(raw: Mapping[str, Any], category: Category) -> Any:
        """Pick the amount field, falling back to category-specific fields."""
        amount = _first(raw, "amount")
        if amount is not None:
            return amount
        if category == Category.GENERAL_LEDGER:
            return _first(raw, "openingBalance", "opening_balance")
        if category in (Category.INVENTORY, Category.ITEM_RESTOCK):
            quantity = _optional_decimal(raw.get("quantity"))
            unit = _optional_decimal(_first(raw, "unitPrice", "unitCost", "unit_price"))
            if quantity is not None and unit is not None:
                return quantity * unit
        return None

    @staticmethod
    def _account_field(raw: Mapping[str, Any], category: Category, *keys: str) -> str | None:
        """Journal account names; missing ones become the N/A sentinel on journals."""
        value = _text(raw, *keys)
        if value is None and category in (Category.MANUAL_JOURNAL, Category.GENERAL_ENTRY):
            return NOT_AVAILABLE
        return value

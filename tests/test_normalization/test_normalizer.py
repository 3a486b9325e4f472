"""Tests for transaction normalization."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerlens.exceptions import ValidationError
from ledgerlens.models.enums import CashFlowSection, Category, EntryType
from ledgerlens.models.ledger import NOT_AVAILABLE
from ledgerlens.normalization.normalizer import TransactionNormalizer, parse_amount, parse_entry_date


@pytest.fixture
def normalizer():
    return TransactionNormalizer()


def _bank(**overrides) -> dict:
    record = {
        "id": "b1",
        "category": "bank-transactions",
        "description": "Deposit",
        "amount": "100",
        "type": "credit",
        "date": "2024-01-15",
    }
    record.update(overrides)
    return record


class TestParseAmount:
    def test_plain_number(self):
        assert parse_amount(250, "r1") == Decimal("250")

    def test_currency_symbol_and_thousands_separator(self):
        assert parse_amount("€1,234.50", "r1") == Decimal("1234.50")
        assert parse_amount("$ 99", "r1") == Decimal("99")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be >= 0"):
            parse_amount("-5", "r1")

    def test_not_a_number_rejected(self):
        with pytest.raises(ValidationError):
            parse_amount("abc", "r1")

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            parse_amount("NaN", "r1")
        with pytest.raises(ValidationError, match="finite"):
            parse_amount("Infinity", "r1")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            parse_amount(True, "r1")

    def test_missing_rejected(self):
        with pytest.raises(ValidationError, match="missing"):
            parse_amount(None, "r1")


class TestParseEntryDate:
    def test_iso_date(self):
        assert parse_entry_date("2024-02-29", "r1") == date(2024, 2, 29)

    def test_timestamp(self):
        assert parse_entry_date("2024-03-01T10:30:00Z", "r1") == date(2024, 3, 1)

    def test_invalid_calendar_date(self):
        with pytest.raises(ValidationError, match="calendar date"):
            parse_entry_date("2024-02-30", "r1")

    def test_date_object_passthrough(self):
        assert parse_entry_date(date(2024, 1, 1), "r1") == date(2024, 1, 1)


class TestTransactionNormalizer:
    def test_bank_transaction(self, normalizer):
        entry = normalizer.normalize(_bank())
        assert entry.id == "b1"
        assert entry.category == Category.BANK_TRANSACTION
        assert entry.amount == Decimal("100")
        assert entry.type == EntryType.CREDIT
        assert entry.date == date(2024, 1, 15)

    def test_type_is_case_insensitive(self, normalizer):
        assert normalizer.normalize(_bank(type="DEBIT")).type == EntryType.DEBIT

    def test_bank_transaction_requires_type(self, normalizer):
        record = _bank()
        del record["type"]
        with pytest.raises(ValidationError, match="type"):
            normalizer.normalize(record)

    def test_unknown_type_rejected(self, normalizer):
        with pytest.raises(ValidationError, match="credit' or 'debit"):
            normalizer.normalize(_bank(type="transfer"))

    def test_invoice_defaults_to_credit_and_due_date(self, normalizer):
        entry = normalizer.normalize(
            {"id": "i1", "category": "invoices", "customerName": "Acme", "amount": 10, "dueDate": "2024-04-01"}
        )
        assert entry.type == EntryType.CREDIT
        assert entry.date == date(2024, 4, 1)
        assert entry.customer_name == "Acme"

    def test_bill_defaults_to_debit(self, normalizer):
        entry = normalizer.normalize({"id": "x", "category": "bills", "amount": 10, "dueDate": "2024-04-01"})
        assert entry.type == EntryType.DEBIT

    def test_missing_optional_fields_default_to_sentinel(self, normalizer):
        record = _bank()
        del record["description"]
        entry = normalizer.normalize(record)
        assert entry.description == NOT_AVAILABLE
        assert entry.status == NOT_AVAILABLE

    def test_description_falls_back_to_name(self, normalizer):
        entry = normalizer.normalize(
            {"id": "inv", "category": "inventory", "name": "Widget", "quantity": 2, "unitPrice": "3.50",
             "date": "2024-01-01"}
        )
        assert entry.description == "Widget"
        assert entry.amount == Decimal("7.00")

    def test_restock_amount_from_quantity_and_unit_cost(self, normalizer):
        entry = normalizer.normalize(
            {"id": "r", "category": "item-restocks", "itemName": "Widget", "quantity": "4", "unitCost": "11",
             "date": "2024-01-01"}
        )
        assert entry.amount == Decimal("44")
        assert entry.type == EntryType.DEBIT

    def test_general_ledger_amount_from_opening_balance(self, normalizer):
        entry = normalizer.normalize(
            {"id": "g", "category": "general-ledgers", "accountName": "Loan Payable", "accountType": "liability",
             "openingBalance": "5000", "date": "2024-01-01"}
        )
        assert entry.amount == Decimal("5000")
        assert entry.account_type == "liability"

    def test_journal_missing_accounts_become_sentinel(self, normalizer):
        entry = normalizer.normalize(
            {"id": "j", "category": "manual-journals", "amount": 5, "date": "2024-01-01"}
        )
        assert entry.debit_account == NOT_AVAILABLE
        assert entry.credit_account == NOT_AVAILABLE

    def test_unknown_category_is_unlisted(self, normalizer):
        entry = normalizer.normalize(_bank(category="misc-unlisted"))
        assert entry.category == Category.UNLISTED
        assert entry.source_category == "misc-unlisted"

    def test_id_falls_back_to_underscore_id_then_position(self, normalizer):
        record = _bank()
        del record["id"]
        assert normalizer.normalize({**record, "_id": "abc"}).id == "abc"
        assert normalizer.normalize(record, index=3).id == "row-3"

    def test_cash_flow_section(self, normalizer):
        entry = normalizer.normalize(_bank(cashFlowSection="financing"))
        assert entry.cash_flow_section == CashFlowSection.FINANCING

    def test_invalid_cash_flow_section_rejected(self, normalizer):
        with pytest.raises(ValidationError, match="cashFlowSection"):
            normalizer.normalize(_bank(cashFlowSection="speculative"))

    def test_entries_are_immutable(self, normalizer):
        entry = normalizer.normalize(_bank())
        with pytest.raises(Exception):
            entry.amount = Decimal("1")

    def test_normalize_many_collects_rejects(self, normalizer):
        result = normalizer.normalize_many([
            _bank(),
            _bank(id="bad-amount", amount="-1"),
            _bank(id="bad-date", date="not a date"),
            _bank(id="b2", type="debit"),
        ])
        assert [e.id for e in result.entries] == ["b1", "b2"]
        assert [r.record_id for r in result.rejected] == ["bad-amount", "bad-date"]
        assert [r.index for r in result.rejected] == [1, 2]
        assert result.rejected[1].error.field == "date"
        assert result.total == 4

    def test_rejected_amount_is_never_zeroed(self, normalizer):
        result = normalizer.normalize_many([_bank(amount="lots")])
        assert result.entries == ()
        assert len(result.rejected) == 1

    @pytest.mark.parametrize("raw", ["garbage", 42, None, ["a", "list"]])
    def test_non_object_record_rejected(self, normalizer, raw):
        with pytest.raises(ValidationError, match="expected an object") as exc_info:
            normalizer.normalize(raw, index=3)
        assert exc_info.value.record_id == "row-3"
        assert exc_info.value.field == "record"

    def test_duplicate_ids_rejected_and_counted(self, normalizer):
        records = [_bank(), _bank(amount="50"), _bank(type="debit")]
        result = normalizer.normalize_many(records)
        assert [e.amount for e in result.entries] == [Decimal("100")]
        assert [(r.index, r.record_id, r.error.field) for r in result.rejected] == [
            (1, "b1", "id"),
            (2, "b1", "id"),
        ]
        assert result.total == len(records)

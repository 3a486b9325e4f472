"""Tests for account classification."""

from decimal import Decimal

import pytest

from ledgerlens.engines.classifier import AccountClassifier, natural_side
from ledgerlens.models.enums import AccountGroup, Category, EntryType
from ledgerlens.normalization.normalizer import TransactionNormalizer


@pytest.fixture
def classifier(chart):
    return AccountClassifier(chart)


def _entry(**raw):
    raw.setdefault("id", "e1")
    raw.setdefault("date", "2024-01-01")
    raw.setdefault("amount", "100")
    return TransactionNormalizer().normalize(raw)


def _only_posting(classification):
    assert len(classification.postings) == 1
    return classification.postings[0]


class TestNaturalSide:
    def test_debit_normal_groups(self):
        assert natural_side(AccountGroup.ASSETS) == EntryType.DEBIT
        assert natural_side(AccountGroup.EXPENSES) == EntryType.DEBIT

    def test_credit_normal_groups(self):
        for group in (AccountGroup.LIABILITIES, AccountGroup.EQUITY, AccountGroup.REVENUE):
            assert natural_side(group) == EntryType.CREDIT


class TestAccountClassifier:
    def test_bank_credit_increases_cash(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="bank-transactions", type="credit")
        ))
        assert (posting.account, posting.group, posting.side) == ("Cash", AccountGroup.ASSETS, EntryType.DEBIT)

    def test_bank_debit_decreases_cash(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="bank-transactions", type="debit")
        ))
        assert posting.side == EntryType.CREDIT

    def test_pending_invoice_is_receivable(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="invoices", type="credit", status="pending")
        ))
        assert posting.account == "Accounts Receivable"
        assert posting.group == AccountGroup.ASSETS
        assert posting.debit == Decimal("100")

    def test_paid_invoice_is_revenue(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="invoices", status="Paid")
        ))
        assert posting.account == "Sales Revenue"
        assert posting.group == AccountGroup.REVENUE
        assert posting.credit == Decimal("100")

    def test_pending_bill_is_payable(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="bills", type="debit", status="pending")
        ))
        assert posting.account == "Accounts Payable"
        assert posting.group == AccountGroup.LIABILITIES
        assert posting.credit == Decimal("100")

    def test_paid_bill_is_expense(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="bills", status="paid")
        ))
        assert posting.account == "Operating Expenses"
        assert posting.group == AccountGroup.EXPENSES
        assert posting.debit == Decimal("100")

    @pytest.mark.parametrize("category", ["inventory", "item-restocks"])
    def test_stock_is_inventory(self, classifier, category):
        posting = _only_posting(classifier.classify(_entry(category=category)))
        assert (posting.account, posting.group, posting.side) == ("Inventory", AccountGroup.ASSETS, EntryType.DEBIT)

    def test_journal_posts_both_legs(self, classifier):
        result = classifier.classify(
            _entry(category="manual-journals", debitAccount="rent  expense", creditAccount="CASH")
        )
        debit, credit = result.postings
        assert (debit.account, debit.group, debit.side) == ("Rent Expense", AccountGroup.EXPENSES, EntryType.DEBIT)
        assert (credit.account, credit.group, credit.side) == ("Cash", AccountGroup.ASSETS, EntryType.CREDIT)
        assert result.errors == []

    def test_journal_unknown_account_goes_to_other(self, classifier):
        result = classifier.classify(
            _entry(category="general-entries", debitAccount="Mystery Fund", creditAccount="Cash")
        )
        debit, credit = result.postings
        assert (debit.account, debit.group) == ("Mystery Fund", AccountGroup.OTHER)
        assert credit.group == AccountGroup.ASSETS
        assert [e.account_name for e in result.errors] == ["Mystery Fund"]

    def test_general_ledger_uses_account_type(self, classifier):
        posting = _only_posting(classifier.classify(
            _entry(category="general-ledgers", accountName="Bridge Loan", accountType="Liabilities")
        ))
        assert posting.account == "Bridge Loan"
        assert posting.group == AccountGroup.LIABILITIES
        assert posting.side == EntryType.CREDIT

    def test_general_ledger_unknown_account_type(self, classifier):
        result = classifier.classify(
            _entry(category="general-ledgers", accountName="Odd", accountType="contra-widget")
        )
        assert result.postings[0].group == AccountGroup.OTHER
        assert result.errors[0].account_name == "contra-widget"

    def test_unlisted_category_goes_to_other(self, classifier):
        result = classifier.classify(
            _entry(category="misc-unlisted", type="credit")
        )
        posting = _only_posting(result)
        assert posting.entry_id == "e1"
        assert (posting.account, posting.group, posting.side) == ("misc-unlisted", AccountGroup.OTHER, EntryType.CREDIT)
        assert len(result.errors) == 1

    def test_every_category_is_handled(self, classifier):
        for category in Category:
            raw = {"category": category.value if category != Category.UNLISTED else "something-else",
                   "type": "debit"}
            result = classifier.classify(_entry(**raw))
            assert result.postings

    def test_classify_many_keeps_entry_order(self, classifier, feed_records):
        entries = TransactionNormalizer().normalize_many(feed_records).entries
        ledger = classifier.classify_many(entries)
        assert ledger.entries == entries
        assert [p.entry_id for p in ledger.postings][:2] == ["bank-1", "bank-2"]
        assert ledger.unclassified_entry_ids == set()

    def test_postings_are_never_dropped(self, classifier):
        entries = [
            _entry(id="a", category="bank-transactions", type="credit"),
            _entry(id="b", category="whatever", type="debit"),
            _entry(id="c", category="manual-journals", debitAccount="Nope", creditAccount="Nada"),
        ]
        ledger = classifier.classify_many(entries)
        assert {p.entry_id for p in ledger.postings} == {"a", "b", "c"}
        assert ledger.unclassified_entry_ids == {"b", "c"}

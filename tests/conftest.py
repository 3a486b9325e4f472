"""Shared test fixtures for LedgerLens."""

from datetime import date

import pytest

from ledgerlens.engines.generator import StatementGenerator
from ledgerlens.models.chart import ChartOfAccounts, cached_chart


def journal(entry_id: str, day: str, debit: str, credit: str, amount: str, description: str = "") -> dict:
    return {
        "id": entry_id,
        "category": "manual-journals",
        "date": day,
        "debitAccount": debit,
        "creditAccount": credit,
        "amount": amount,
        "description": description or f"{debit} / {credit}",
        "type": "debit",
        "status": "posted",
    }


@pytest.fixture
def chart() -> ChartOfAccounts:
    return cached_chart()


@pytest.fixture
def make_journal():
    return journal


@pytest.fixture
def generator(chart: ChartOfAccounts) -> StatementGenerator:
    return StatementGenerator(chart)


@pytest.fixture
def balanced_records() -> list[dict]:
    """A small company's first quarter, every record a balanced journal.

    Cash ends at 14,550.00; net profit is 2,750.00.
    """
    return [
        journal("j1", "2024-01-02", "Cash", "Share Capital", "10000", "Owner investment"),
        journal("j2", "2024-01-05", "Cash", "Loan Payable", "4000", "Bank loan"),
        journal("j3", "2024-01-10", "Equipment", "Cash", "3000", "Workshop equipment"),
        journal("j4", "2024-01-15", "Inventory", "Accounts Payable", "2000", "Stock on credit"),
        journal("j5", "2024-02-01", "Cash", "Sales Revenue", "5000", "Cash sales"),
        journal("j6", "2024-02-01", "Cost of Goods Sold", "Inventory", "800", "Cost of sales"),
        journal("j7", "2024-02-28", "Rent Expense", "Cash", "1200", "February rent"),
        journal("j8", "2024-03-01", "Cash", "Interest Income", "100", "Deposit interest"),
        journal("j9", "2024-03-05", "Interest Expense", "Cash", "50", "Loan interest"),
        journal("j10", "2024-03-31", "Income Tax Expense", "Cash", "300", "Tax instalment"),
    ]


@pytest.fixture
def unbalanced_records() -> list[dict]:
    """A pending invoice and a pending bill: single-sided, so the books do not balance."""
    return [
        {
            "id": "inv-1",
            "category": "invoices",
            "customerName": "Acme GmbH",
            "amount": 1000,
            "type": "credit",
            "status": "pending",
            "dueDate": "2024-03-01",
        },
        {
            "id": "bill-1",
            "category": "bills",
            "vendorName": "Office Supplies Ltd",
            "amount": 400,
            "type": "debit",
            "status": "pending",
            "dueDate": "2024-03-02",
        },
    ]


@pytest.fixture
def feed_records() -> list[dict]:
    """One record per feed category, shaped like the transactions feed."""
    return [
        {
            "id": "bank-1",
            "category": "bank-transactions",
            "description": "Customer payment",
            "amount": "2,500.00",
            "type": "credit",
            "status": "completed",
            "date": "2024-03-01",
        },
        {
            "id": "bank-2",
            "category": "bank-transactions",
            "description": "Van purchase",
            "amount": "900",
            "type": "debit",
            "status": "completed",
            "date": "2024-03-02",
            "cashFlowSection": "investing",
        },
        {
            "id": "inv-paid",
            "category": "invoices",
            "customerName": "Acme GmbH",
            "amount": "1200",
            "status": "paid",
            "dueDate": "2024-03-03",
        },
        {
            "id": "bill-paid",
            "category": "bills",
            "vendorName": "Power Co",
            "amount": "300",
            "status": "paid",
            "dueDate": "2024-03-04",
        },
        {
            "id": "item-1",
            "category": "inventory",
            "name": "Widget",
            "quantity": 10,
            "unitPrice": "12.50",
            "date": "2024-03-05",
        },
        {
            "id": "restock-1",
            "category": "item-restocks",
            "itemName": "Widget",
            "quantity": 4,
            "unitCost": "11",
            "supplier": "Widget Works",
            "date": "2024-03-06",
        },
        {
            "id": "gl-1",
            "category": "general-ledgers",
            "accountName": "Loan Payable",
            "accountType": "liability",
            "openingBalance": "5000",
            "date": "2024-03-07",
        },
        {
            "id": "ge-1",
            "category": "general-entries",
            "debitAccount": "Salaries and Wages",
            "creditAccount": "Bank",
            "amount": "750",
            "reference": "PAY-03",
            "date": "2024-03-08",
        },
    ]


@pytest.fixture
def as_of() -> date:
    return date(2024, 3, 31)

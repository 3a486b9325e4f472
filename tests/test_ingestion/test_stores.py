"""Tests for transaction store adapters."""

import json
from datetime import date

import pytest

from ledgerlens.ingestion import CsvTransactionStore, EntryQuery, JsonTransactionStore, open_store


@pytest.fixture
def json_file(tmp_path, feed_records):
    path = tmp_path / "transactions.json"
    path.write_text(json.dumps(feed_records))
    return path


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "id,category,description,amount,type,date,status\n"
        "b1,bank-transactions,Deposit,100,credit,2024-01-05,completed\n"
        "b2,bank-transactions,Rent,40,debit,2024-02-05,\n"
        "i1,invoices,,250,,2024-03-05,pending\n"
    )
    return path


class TestJsonTransactionStore:
    def test_reads_list(self, json_file, feed_records):
        assert JsonTransactionStore(json_file).load() == feed_records

    def test_reads_wrapped_list(self, tmp_path, feed_records):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"transactions": feed_records}))
        assert len(JsonTransactionStore(path).load()) == len(feed_records)

    def test_non_object_items_are_passed_on(self, tmp_path, feed_records):
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps([feed_records[0], "garbage", 42, None]))
        records = JsonTransactionStore(path).load()
        assert records == [feed_records[0], "garbage", 42, None]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="not valid JSON"):
            JsonTransactionStore(path).load()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonTransactionStore(tmp_path / "nope.json").load()


class TestCsvTransactionStore:
    def test_empty_cells_are_dropped(self, csv_file):
        records = CsvTransactionStore(csv_file).load()
        assert len(records) == 3
        assert "status" not in records[1]
        assert records[2] == {
            "id": "i1", "category": "invoices", "amount": "250", "date": "2024-03-05", "status": "pending",
        }


class TestEntryQuery:
    def test_category_filter(self, json_file):
        records = JsonTransactionStore(json_file).load(EntryQuery(categories=("Bank-Transactions",)))
        assert [r["id"] for r in records] == ["bank-1", "bank-2"]

    def test_date_range_uses_due_date_fallback(self, json_file):
        query = EntryQuery(start=date(2024, 3, 2), end=date(2024, 3, 4))
        records = JsonTransactionStore(json_file).load(query)
        assert [r["id"] for r in records] == ["bank-2", "inv-paid", "bill-paid"]

    def test_non_object_items_are_kept(self):
        query = EntryQuery(start=date(2024, 1, 1), categories=("invoices",))
        assert query.matches("garbage")
        assert query.matches(None)

    def test_unreadable_dates_are_kept(self):
        query = EntryQuery(start=date(2024, 1, 1))
        assert query.matches({"id": "x", "date": "garbage"})


class TestOpenStore:
    def test_by_extension(self, json_file, csv_file):
        assert isinstance(open_store(json_file), JsonTransactionStore)
        assert isinstance(open_store(csv_file), CsvTransactionStore)

    def test_unsupported(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported input file type"):
            open_store(tmp_path / "data.xml")

"""CSV export of the transactions feed."""

import csv

from ledgerlens.ingestion.base import RawRecord, TransactionStore


class CsvTransactionStore(TransactionStore):
    """Reads a CSV file with one record per row and feed field names as headers.

    Empty cells are dropped so that the normalizer's defaults apply.
    """

    def read(self) -> list[RawRecord]:
        records: list[RawRecord] = []
        with open(self.path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            for row in reader:
                record = {
                    key.strip(): value.strip()
                    for key, value in row.items()
                    if key and value is not None and value.strip() != ""
                }
                if record:
                    records.append(record)
        return records

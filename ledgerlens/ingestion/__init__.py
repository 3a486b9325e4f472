"""Transaction store adapters for loading raw feed records."""

from pathlib import Path

from ledgerlens.ingestion.base import EntryQuery, TransactionStore
from ledgerlens.ingestion.csv_store import CsvTransactionStore
from ledgerlens.ingestion.json_store import JsonTransactionStore

_STORES: dict[str, type[TransactionStore]] = {
    ".json": JsonTransactionStore,
    ".csv": CsvTransactionStore,
}


def open_store(path: Path) -> TransactionStore:
    """Pick a store for *path* by file extension."""
    try:
        return _STORES[path.suffix.lower()](path)
    except KeyError:
        raise ValueError(f"Unsupported input file type '{path.suffix}'. Use .json or .csv") from None


__all__ = ["CsvTransactionStore", "EntryQuery", "JsonTransactionStore", "TransactionStore", "open_store"]

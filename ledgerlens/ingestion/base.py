"""Base transaction store interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from ledgerlens.exceptions import ValidationError
from ledgerlens.normalization.normalizer import parse_entry_date

RawRecord = Any


@dataclass
class EntryQuery:
    """Date range and category filter applied to raw records.

    Records that are not objects, or whose date cannot be read, are kept so
    that normalization can reject and count them.
    """

    start: date | None = None
    end: date | None = None
    categories: tuple[str, ...] = field(default_factory=tuple)

    def matches(self, record: Any) -> bool:
        if not isinstance(record, Mapping):
            return True
        if self.categories:
            wanted = {c.lower() for c in self.categories}
            if str(record.get("category", "")).strip().lower() not in wanted:
                return False
        if self.start is None and self.end is None:
            return True
        raw_date = record.get("date") or record.get("dueDate") or record.get("createdAt")
        try:
            entry_date = parse_entry_date(raw_date, str(record.get("id", "")))
        except ValidationError:
            return True
        if self.start is not None and entry_date < self.start:
            return False
        if self.end is not None and entry_date > self.end:
            return False
        return True


class TransactionStore(ABC):
    """Abstract base class for transaction record sources."""

    def __init__(self, path: Path):
        self.path = path

    @abstractmethod
    def read(self) -> list[RawRecord]:
        """Read every raw record from the source."""
        ...

    def load(self, query: EntryQuery | None = None) -> list[RawRecord]:
        """Return raw records, optionally filtered by *query*."""
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")
        records = self.read()
        if query is None:
            return records
        return [r for r in records if query.matches(r)]

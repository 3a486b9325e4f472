"""JSON export of the transactions feed."""

import json

from ledgerlens.ingestion.base import RawRecord, TransactionStore


class JsonTransactionStore(TransactionStore):
    """Reads a JSON file holding a list of records, or ``{"transactions": [...]}``."""

    def read(self) -> list[RawRecord]:
        try:
            raw = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            raise ValueError(f"{self.path} is not valid JSON: {exc}") from exc

        if isinstance(raw, dict):
            raw = raw.get("transactions", [])
        if not isinstance(raw, list):
            raise ValueError(f"{self.path}: expected a list of transaction records")
        # Non-object items are passed on so normalization rejects and counts them.
        return raw

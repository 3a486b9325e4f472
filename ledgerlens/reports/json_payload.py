"""JSON statement payload."""

import json

from ledgerlens.models.statements import Statement
from ledgerlens.reports.base import Renderer


class JsonRenderer(Renderer):
    extension = "json"

    def render(self, statement: Statement) -> bytes:
        payload = statement.as_payload()
        payload["currency"] = self.currency
        return json.dumps(payload, indent=2).encode("utf-8")

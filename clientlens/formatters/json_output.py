"""JSON output."""
from __future__ import annotations

import json

from clientlens.formatters.structured import StructuredFormatter


class JSONFormatter(StructuredFormatter):
    name = "json"

    def __init__(self, indent: "int | None" = None):
        self.indent = indent

    def dump(self, doc: dict) -> str:
        return json.dumps(doc, indent=self.indent, ensure_ascii=False, default=str)

"""YAML output: the JSON document serialised as a YAML mapping."""
from __future__ import annotations

import yaml

from clientlens.formatters.structured import StructuredFormatter


class YAMLFormatter(StructuredFormatter):
    name = "yaml"

    def dump(self, doc: dict) -> str:
        return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True, default_flow_style=False)

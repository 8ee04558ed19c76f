"""
XML output.

    <?xml version="1.0" encoding="UTF-8"?>
    <search_results query="jo" count="1">
      <client id="1">
        <full_name>John Doe</full_name>
        <email>john@example.com</email>
        <rating>4.5</rating>
        <feedback>
          <comment>Great service</comment>
        </feedback>
      </client>
    </search_results>

An empty result list renders a self-closed root element with count="0".
"""
from __future__ import annotations

from clientlens.formatters.base import (
    APPLICATION,
    GENERATED_OK,
    Formatter,
    feedback_comments,
    group_by_email,
    plain,
)

DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_ENTITIES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
]


def escape_xml(value) -> str:
    """Escape text for use in XML content or attribute values."""
    value = plain(value)
    if value is None:
        return ""
    text = str(value)
    for char, entity in _ENTITIES:
        text = text.replace(char, entity)
    return text


class XMLFormatter(Formatter):
    name = "xml"

    def format_search_results(self, results, query):
        return self._document(
            "search_results",
            f'query="{escape_xml(query)}" count="{len(results)}"',
            [line for c in results for line in self._client(c, "  ")],
        )

    def format_duplicate_results(self, duplicates):
        body = []
        for email, clients in group_by_email(duplicates):
            body.append(f'  <duplicate_group email="{escape_xml(email)}">')
            for c in clients:
                body.extend(self._client(c, "    "))
            body.append("  </duplicate_group>")
        return self._document("duplicate_results", f'count="{len(duplicates)}"', body)

    def format_filtered_results(self, results):
        return self._document(
            "filtered_results",
            f'count="{len(results)}"',
            [line for c in results for line in self._client(c, "  ")],
        )

    def format_generation_result(self, filename, size):
        return "\n".join([
            DECLARATION,
            "<generation_result>",
            "  <status>success</status>",
            f"  <message>{GENERATED_OK}</message>",
            f"  <filename>{escape_xml(filename)}</filename>",
            f"  <size>{escape_xml(size)}</size>",
            "</generation_result>",
        ])

    def format_version(self, version):
        return "\n".join([
            DECLARATION,
            "<version>",
            f"  <application>{APPLICATION}</application>",
            f"  <number>{escape_xml(version)}</number>",
            "</version>",
        ])

    # ── Helpers ──────────────────────────────────────────────────────────────

    @staticmethod
    def _document(root: str, attrs: str, body: list[str]) -> str:
        if not body:
            return f"{DECLARATION}\n<{root} {attrs}/>"
        return "\n".join([DECLARATION, f"<{root} {attrs}>", *body, f"</{root}>"])

    @staticmethod
    def _client(client, indent: str) -> list[str]:
        lines = [
            f'{indent}<client id="{escape_xml(client.id)}">',
            f"{indent}  <full_name>{escape_xml(client.full_name)}</full_name>",
            f"{indent}  <email>{escape_xml(client.email)}</email>",
        ]
        if client.rating is not None:
            lines.append(f"{indent}  <rating>{escape_xml(client.rating)}</rating>")
        comments = feedback_comments(client)
        if comments:
            lines.append(f"{indent}  <feedback>")
            for comment in comments:
                lines.append(f"{indent}    <comment>{escape_xml(comment)}</comment>")
            lines.append(f"{indent}  </feedback>")
        lines.append(f"{indent}</client>")
        return lines

"""
Terminal output: human-readable lines with optional ANSI emphasis.

    Found 2 client(s) matching 'jo':
    - John Doe <john@example.com> #1
    - Joanna Bell <jb@example.com> #7

With colour on, the id is dimmed and the matched part of each name is
bold.  Removing the escape codes always leaves the plain text above.
"""
from __future__ import annotations

import re

from clientlens.formatters.base import (
    APPLICATION,
    GENERATED,
    NO_DUPLICATES,
    NO_RATING_MATCHES,
    NO_SEARCH_MATCHES,
    Formatter,
    feedback_comments,
    group_by_email,
    plain,
)

_DIM   = "\033[90m"
_BOLD  = "\033[1m"
_RESET = "\033[0m"

ANSI_RE = re.compile(r"\033\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def _text(value) -> str:
    value = plain(value)
    return "" if value is None else str(value)


class TTYFormatter(Formatter):
    name = "tty"

    def __init__(self, color: bool = True):
        self.color = color

    def format_search_results(self, results, query):
        if not results:
            return NO_SEARCH_MATCHES.format(query=_text(query))
        lines = [f"Found {len(results)} client(s) matching '{_text(query)}':"]
        needle = _text(query).strip()
        for client in results:
            lines.append(f"- {self._client_line(client, highlight=needle)}")
        return "\n".join(lines)

    def format_duplicate_results(self, duplicates):
        if not duplicates:
            return NO_DUPLICATES
        lines = ["Found duplicate emails:"]
        for email, clients in group_by_email(duplicates):
            lines.append(f"\n{_text(email)}:")
            for client in clients:
                lines.append(f"  - {self._client_line(client)}")
        return "\n".join(lines)

    def format_filtered_results(self, results):
        if not results:
            return NO_RATING_MATCHES
        blocks = []
        for client in results:
            lines = [self._client_line(client)]
            if client.rating is not None:
                lines.append(f"Rating {client.rating}")
            comments = feedback_comments(client)
            if comments:
                lines.append(", ".join(f'"{c}"' for c in comments))
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def format_generation_result(self, filename, size):
        return GENERATED.format(size=size, filename=filename)

    def format_version(self, version):
        return f"{APPLICATION} {version}"

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _client_line(self, client, highlight: str = "") -> str:
        name = _text(client.full_name)
        if highlight:
            name = self._emphasise(name, highlight)
        ident = f"#{_text(client.id)}"
        if self.color:
            ident = f"{_DIM}{ident}{_RESET}"
        return f"{name} <{_text(client.email)}> {ident}"

    def _emphasise(self, name: str, needle: str) -> str:
        """Bold every case-insensitive occurrence of needle in name."""
        if not self.color or not needle:
            return name
        pattern = re.compile(re.escape(needle), re.IGNORECASE)
        return pattern.sub(lambda m: f"{_BOLD}{m.group(0)}{_RESET}", name)

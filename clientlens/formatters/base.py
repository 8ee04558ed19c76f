"""
Formatter base class and the helpers every output format shares.

A formatter turns a query result (a flat list of Client) into one block of
text.  Variants differ only in syntax: which clients appear, in what order,
and under which email group is decided here so every format agrees.
"""
from __future__ import annotations

from clientlens.records import MISSING, Client, Result

APPLICATION = "clientlens"

NO_SEARCH_MATCHES = "No clients found matching '{query}'"
NO_DUPLICATES     = "No duplicate emails found"
NO_RATING_MATCHES = "No clients matched the rating filter"
GENERATED         = "Generated {size} clients and saved to '{filename}'"
GENERATED_OK      = "Dataset generated successfully"


def group_by_email(clients: list[Client]) -> list[tuple[object, list[Client]]]:
    """
    Re-derive duplicate groups from a flat result list.

    Groups are ordered by first occurrence; members keep list order.
    The email value is used as-is, so it matches the grouping done by
    Dataset.duplicate_emails().
    """
    groups: dict = {}
    for c in clients:
        key = None if c.email is MISSING else c.email
        try:
            hash(key)
        except TypeError:
            key = repr(key)
        groups.setdefault(key, []).append(c)
    return list(groups.items())


def feedback_comments(client: Client) -> list:
    """Feedback comments for a client: structured entries reduced to their comment."""
    return client.comments()


def plain(value) -> object:
    """Map MISSING to None for output."""
    return None if value is MISSING else value


def client_payload(client: Client) -> dict:
    """
    The per-client object used by the structured formats (JSON, YAML).

    `result` appears only when the source record had one.  Inside it,
    `rating` appears when given and `feedback` is the flattened comment list.
    """
    out = {
        "id":        plain(client.id),
        "full_name": plain(client.full_name),
        "email":     plain(client.email),
    }
    result = client.result
    if isinstance(result, Result):
        body: dict = {}
        if result.rating is not MISSING:
            body["rating"] = result.rating
        if result.feedback is not MISSING:
            body["feedback"] = result.comments()
        out["result"] = body
    elif result is not MISSING:
        out["result"] = result
    return out


class Formatter:
    """
    Base class for output formats.

    Subclasses implement all five format_* methods and return a single
    string.  None of them may raise on well-formed result lists; missing
    client fields just render as empty fragments.
    """

    name: str = ""

    def format_search_results(self, results: list[Client], query) -> str:
        raise NotImplementedError

    def format_duplicate_results(self, duplicates: list[Client]) -> str:
        raise NotImplementedError

    def format_filtered_results(self, results: list[Client]) -> str:
        raise NotImplementedError

    def format_generation_result(self, filename, size) -> str:
        raise NotImplementedError

    def format_version(self, version) -> str:
        raise NotImplementedError

    def __repr__(self):
        return f"{self.__class__.__name__}()"

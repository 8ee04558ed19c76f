"""
Document builders shared by the JSON and YAML formats.

Both formats emit the same logical document; only dump() differs.

    search      {query, count, clients: [...]}
    duplicates  {duplicates: [{email, clients: [...]}], count}
    filter      {count, clients: [...]}
    generate    {status, message, filename, size}
    version     {application, version}

Empty result lists additionally carry a `message` key with the same
"no results" text the other formats print.
"""
from __future__ import annotations

from clientlens.formatters.base import (
    APPLICATION,
    GENERATED_OK,
    NO_DUPLICATES,
    NO_RATING_MATCHES,
    NO_SEARCH_MATCHES,
    Formatter,
    client_payload,
    group_by_email,
)


def _scalar(value):
    """Paths and other non-JSON values become text."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class StructuredFormatter(Formatter):
    """Formatter whose output is a single serialised mapping."""

    def dump(self, doc: dict) -> str:
        raise NotImplementedError

    def format_search_results(self, results, query):
        doc = {
            "query":   _scalar(query),
            "count":   len(results),
            "clients": [client_payload(c) for c in results],
        }
        if not results:
            doc["message"] = NO_SEARCH_MATCHES.format(query="" if query is None else query)
        return self.dump(doc)

    def format_duplicate_results(self, duplicates):
        doc = {
            "duplicates": [
                {"email": _scalar(email), "clients": [client_payload(c) for c in clients]}
                for email, clients in group_by_email(duplicates)
            ],
            "count": len(duplicates),
        }
        if not duplicates:
            doc["message"] = NO_DUPLICATES
        return self.dump(doc)

    def format_filtered_results(self, results):
        doc = {
            "count":   len(results),
            "clients": [client_payload(c) for c in results],
        }
        if not results:
            doc["message"] = NO_RATING_MATCHES
        return self.dump(doc)

    def format_generation_result(self, filename, size):
        return self.dump({
            "status":   "success",
            "message":  GENERATED_OK,
            "filename": _scalar(filename),
            "size":     size,
        })

    def format_version(self, version):
        return self.dump({"application": APPLICATION, "version": _scalar(version)})

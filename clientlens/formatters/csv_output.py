"""CSV output: a `#` comment line, a header row, one row per client."""
from __future__ import annotations

import csv
import io

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

HEADER          = ["id", "full_name", "email"]
FILTERED_HEADER = HEADER + ["rating", "feedback_comments"]


def _cell(value):
    value = plain(value)
    return "" if value is None else value


class CSVFormatter(Formatter):
    name = "csv"

    def format_search_results(self, results, query):
        if not results:
            return "# " + NO_SEARCH_MATCHES.format(query=_cell(query))
        rows = [self._row(c) for c in results]
        return self._document(f"# Found {len(results)} client(s) matching '{_cell(query)}':",
                              HEADER, rows)

    def format_duplicate_results(self, duplicates):
        if not duplicates:
            return "# " + NO_DUPLICATES
        rows = [self._row(c) for _, clients in group_by_email(duplicates) for c in clients]
        return self._document("# Found duplicate emails:", HEADER, rows)

    def format_filtered_results(self, results):
        if not results:
            return "# " + NO_RATING_MATCHES
        rows = []
        for c in results:
            rating = c.rating
            rows.append(self._row(c) + [
                "" if rating is None else rating,
                " | ".join(str(comment) for comment in feedback_comments(c)),
            ])
        return self._document("# Clients matching rating filter:", FILTERED_HEADER, rows)

    def format_generation_result(self, filename, size):
        return "# " + GENERATED.format(size=size, filename=filename)

    def format_version(self, version):
        return f"# {APPLICATION} {version}"

    @staticmethod
    def _row(client) -> list:
        return [_cell(client.id), _cell(client.full_name), _cell(client.email)]

    @staticmethod
    def _document(comment: str, header: list, rows: list) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)
        return comment + "\n" + buf.getvalue().rstrip("\n")

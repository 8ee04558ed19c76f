"""
clientlens.formatters — interchangeable output formats.

    from clientlens.formatters import get_formatter

    fmt = get_formatter("json")
    print(fmt.format_search_results(dataset.search_names("jo"), "jo"))

Every formatter implements the same five methods (see Formatter).  The set
of formats is fixed; get_formatter() rejects anything else.
"""

from clientlens.formatters.base import Formatter, group_by_email, feedback_comments, client_payload
from clientlens.formatters.tty import TTYFormatter
from clientlens.formatters.csv_output import CSVFormatter
from clientlens.formatters.json_output import JSONFormatter
from clientlens.formatters.xml_output import XMLFormatter
from clientlens.formatters.yaml_output import YAMLFormatter

FORMATTERS = {
    cls.name: cls
    for cls in (TTYFormatter, CSVFormatter, JSONFormatter, XMLFormatter, YAMLFormatter)
}


def get_formatter(name: str, color: bool = True) -> Formatter:
    """Return a formatter instance by name.  Raises ValueError for unknown names."""
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(
            f"Unknown format: {name!r}.  Available: {', '.join(FORMATTERS)}"
        )
    if cls is TTYFormatter:
        return cls(color=color)
    return cls()


__all__ = [
    "FORMATTERS", "get_formatter",
    "Formatter", "group_by_email", "feedback_comments", "client_payload",
    "TTYFormatter", "CSVFormatter", "JSONFormatter", "XMLFormatter", "YAMLFormatter",
]

"""
In-memory client dataset and its three queries.

    ds = Dataset.load("clients.json")
    ds.search_names("jo")         # case-insensitive substring on full_name
    ds.duplicate_emails()         # every client sharing an email with another
    ds.filter_by_rating("3.5")    # clients whose result.rating >= 3.5

The dataset is read once and never changes.  Each query is a single linear
pass that returns a new list of the same Client objects, always in document
order.
"""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Iterable

from clientlens.records import Client
from clientlens.schema import DatasetError, DatasetNotFound, MalformedData, validate_dataset


def coerce_rating(value) -> "float | None":
    """
    Convert a rating or threshold to float.

    Accepts numbers and numeric text.  Returns None for null, booleans,
    non-numeric text or anything else float() rejects.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


class Dataset:
    """Ordered, read-only collection of Client records."""

    def __init__(self, clients: Iterable[Client] = (), source: "str | None" = None):
        self._clients = tuple(clients)
        self.source = source

    # ── Loading ──────────────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: "str | Path") -> "Dataset":
        """
        Read a dataset file.

        Raises DatasetNotFound if the path does not exist, MalformedData if the
        content is not a JSON array of objects, DatasetError on other I/O
        failures.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raise DatasetNotFound(f"Dataset file '{path}' does not exist") from None
        except OSError as e:
            raise DatasetError(f"Error loading dataset: {e}") from e
        return cls.loads(raw, source=str(path))

    @classmethod
    def loads(cls, data: "str | bytes", source: "str | None" = None) -> "Dataset":
        """Parse a dataset from JSON text already in memory."""
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise MalformedData(f"Dataset file is not valid UTF-8: {e}") from e
        if not data.strip():
            raise MalformedData("Invalid JSON in dataset file: content is empty")
        try:
            doc = json.loads(data)
        except json.JSONDecodeError as e:
            raise MalformedData(f"Invalid JSON in dataset file: {e}") from e
        validate_dataset(doc)
        return cls((Client.from_raw(record) for record in doc), source=source)

    # ── Access ───────────────────────────────────────────────────────────────

    @property
    def clients(self) -> "tuple[Client, ...]":
        return self._clients

    def __len__(self):
        return len(self._clients)

    def __iter__(self):
        return iter(self._clients)

    def __repr__(self):
        return f"Dataset(clients={len(self._clients)}, source={self.source!r})"

    # ── Queries ──────────────────────────────────────────────────────────────

    def search_names(self, query: "str | None") -> list[Client]:
        """Clients whose full_name contains query, ignoring case."""
        if query is None:
            return []
        needle = str(query).strip().casefold()
        if not needle:
            return []
        return [
            c for c in self._clients
            if c.name is not None and needle in c.name.casefold()
        ]

    def duplicate_emails(self) -> list[Client]:
        """
        Clients whose email appears on at least one other client.

        Blank or missing emails never form a group.  Groups follow the order
        in which each email is first seen; members keep dataset order.
        """
        groups: dict[str, list[Client]] = {}
        for c in self._clients:
            email = c.mail
            if email is None:
                continue
            groups.setdefault(email, []).append(c)
        return [c for members in groups.values() if len(members) > 1 for c in members]

    def filter_by_rating(self, threshold) -> list[Client]:
        """Clients with a numeric result.rating >= threshold."""
        minimum = coerce_rating(threshold)
        if minimum is None or math.isnan(minimum):
            return []
        matched = []
        for c in self._clients:
            rating = coerce_rating(c.rating)
            if rating is not None and rating >= minimum:
                matched.append(c)
        return matched

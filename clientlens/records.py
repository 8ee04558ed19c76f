"""
Record model for client datasets.

A dataset is a JSON array of loosely-typed objects:

    {
      "id": 1,
      "full_name": "John Doe",
      "email": "john.doe@example.com",
      "result": {
        "rating": 4.5,
        "feedback": ["Great", {"comment": "Fast reply", "date": "2024-01-02"}]
      }
    }

Every field except the object itself is optional.  Queries need to tell
"key not present" apart from "present but null", so each optional field
holds one of three states:

    MISSING   the key was not in the source object
    None      the key was present with a JSON null
    value     anything else, kept exactly as parsed

Nothing here validates types.  A name that turns out to be a number is kept
as a number and simply never matches a name search.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class _Missing:
    """Sentinel for a key that was absent from the source object."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING: Any = _Missing()


def is_present(value) -> bool:
    """True when a field was given and is not null."""
    return value is not MISSING and value is not None


def text_value(value) -> "str | None":
    """Return value if it is a non-blank string, else None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


@dataclass(frozen=True)
class Feedback:
    """One feedback entry: a bare comment or a {comment, date} object."""

    comment:    Any = None
    date:       Any = MISSING
    structured: bool = False

    @classmethod
    def from_raw(cls, raw) -> "Feedback":
        if isinstance(raw, dict):
            return cls(
                comment=raw.get("comment"),
                date=raw.get("date", MISSING),
                structured=True,
            )
        return cls(comment=raw)


@dataclass(frozen=True)
class Result:
    """Evaluation attached to a client; both fields optional."""

    rating:   Any = MISSING
    feedback: "tuple[Feedback, ...] | None | Any" = MISSING

    @classmethod
    def from_raw(cls, raw: dict) -> "Result":
        feedback = raw.get("feedback", MISSING)
        if isinstance(feedback, list):
            feedback = tuple(Feedback.from_raw(entry) for entry in feedback)
        elif is_present(feedback):
            # A lone scalar or object is treated as a one-entry list
            feedback = (Feedback.from_raw(feedback),)
        return cls(rating=raw.get("rating", MISSING), feedback=feedback)

    def comments(self) -> list:
        """Feedback flattened to comment values, structured entries without one dropped."""
        if not isinstance(self.feedback, tuple):
            return []
        return [entry.comment for entry in self.feedback if entry.comment is not None]


@dataclass(frozen=True)
class Client:
    """A single dataset record."""

    id:        Any = MISSING
    full_name: Any = MISSING
    email:     Any = MISSING
    result:    "Result | None | Any" = MISSING

    @classmethod
    def from_raw(cls, raw: dict) -> "Client":
        result = raw.get("result", MISSING)
        if isinstance(result, dict):
            result = Result.from_raw(result)
        return cls(
            id=raw.get("id", MISSING),
            full_name=raw.get("full_name", MISSING),
            email=raw.get("email", MISSING),
            result=result,
        )

    @property
    def name(self) -> "str | None":
        """full_name when it is usable text, else None."""
        return text_value(self.full_name)

    @property
    def mail(self) -> "str | None":
        """email when it is usable text, else None."""
        return text_value(self.email)

    @property
    def rating(self):
        """The raw rating, or None when there is no result or no rating."""
        if isinstance(self.result, Result) and is_present(self.result.rating):
            return self.result.rating
        return None

    def comments(self) -> list:
        if isinstance(self.result, Result):
            return self.result.comments()
        return []

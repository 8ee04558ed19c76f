"""
Dataset document validation and load-boundary errors.

The only persisted format is a UTF-8 JSON array of objects.  Anything else
fails the whole load; individual records are never rejected here.
"""


class DatasetError(Exception):
    """Raised when a dataset cannot be loaded."""


class DatasetNotFound(DatasetError, FileNotFoundError):
    """The dataset source does not exist."""


class MalformedData(DatasetError, ValueError):
    """The dataset source is not a JSON array of objects."""


def validate_dataset(doc) -> None:
    """Raise MalformedData if doc is not a list of objects."""
    if not isinstance(doc, list):
        raise MalformedData(
            f"Dataset must be a JSON array of client objects, got {type(doc).__name__}."
        )
    for index, record in enumerate(doc):
        if not isinstance(record, dict):
            raise MalformedData(
                f"Dataset entry #{index} must be an object, got {type(record).__name__}."
            )

"""
clientlens — ad-hoc queries over a JSON client dataset

Load a JSON array of client records, ask one of three questions, and
render the answer as terminal text, CSV, JSON, XML or YAML.

Quick start
-----------
  pip install clientlens
  clientlens generate --size 1000 -f clients.json
  clientlens search "john" -f clients.json
  clientlens duplicates -f clients.json -o json
  clientlens filter --rating 4 -f clients.json -o yaml

Library use
-----------
  from clientlens import Dataset
  from clientlens.formatters import get_formatter

  ds = Dataset.load("clients.json")
  print(get_formatter("csv").format_duplicate_results(ds.duplicate_emails()))
"""

from clientlens.dataset import Dataset
from clientlens.records import Client, Feedback, Result, MISSING
from clientlens.schema import DatasetError, DatasetNotFound, MalformedData

__all__ = [
    "Dataset", "Client", "Feedback", "Result", "MISSING",
    "DatasetError", "DatasetNotFound", "MalformedData",
]
__version__ = "0.1.0"

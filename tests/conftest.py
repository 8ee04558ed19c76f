import json

import pytest


SAMPLE_CLIENTS = [
    {"id": 1, "full_name": "John Doe",           "email": "john.doe@gmail.com"},
    {"id": 2, "full_name": "Jane Smith",         "email": "jane.smith@yahoo.com"},
    {"id": 3, "full_name": "Alex Johnson",       "email": "alex.johnson@hotmail.com"},
    {"id": 4, "full_name": "Another Jane Smith", "email": "jane.smith@yahoo.com"},
    {"id": 5, "full_name": "JOHN DOE",           "email": "different.john@example.com"},
]

RATED_CLIENTS = [
    {"id": 1, "full_name": "Ann Lee", "email": "ann@x.com",
     "result": {"rating": 4.5, "feedback": ["Great", {"comment": "Fast", "date": "2024-03-01"}]}},
    {"id": 2, "full_name": "Bo Kim", "email": "bo@x.com", "result": {}},
    {"id": 3, "full_name": "Cy Ray", "email": "cy@x.com", "result": {"rating": None}},
    {"id": 4, "full_name": "Di Fox", "email": "di@x.com", "result": {"rating": 2.0}},
]


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def sample_file(tmp_path):
    return write_json(tmp_path / "clients.json", SAMPLE_CLIENTS)


@pytest.fixture
def rated_file(tmp_path):
    return write_json(tmp_path / "rated.json", RATED_CLIENTS)

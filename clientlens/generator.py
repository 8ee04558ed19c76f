"""
Generate a synthetic client dataset.
Called by `clientlens generate`.

    generate_dataset(10_000)                         # → clients_10000.json
    generate_dataset(50, "small.json", seed=12345)   # reproducible
    generate_dataset(50, with_results=True)          # adds ratings + feedback

About 2% of clients (at least one) get another client's email so the
duplicates command always has something to find.
"""
from __future__ import annotations

import json
import random
import sys
from datetime import date, timedelta
from pathlib import Path

FIRST_NAMES = [
    "James", "Mary", "John", "Patricia", "Robert", "Jennifer", "Michael", "Linda",
    "William", "Elizabeth", "David", "Barbara", "Richard", "Susan", "Joseph", "Jessica",
    "Thomas", "Sarah", "Christopher", "Karen", "Charles", "Nancy", "Daniel", "Lisa",
    "Matthew", "Betty", "Mark", "Helen", "Donald", "Donna", "Paul", "Carol",
    "George", "Ruth", "Kenneth", "Shirley", "Steven", "Sharon", "Edward", "Cynthia",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
    "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson",
    "White", "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker",
    "Young", "Allen", "King", "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores",
    "Green", "Adams", "Nelson", "Baker",
]

DOMAINS = [
    "example.com", "test.org", "sample.net", "demo.com", "placeholder.org",
    "mockdata.net", "testsite.com", "sampleemail.org", "demodata.net", "examplesite.com",
]

COMMENTS = [
    "Great service", "Quick response", "Would recommend", "Average experience",
    "Slow to reply", "Very helpful", "Needs improvement", "Friendly staff",
    "Resolved my issue", "Too expensive",
]

DUPLICATE_RATE = 0.02

_FEEDBACK_EPOCH = date(2024, 1, 1)


def generate_dataset(
    size: int,
    filename: "str | Path | None" = None,
    seed: "int | None" = None,
    with_results: bool = False,
    verbose: bool = True,
) -> Path:
    """
    Write `size` generated clients as a JSON array and return the path.

    Raises ValueError if size is not a positive integer or the file cannot
    be written.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError("Size must be a positive integer")

    path = Path(filename or f"clients_{size}.json")
    rng  = random.Random(seed)

    if verbose:
        print(f"[clientlens] generating {size} clients …", file=sys.stderr)
    clients = [_client(rng, i, with_results) for i in range(1, size + 1)]

    n_dupes = _add_duplicates(rng, clients)
    if verbose:
        print(f"[clientlens] injected {n_dupes} duplicate email(s)", file=sys.stderr)

    try:
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(clients, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Failed to generate dataset: {e}") from e
    return path


def _client(rng: random.Random, client_id: int, with_results: bool) -> dict:
    first = rng.choice(FIRST_NAMES)
    last  = rng.choice(LAST_NAMES)
    username = f"{first.lower()}{last.lower()}{rng.randrange(1000)}"
    client = {
        "id":        client_id,
        "full_name": f"{first} {last}",
        "email":     f"{username}@{rng.choice(DOMAINS)}",
    }
    if with_results:
        client["result"] = _result(rng)
    return client


def _result(rng: random.Random) -> dict:
    feedback = []
    for _ in range(rng.randint(0, 3)):
        comment = rng.choice(COMMENTS)
        if rng.random() < 0.5:
            feedback.append(comment)
        else:
            day = _FEEDBACK_EPOCH + timedelta(days=rng.randrange(365))
            feedback.append({"comment": comment, "date": day.isoformat()})
    return {
        "rating":   round(rng.uniform(1.0, 5.0), 1),
        "feedback": feedback,
    }


def _add_duplicates(rng: random.Random, clients: list[dict]) -> int:
    """Copy random emails onto other random clients.  Returns how many were copied."""
    if len(clients) < 2:
        return 0
    count = max(int(len(clients) * DUPLICATE_RATE), 1)
    for _ in range(count):
        target, source = rng.sample(clients, 2)
        target["email"] = source["email"]
    return count

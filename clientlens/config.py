"""
Config loading.

clientlens runs fine without a config file; when one is present it supplies
defaults that command-line options override.

Config file schema (clientlens.yaml):

    version: 1
    dataset: data/clients.json   # relative to this file
    output: tty                  # tty | csv | json | xml | yaml
    color: true                  # ANSI emphasis in tty output
    generate:
      size: 10000
      seed: 12345
      with_results: false
"""
from __future__ import annotations

from pathlib import Path

import yaml

from clientlens.formatters import FORMATTERS

CONFIG_CANDIDATES = ["clientlens.yaml", ".clientlens.yaml", "clientlens.yml"]

DEFAULT_SIZE = 10_000


def load_config(path: "str | Path | None" = None) -> dict:
    """
    Load and normalise a clientlens.yaml config file.

    With no path, searches the current directory and returns defaults if
    nothing is found.  An explicit path that does not exist raises
    FileNotFoundError.  Invalid values raise ValueError.
    """
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file '{config_path}' does not exist")
    else:
        config_path = next((Path(c) for c in CONFIG_CANDIDATES if Path(c).exists()), None)
        if config_path is None:
            return _normalise_config({}, Path("."))

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file '{config_path}': {e}") from e
    except OSError as e:
        raise ValueError(f"Error reading config file '{config_path}': {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file '{config_path}' must contain a mapping.")

    cfg = _normalise_config(raw, config_path.parent)
    cfg["_path"] = config_path
    return cfg


def _normalise_config(raw: dict, base_dir: Path) -> dict:
    """Apply defaults, resolve the dataset path, validate values."""
    cfg = dict(raw)

    output = cfg.get("output") or "tty"
    if output not in FORMATTERS:
        raise ValueError(
            f"Unknown format in config: {output!r}.  Available: {', '.join(FORMATTERS)}"
        )
    cfg["output"] = output

    cfg["color"] = _flag(cfg.get("color", True), "color")

    dataset = cfg.get("dataset")
    if dataset:
        p = Path(dataset)
        cfg["dataset"] = str(p if p.is_absolute() else base_dir / p)
    else:
        cfg["dataset"] = None

    gen = cfg.get("generate") or {}
    if not isinstance(gen, dict):
        raise ValueError("Config key 'generate' must be a mapping.")
    size = gen.get("size", DEFAULT_SIZE)
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError(f"generate.size must be an integer, got {size!r}")
    cfg["generate"] = {
        "size":         size,
        "seed":         gen.get("seed"),
        "with_results": _flag(gen.get("with_results", False), "generate.with_results"),
    }

    return cfg


def _flag(value, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value

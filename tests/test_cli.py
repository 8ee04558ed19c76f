"""
CLI tests: run main() in-process and check stdout, stderr and exit status.
"""
import json

import pytest

from clientlens import __version__
from clientlens.cli import build_parser, main

from conftest import write_json


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    # Keep any clientlens.yaml in the real working directory out of the way
    monkeypatch.chdir(tmp_path)


def _run(capsys, *argv):
    with pytest.raises(SystemExit) as exc:
        main(list(argv))
    out, err = capsys.readouterr()
    return exc.value.code, out, err


# ── search ────────────────────────────────────────────────────────────────────

class TestSearch:
    def test_finds_matches(self, capsys, sample_file):
        code, out, _ = _run(capsys, "search", "john", "-f", str(sample_file), "--no-color")
        assert code == 0
        assert out.startswith("Found 3 client(s) matching 'john':\n")
        assert "- Alex Johnson <alex.johnson@hotmail.com> #3" in out

    def test_case_insensitive(self, capsys, sample_file):
        _, lower, _ = _run(capsys, "search", "e", "-f", str(sample_file), "--no-color")
        _, upper, _ = _run(capsys, "search", "E", "-f", str(sample_file), "--no-color")
        assert lower.splitlines()[1:] == upper.splitlines()[1:]

    def test_no_matches(self, capsys, sample_file):
        code, out, _ = _run(capsys, "search", "NonExistent", "-f", str(sample_file))
        assert code == 0
        assert out == "No clients found matching 'NonExistent'\n"

    def test_alias(self, capsys, sample_file):
        code, out, _ = _run(capsys, "s", "alex", "-f", str(sample_file), "-o", "csv")
        assert code == 0
        assert out.splitlines()[-1] == "3,Alex Johnson,alex.johnson@hotmail.com"

    def test_missing_file(self, capsys):
        code, out, err = _run(capsys, "search", "John", "-f", "nonexistent.json")
        assert code == 1
        assert out == ""
        assert "does not exist" in err

    def test_invalid_json(self, capsys, tmp_path):
        bad = tmp_path / "invalid.json"
        bad.write_text("invalid json")
        code, _, err = _run(capsys, "search", "John", "-f", str(bad))
        assert code == 1
        assert err.startswith("error: Invalid JSON")

    def test_no_filename(self, capsys):
        code, _, err = _run(capsys, "search", "John")
        assert code == 1
        assert "No dataset file specified" in err
        assert "clientlens generate" in err

    def test_unknown_format_rejected(self, capsys, sample_file):
        code, out, _ = _run(capsys, "search", "John", "-f", str(sample_file), "-o", "html")
        assert code == 2
        assert out == ""

    def test_verbose_goes_to_stderr(self, capsys, sample_file):
        code, out, err = _run(capsys, "search", "jane", "-f", str(sample_file), "-o", "json", "--verbose")
        assert code == 0
        assert json.loads(out)["count"] == 2
        assert "[clientlens] loaded 5 clients" in err


# ── duplicates ────────────────────────────────────────────────────────────────

class TestDuplicates:
    def test_finds_duplicates(self, capsys, sample_file):
        code, out, _ = _run(capsys, "duplicates", "-f", str(sample_file), "--no-color")
        assert code == 0
        assert "Found duplicate emails:" in out
        assert "jane.smith@yahoo.com:" in out
        assert out.count("  - ") == 2

    def test_no_duplicates(self, capsys, tmp_path):
        unique = write_json(tmp_path / "unique.json", [
            {"id": 1, "full_name": "John Doe", "email": "john@example.com"},
            {"id": 2, "full_name": "Jane Smith", "email": "jane@example.com"},
        ])
        code, out, _ = _run(capsys, "d", "-f", str(unique))
        assert code == 0
        assert out == "No duplicate emails found\n"

    def test_xml(self, capsys, sample_file):
        _, out, _ = _run(capsys, "duplicates", "-f", str(sample_file), "-o", "xml")
        assert '<duplicate_group email="jane.smith@yahoo.com">' in out

    def test_missing_file(self, capsys):
        code, _, err = _run(capsys, "duplicates", "-f", "nonexistent.json")
        assert code == 1
        assert "does not exist" in err


# ── filter ────────────────────────────────────────────────────────────────────

class TestFilter:
    def test_filters(self, capsys, rated_file):
        code, out, _ = _run(capsys, "filter", "--rating", "3", "-f", str(rated_file), "-o", "json")
        assert code == 0
        doc = json.loads(out)
        assert [c["id"] for c in doc["clients"]] == [1]

    def test_no_matches(self, capsys, rated_file):
        code, out, _ = _run(capsys, "f", "--rating", "5", "-f", str(rated_file))
        assert code == 0
        assert out == "No clients matched the rating filter\n"

    def test_non_numeric_rating(self, capsys, rated_file):
        code, _, err = _run(capsys, "filter", "--rating", "abc", "-f", str(rated_file))
        assert code == 2
        assert "rating must be a number" in err


# ── generate ──────────────────────────────────────────────────────────────────

class TestGenerate:
    def test_generates(self, capsys, tmp_path):
        target = tmp_path / "clients_50.json"
        code, out, _ = _run(capsys, "generate", "--size", "50", "-f", str(target), "--seed", "1")
        assert code == 0
        assert out == f"Generated 50 clients and saved to '{target}'\n"
        data = json.loads(target.read_text())
        assert isinstance(data, list) and len(data) == 50

    def test_default_filename(self, capsys, tmp_path):
        code, _, _ = _run(capsys, "g", "--size", "5")
        assert code == 0
        assert (tmp_path / "clients_5.json").exists()

    def test_with_results(self, capsys, tmp_path):
        target = tmp_path / "rated.json"
        _run(capsys, "generate", "--size", "5", "-f", str(target), "--with-results")
        assert all("rating" in c["result"] for c in json.loads(target.read_text()))

    def test_json_receipt(self, capsys, tmp_path):
        target = tmp_path / "out.json"
        _, out, _ = _run(capsys, "generate", "--size", "3", "-f", str(target), "-o", "json")
        assert json.loads(out) == {"status": "success", "message": "Dataset generated successfully",
                                   "filename": str(target), "size": 3}

    def test_overwrite_declined(self, capsys, tmp_path, monkeypatch):
        target = tmp_path / "existing.json"
        target.write_text("[]")
        monkeypatch.setattr("builtins.input", lambda prompt="": "n")
        code, _, err = _run(capsys, "generate", "--size", "10", "-f", str(target))
        assert code == 1
        assert "Generation cancelled by user" in err
        assert target.read_text() == "[]"

    def test_overwrite_confirmed(self, capsys, tmp_path, monkeypatch):
        target = tmp_path / "existing.json"
        target.write_text("[]")
        monkeypatch.setattr("builtins.input", lambda prompt="": "y")
        code, _, _ = _run(capsys, "generate", "--size", "10", "-f", str(target))
        assert code == 0
        assert len(json.loads(target.read_text())) == 10

    def test_overwrite_prompt_on_stderr(self, capsys, tmp_path, monkeypatch):
        target = tmp_path / "existing.json"
        target.write_text("[]")
        monkeypatch.setattr("builtins.input", lambda prompt="": "y")
        code, out, err = _run(capsys, "generate", "--size", "4", "-f", str(target), "-o", "json")
        assert code == 0
        assert json.loads(out)["size"] == 4
        assert f"File '{target}' already exists. Overwrite?" in err

    def test_force_skips_prompt(self, capsys, tmp_path, monkeypatch):
        target = tmp_path / "existing.json"
        target.write_text("[]")

        def _no_prompt(prompt=""):
            raise AssertionError("should not prompt")

        monkeypatch.setattr("builtins.input", _no_prompt)
        code, _, _ = _run(capsys, "generate", "--size", "10", "-f", str(target), "--force")
        assert code == 0
        assert len(json.loads(target.read_text())) == 10

    @pytest.mark.parametrize("size", ["0", "-1"])
    def test_invalid_size(self, capsys, size):
        code, _, err = _run(capsys, "generate", "--size", size)
        assert code == 1
        assert "Size must be a positive integer" in err

    def test_target_is_directory(self, capsys, tmp_path):
        target = tmp_path / "somedir"
        target.mkdir()
        code, out, err = _run(capsys, "generate", "--size", "3", "-f", str(target), "--force")
        assert code == 1
        assert out == ""
        assert err.startswith("error: Failed to generate dataset")

    def test_parent_is_regular_file(self, capsys, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        code, out, err = _run(capsys, "generate", "--size", "3", "-f", str(blocker / "c.json"))
        assert code == 1
        assert out == ""
        assert err.startswith("error: Failed to generate dataset")


# ── version ───────────────────────────────────────────────────────────────────

class TestVersion:
    @pytest.mark.parametrize("argv", [["version"], ["--version"], ["-v"]])
    def test_version(self, capsys, argv):
        code, out, _ = _run(capsys, *argv)
        assert code == 0
        assert out == f"clientlens {__version__}\n"

    def test_version_yaml(self, capsys):
        _, out, _ = _run(capsys, "version", "-o", "yaml")
        assert out == f"application: clientlens\nversion: {__version__}\n"


# ── config file ───────────────────────────────────────────────────────────────

class TestConfigFile:
    def test_defaults_from_config(self, capsys, tmp_path, sample_file):
        (tmp_path / "clientlens.yaml").write_text(
            f"version: 1\ndataset: {sample_file.name}\noutput: json\n"
        )
        code, out, _ = _run(capsys, "duplicates")
        assert code == 0
        assert json.loads(out)["count"] == 2

    def test_cli_overrides_config(self, capsys, tmp_path, sample_file):
        (tmp_path / "clientlens.yaml").write_text(f"dataset: {sample_file.name}\noutput: json\n")
        _, out, _ = _run(capsys, "duplicates", "-o", "csv")
        assert out.startswith("# Found duplicate emails:")

    def test_bad_output_in_config(self, capsys, tmp_path):
        (tmp_path / "clientlens.yaml").write_text("output: html\n")
        code, _, err = _run(capsys, "version")
        assert code == 1
        assert "Unknown format" in err

    def test_explicit_config_missing(self, capsys):
        code, _, err = _run(capsys, "version", "--config", "nope.yaml")
        assert code == 1
        assert "nope.yaml" in err

    def test_config_is_directory(self, capsys, tmp_path):
        (tmp_path / "confdir").mkdir()
        code, _, err = _run(capsys, "version", "--config", "confdir")
        assert code == 1
        assert err.startswith("error: Error reading config file 'confdir'")

    def test_string_color_rejected(self, capsys, tmp_path):
        (tmp_path / "clientlens.yaml").write_text('color: "false"\n')
        code, _, err = _run(capsys, "version")
        assert code == 1
        assert "color must be true or false" in err


class TestParser:
    def test_aliases(self):
        parser = build_parser()
        assert parser.parse_args(["s", "x"]).func.__name__ == "cmd_search"
        assert parser.parse_args(["d"]).func.__name__ == "cmd_duplicates"
        assert parser.parse_args(["f", "--rating", "1"]).func.__name__ == "cmd_filter"
        assert parser.parse_args(["g"]).func.__name__ == "cmd_generate"

    def test_filename_option(self):
        args = build_parser().parse_args(["search", "x", "-f", "data.json"])
        assert args.filename == "data.json"

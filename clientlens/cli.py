"""
clientlens CLI

    clientlens search QUERY -f clients.json        # partial, case-insensitive name match
    clientlens duplicates -f clients.json          # clients sharing an email
    clientlens filter --rating 4 -f clients.json   # clients rated 4.0 or higher
    clientlens generate --size 500 -f test.json    # write a synthetic dataset
    clientlens version

Every command takes -o/--output {tty,csv,json,xml,yaml}.  Short aliases:
s (search), d (duplicates), f (filter), g (generate), -v / --version.

Defaults for --filename, --output and generate options can live in a
clientlens.yaml in the working directory (or --config FILE).  Results go to
stdout; diagnostics (--verbose) and errors go to stderr.
"""

import argparse
import sys
from pathlib import Path

from clientlens import __version__
from clientlens.formatters import FORMATTERS

NO_DATASET_HELP = """\
No dataset file specified. Please provide a dataset file with --filename or -f.

To get started, you can:
1. Generate a test dataset: clientlens generate --filename my_data.json
2. Use your own JSON file: clientlens search "John" --filename your_data.json

For help: clientlens --help"""


class CLIError(Exception):
    """A user-facing failure; the message is printed and the exit status is 1."""


def _log(args, message: str) -> None:
    if getattr(args, "verbose", False):
        print(f"[clientlens] {message}", file=sys.stderr)


def _emit(text: str) -> None:
    print(text.rstrip("\n"))


# ── Shared setup ─────────────────────────────────────────────────────────────

def _setup(args, need_dataset: bool = True):
    """
    Resolve config, formatter and (optionally) the dataset for a command.

    The formatter is chosen before the dataset is read so an unknown format
    fails before any query runs.
    """
    from clientlens.config import load_config
    from clientlens.dataset import Dataset
    from clientlens.formatters import get_formatter

    cfg = load_config(args.config)
    if cfg.get("_path"):
        _log(args, f"config: {cfg['_path']}")

    color = cfg["color"] and not args.no_color
    formatter = get_formatter(args.output or cfg["output"], color=color)

    if not need_dataset:
        return cfg, formatter, None

    filename = args.filename or cfg["dataset"]
    if not filename:
        raise CLIError(NO_DATASET_HELP)

    dataset = Dataset.load(filename)
    _log(args, f"loaded {len(dataset)} clients from {filename}")
    return cfg, formatter, dataset


def _run(args, body) -> int:
    """Call body(); map load and config errors to exit status 1."""
    from clientlens.schema import DatasetError

    try:
        body()
    except (CLIError, DatasetError, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


# ── Commands ─────────────────────────────────────────────────────────────────

def cmd_search(args):
    """Search client names for a partial, case-insensitive match."""
    def body():
        _, formatter, dataset = _setup(args)
        results = dataset.search_names(args.query)
        _log(args, f"search {args.query!r}: {len(results)} match(es)")
        _emit(formatter.format_search_results(results, args.query))
    return _run(args, body)


def cmd_duplicates(args):
    """Show clients that share an email address."""
    def body():
        _, formatter, dataset = _setup(args)
        duplicates = dataset.duplicate_emails()
        _log(args, f"duplicates: {len(duplicates)} client(s)")
        _emit(formatter.format_duplicate_results(duplicates))
    return _run(args, body)


def cmd_filter(args):
    """Show clients whose rating is at least --rating."""
    def body():
        _, formatter, dataset = _setup(args)
        results = dataset.filter_by_rating(args.rating)
        _log(args, f"rating >= {args.rating}: {len(results)} client(s)")
        _emit(formatter.format_filtered_results(results))
    return _run(args, body)


def cmd_generate(args):
    """Write a synthetic dataset."""
    from clientlens.generator import generate_dataset

    def body():
        cfg, formatter, _ = _setup(args, need_dataset=False)
        gen  = cfg["generate"]
        size = args.size if args.size is not None else gen["size"]
        seed = args.seed if args.seed is not None else gen["seed"]
        if size <= 0:
            raise CLIError("Size must be a positive integer")

        path = Path(args.filename or f"clients_{size}.json")
        if path.exists() and not args.force:
            _confirm_overwrite(path)

        written = generate_dataset(
            size, path, seed=seed,
            with_results=args.with_results or gen["with_results"],
            verbose=args.verbose,
        )
        _emit(formatter.format_generation_result(str(written), size))
    return _run(args, body)


def cmd_version(args):
    """Print the version through the selected formatter."""
    def body():
        _, formatter, _ = _setup(args, need_dataset=False)
        _emit(formatter.format_version(__version__))
    return _run(args, body)


def _confirm_overwrite(path: Path) -> None:
    # stdout is reserved for rendered results
    print(f"File '{path}' already exists. Overwrite? [y/N] ", end="", file=sys.stderr, flush=True)
    try:
        answer = input()
    except EOFError:
        answer = ""
    if answer.strip().lower() not in ("y", "yes"):
        raise CLIError("Generation cancelled by user")


def _rating_arg(value: str) -> str:
    from clientlens.dataset import coerce_rating

    if coerce_rating(value) is None:
        raise argparse.ArgumentTypeError(f"rating must be a number, got {value!r}")
    return value


# ── Parser ───────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-f", "--filename", metavar="FILE",
        help="Dataset file (required for all commands except version)",
    )
    common.add_argument(
        "-o", "--output", choices=list(FORMATTERS),
        help=f"Output format ({', '.join(FORMATTERS)}; default: tty)",
    )
    common.add_argument("--config", metavar="FILE",
                        help="Config file (default: clientlens.yaml in current directory)")
    common.add_argument("--no-color", action="store_true", help="Disable ANSI emphasis in tty output")
    common.add_argument("--verbose", action="store_true", help="Print diagnostics to stderr")

    parser = argparse.ArgumentParser(
        prog="clientlens",
        description=(
            "Query a JSON client dataset.\n\n"
            "Quickstart:\n"
            "  clientlens generate -f clients.json     create a test dataset\n"
            "  clientlens search John -f clients.json  find clients by name"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ── search ────────────────────────────────────────────────────────────────
    p_search = sub.add_parser(
        "search", aliases=["s"], parents=[common],
        help="Find clients whose name partially matches QUERY",
    )
    p_search.add_argument("query", metavar="QUERY")
    p_search.set_defaults(func=cmd_search)

    # ── duplicates ────────────────────────────────────────────────────────────
    p_dup = sub.add_parser(
        "duplicates", aliases=["d"], parents=[common],
        help="Find clients that share an email address",
    )
    p_dup.set_defaults(func=cmd_duplicates)

    # ── filter ────────────────────────────────────────────────────────────────
    p_filter = sub.add_parser(
        "filter", aliases=["f"], parents=[common],
        help="Find clients rated at or above a threshold",
    )
    p_filter.add_argument("--rating", required=True, type=_rating_arg, metavar="N",
                          help="Minimum rating (inclusive)")
    p_filter.set_defaults(func=cmd_filter)

    # ── generate ──────────────────────────────────────────────────────────────
    p_gen = sub.add_parser(
        "generate", aliases=["g"], parents=[common],
        help="Generate a test dataset",
    )
    p_gen.add_argument("--size", type=int, metavar="N",
                       help="Number of clients to generate (default: 10000)")
    p_gen.add_argument("--seed", type=int, metavar="N", help="Random seed for reproducible data")
    p_gen.add_argument("--with-results", action="store_true",
                       help="Include result.rating and result.feedback")
    p_gen.add_argument("--force", action="store_true",
                       help="Overwrite existing files without confirmation")
    p_gen.set_defaults(func=cmd_generate)

    # ── version ───────────────────────────────────────────────────────────────
    p_ver = sub.add_parser("version", parents=[common], help="Show version number")
    p_ver.set_defaults(func=cmd_version)

    return parser


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] in ("-v", "--version"):
        argv[0] = "version"
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()

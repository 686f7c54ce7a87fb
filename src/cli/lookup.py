# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line front end for browsing the API declaration catalog."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ntdocs.catalog import CatalogError, load_bundled_catalog, load_catalog
from ntdocs.definition import pretty_definition, raw_definition
from ntdocs.model import Catalog, CategorizedEntry
from ntdocs.ranking import RankedEntry, rank, resolve_best
from ntdocs.suggest import suggest_names

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {":q", "quit"}

HELP_TEXT = "\n".join(
    [
        "Type text to filter entries via fuzzy matching.",
        "An empty line lists every entry sorted by name.",
        "#N opens the full definition of row N from the last table;",
        "a bare # opens the top row.",
        "? shows this help; :q or quit leaves.",
    ]
)

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "index": 1,
    "name": 6,
    "kind": 2,
    "category": 2,
}


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(
        prog="ntdocs",
        description="Fuzzy lookup of NT and Win32 API declarations.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        help="Entry name to look up; omit to start the interactive filter.",
    )
    parser.add_argument(
        "--raw",
        "-r",
        action="store_true",
        help="Print the reconstructed C declaration only.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print every entry name in catalog order and exit.",
    )
    parser.add_argument(
        "--catalog",
        required=False,
        help="Optional JSON catalog path used instead of the bundled one.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def run(
    argv: list[str],
    stdout: TextIO,
    stderr: TextIO,
    stdin: TextIO | None = None,
) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        stdin: Input stream for the interactive filter; defaults to ``sys.stdin``.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        catalog = (
            load_catalog(Path(args.catalog)) if args.catalog else load_bundled_catalog()
        )
    except CatalogError as exc:
        stderr.write(f"Failed to load catalog: {exc}\n")
        return 2

    if args.list:
        for entry in catalog:
            stdout.write(f"{entry.name}\n")
        return 0
    if args.query is not None:
        return _run_lookup(
            catalog=catalog, query=args.query, raw=args.raw, stdout=stdout, stderr=stderr
        )
    return _run_interactive(
        catalog=catalog, stdin=stdin if stdin is not None else sys.stdin, stdout=stdout
    )


def _run_lookup(
    catalog: Catalog, query: str, raw: bool, stdout: TextIO, stderr: TextIO
) -> int:
    """Resolve one query and print its definition.

    Args:
        catalog: Loaded catalog.
        query: Query text as typed.
        raw: Whether to print the raw declaration instead of the pretty one.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code; ``1`` when nothing matches.
    """
    entry = resolve_best(query, catalog)
    if entry is None:
        logger.warning(f"No entry matched (query={query!r} catalog_size={len(catalog)})")
        stderr.write(f"Error: no entry matching `{query}` found.\n")
        suggestions = suggest_names(query, catalog)
        if suggestions:
            stderr.write(f"Did you mean: {', '.join(suggestions)}?\n")
        return 1

    if raw:
        _write_text(raw_definition(entry, catalog), stdout=stdout)
    else:
        _write_text(pretty_definition(entry, catalog).rstrip("\n"), stdout=stdout)
    return 0


def _run_interactive(catalog: Catalog, stdin: TextIO, stdout: TextIO) -> int:
    """Run the line-based incremental filter until EOF or a quit command.

    Args:
        catalog: Loaded catalog.
        stdin: Input stream with one query or command per line.
        stdout: Standard output stream.

    Returns:
        Exit code.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print("Search (? for help, :q to quit)", markup=False, highlight=False)
    rows = rank("", catalog)
    _write_results(rows=rows, console=console)

    for line in stdin:
        text = line.strip()
        if text in QUIT_COMMANDS:
            break
        if text == "?":
            console.print(HELP_TEXT, markup=False, highlight=False)
            continue
        if text.startswith("#"):
            _open_row(text=text, rows=rows, catalog=catalog, console=console)
            continue
        rows = rank(text, catalog)
        logger.debug(f"Filter updated (query={text!r} results={len(rows)})")
        _write_results(rows=rows, console=console)
    return 0


def _open_row(
    text: str, rows: list[RankedEntry], catalog: Catalog, console: Console
) -> None:
    """Show the pretty and raw definitions for a ``#N`` row selection.

    A bare ``#`` selects the top row.
    """
    selection = text[1:].strip() or "1"
    if not selection.isdecimal() or not 1 <= int(selection) <= len(rows):
        console.print(
            f"No row {selection} in the current results.",
            markup=False,
            highlight=False,
        )
        return
    entry = rows[int(selection) - 1].entry
    _write_entry(entry=entry, catalog=catalog, console=console)


def _write_entry(entry: CategorizedEntry, catalog: Catalog, console: Console) -> None:
    console.rule(Text(entry.name), style=Style(color="cyan"), characters="-")
    _write_text(pretty_definition(entry, catalog).rstrip("\n"), stdout=console.file)
    console.rule("raw", style=Style(color="cyan"), characters="-")
    _write_text(raw_definition(entry, catalog), stdout=console.file)


def _write_results(rows: list[RankedEntry], console: Console) -> None:
    """Write ranked rows as a table.

    Args:
        rows: Ranked results, best first.
        console: Output console.
    """
    if not rows:
        console.print("No matching entries.", markup=False, highlight=False)
        return
    table = Table(show_header=True, expand=True)
    table.add_column("#", ratio=TABLE_COLUMN_RATIOS["index"], justify="right")
    table.add_column("name", ratio=TABLE_COLUMN_RATIOS["name"], overflow="fold")
    table.add_column("kind", ratio=TABLE_COLUMN_RATIOS["kind"], overflow="fold")
    table.add_column(
        "category", ratio=TABLE_COLUMN_RATIOS["category"], overflow="fold"
    )
    for index, row in enumerate(rows, start=1):
        table.add_row(
            str(index), Text(row.entry.name), row.entry.kind, row.entry.category
        )
    console.print(table)


def _write_text(text: str, stdout: TextIO) -> None:
    """Write definition text verbatim, without Rich markup, emoji or tab handling."""
    stdout.write(f"{text}\n")


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()

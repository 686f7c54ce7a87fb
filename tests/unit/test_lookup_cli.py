# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the lookup CLI."""

import io
import json
import re
from pathlib import Path

from cli.lookup import run


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def _write_catalog(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(
            [
                {
                    "category": "NT",
                    "type": "Typedef",
                    "name": "FOO",
                    "typedef": ["struct", "_FOO"],
                },
                {
                    "category": "NT",
                    "type": "Struct",
                    "name": "_FOO",
                    "fields": [{"name": "Size", "type": "ULONG"}],
                },
                {
                    "category": "NT",
                    "type": "Enum",
                    "name": "_E",
                    "fields": [{"name": "A", "init": 0}, {"name": "B"}],
                },
            ]
        ),
        encoding="utf-8",
    )


def test_cli_001_list_prints_names_in_catalog_order(bundled_catalog) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(["--list"], stdout=stdout, stderr=stderr)

    assert exit_code == 0
    expected = [entry.name for entry in bundled_catalog]
    assert stdout.getvalue().splitlines() == expected


def test_cli_002_lookup_prints_pretty_definition() -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(["NtClose"], stdout=stdout, stderr=stderr)

    assert exit_code == 0
    output = _strip_ansi(stdout.getvalue())
    assert output.startswith("Category: Nt")
    assert "Function `NtClose`" in output
    assert "Signature: NTSTATUS NtClose(HANDLE Handle);" in output
    assert stderr.getvalue() == ""


def test_cli_003_raw_flag_prints_declaration_only() -> None:
    for flag in ("--raw", "-r"):
        stdout = io.StringIO()
        stderr = io.StringIO()

        exit_code = run([flag, "MAXPATH"], stdout=stdout, stderr=stderr)

        assert exit_code == 0
        assert _strip_ansi(stdout.getvalue()).strip() == "#define MAX_PATH 260"


def test_cli_004_lookup_without_match_exits_with_error_and_suggestion(caplog) -> None:
    caplog.set_level("WARNING")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(["NtCloze"], stdout=stdout, stderr=stderr)

    assert exit_code == 1
    assert stdout.getvalue() == ""
    assert "Error: no entry matching `NtCloze` found." in stderr.getvalue()
    assert "Did you mean: NtClose" in stderr.getvalue()
    assert any("No entry matched" in rec.message for rec in caplog.records)


def test_cli_005_custom_catalog_resolves_struct_alias(tmp_path: Path) -> None:
    catalog_path = tmp_path / "catalog.json"
    _write_catalog(catalog_path)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--catalog", str(catalog_path), "--raw", "_FOO"], stdout=stdout, stderr=stderr
    )

    assert exit_code == 0
    assert _strip_ansi(stdout.getvalue()).strip() == "\n".join(
        ["typedef struct __FOO {", "    ULONG Size;", "} FOO, *PFOO;"]
    )


def test_cli_006_unreadable_catalog_exits_with_usage_error(tmp_path: Path) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--catalog", str(tmp_path / "missing.json"), "NtClose"],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Failed to load catalog" in stderr.getvalue()


def test_cli_007_invalid_arguments_return_usage_error() -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(["--unknown-flag"], stdout=stdout, stderr=stderr)

    assert exit_code == 2


def test_cli_008_interactive_filter_ranks_and_opens_rows() -> None:
    stdin = io.StringIO("NtClo\n#1\n:q\nNtCreate\n")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run([], stdout=stdout, stderr=stderr, stdin=stdin)

    assert exit_code == 0
    output = _strip_ansi(stdout.getvalue())
    assert "Search (? for help, :q to quit)" in output
    assert "_PROCESSINFOCLASS" in output
    assert "Signature: NTSTATUS NtClose(HANDLE Handle);" in output
    assert "NTSTATUS NtClose(HANDLE Handle);\n" in output
    assert "NtCreateFile(" not in output


def test_cli_009_interactive_filter_handles_help_misses_and_bad_rows(
    tmp_path: Path,
) -> None:
    catalog_path = tmp_path / "catalog.json"
    _write_catalog(catalog_path)
    stdin = io.StringIO("?\nqqq\n#1\n\n#7\n#2\n")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--catalog", str(catalog_path)], stdout=stdout, stderr=stderr, stdin=stdin
    )

    assert exit_code == 0
    output = _strip_ansi(stdout.getvalue())
    assert "#N opens the full definition" in output
    assert "No matching entries." in output
    assert "No row 1 in the current results." in output
    assert "No row 7 in the current results." in output
    assert "enum {\n    A = 0,\n    B,\n};" in output


def _write_verbatim_catalog(path: Path) -> None:
    path.write_text(
        json.dumps(
            [
                {
                    "category": "NT",
                    "type": "Define",
                    "name": "SMILE",
                    "value": ":smile:\tX",
                },
                {
                    "category": "NT",
                    "type": "Function",
                    "name": "NtGrin",
                    "return_type": "VOID",
                    "parameters": [],
                    "description": "[bold]Grins[/bold] :smile:\tloudly.",
                },
            ]
        ),
        encoding="utf-8",
    )


def test_cli_010_lookup_writes_definitions_verbatim(tmp_path: Path) -> None:
    catalog_path = tmp_path / "catalog.json"
    _write_verbatim_catalog(catalog_path)
    raw_stdout = io.StringIO()
    pretty_stdout = io.StringIO()

    raw_code = run(
        ["--catalog", str(catalog_path), "--raw", "SMILE"],
        stdout=raw_stdout,
        stderr=io.StringIO(),
    )
    pretty_code = run(
        ["--catalog", str(catalog_path), "NtGrin"],
        stdout=pretty_stdout,
        stderr=io.StringIO(),
    )

    assert raw_code == 0
    assert raw_stdout.getvalue() == "#define SMILE :smile:\tX\n"
    assert pretty_code == 0
    assert "Description:\n[bold]Grins[/bold] :smile:\tloudly.\n" in pretty_stdout.getvalue()


def test_cli_011_interactive_row_writes_definitions_verbatim(tmp_path: Path) -> None:
    catalog_path = tmp_path / "catalog.json"
    _write_verbatim_catalog(catalog_path)
    stdin = io.StringIO("SMILE\n#1\n")
    stdout = io.StringIO()

    exit_code = run(
        ["--catalog", str(catalog_path)], stdout=stdout, stderr=io.StringIO(), stdin=stdin
    )

    assert exit_code == 0
    assert "#define SMILE :smile:\tX\n" in stdout.getvalue()


def test_cli_012_interactive_rejects_non_decimal_row_numbers() -> None:
    stdin = io.StringIO("#²\n#x\n:q\n")
    stdout = io.StringIO()

    exit_code = run([], stdout=stdout, stderr=io.StringIO(), stdin=stdin)

    assert exit_code == 0
    output = _strip_ansi(stdout.getvalue())
    assert "No row ² in the current results." in output
    assert "No row x in the current results." in output


def test_cli_013_bare_hash_opens_top_row() -> None:
    stdin = io.StringIO("MAXPATH\n#\n")
    stdout = io.StringIO()

    exit_code = run([], stdout=stdout, stderr=io.StringIO(), stdin=stdin)

    assert exit_code == 0
    output = _strip_ansi(stdout.getvalue())
    assert "Define `MAX_PATH`" in output
    assert "#define MAX_PATH 260\n" in output

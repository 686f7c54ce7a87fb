# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Reconstruct C declarations from catalog entries."""

import logging
from collections.abc import Sequence
from typing import assert_never

from ntdocs.model import (
    CategorizedEntry,
    Define,
    Enum,
    EnumField,
    Function,
    Struct,
    StructField,
    Typedef,
    Union,
)

logger = logging.getLogger(__name__)

INDENT = "    "


def raw_definition(
    record: CategorizedEntry, catalog: Sequence[CategorizedEntry]
) -> str:
    """Build the terse declaration for one record.

    Args:
        record: Record to render.
        catalog: Full catalog, scanned for typedef aliases of structs.

    Returns:
        Declaration text without a trailing newline.
    """
    entry = record.entry
    match entry:
        case Function():
            return _function_signature(entry)
        case Define():
            return _define_line(entry)
        case Typedef():
            return _typedef_line(entry)
        case Struct():
            alias = resolve_struct_alias(entry.name, catalog)
            return (
                f"typedef struct _{entry.name} {{\n"
                f"{_field_lines(entry.fields)}"
                f"}} {alias}, *P{alias};"
            )
        case Union():
            return f"union {entry.name} {{\n{_field_lines(entry.fields)}}};"
        case Enum():
            return f"enum {{\n{_enum_lines(entry.fields)}}};"
        case _:
            assert_never(entry)


def pretty_definition(
    record: CategorizedEntry, catalog: Sequence[CategorizedEntry]
) -> str:
    """Build the annotated, human-facing rendering for one record.

    The first line names the category, followed by a title line for the entry
    kind and a kind-specific body. The result always ends with a newline.

    Args:
        record: Record to render.
        catalog: Full catalog, forwarded to ``raw_definition`` for structs.

    Returns:
        Multi-line description text.
    """
    header = f"Category: {record.category}\n\n"
    entry = record.entry
    match entry:
        case Function():
            body = (
                f"Function `{entry.name}`\n"
                f"Signature: {_function_signature(entry)}\n\n"
                f"Description:\n{entry.description}\n"
            )
        case Define():
            body = f"Define `{entry.name}`\n\n{_define_line(entry)}\n"
        case Typedef():
            body = f"Typedef `{entry.name}`\n\n{_typedef_line(entry)}\n"
        case Struct():
            body = f"Struct `{entry.name}`\n\n{raw_definition(record, catalog)}\n"
        case Union():
            body = f"Union `{entry.name}`\n\n{raw_definition(record, catalog)}\n"
        case Enum():
            body = f"Enum\n\n{raw_definition(record, catalog)}\n"
        case _:
            assert_never(entry)
    return header + body


def resolve_struct_alias(
    struct_name: str, catalog: Sequence[CategorizedEntry]
) -> str:
    """Find the public alias for a struct.

    The first typedef in catalog order with a token equal to, or ending with,
    the struct name wins. Without one, the struct name minus a single leading
    underscore is used.

    Args:
        struct_name: Raw struct name, usually ``_NAME``.
        catalog: Catalog to scan.

    Returns:
        Alias name used in the ``} ALIAS, *PALIAS;`` trailer.
    """
    for candidate in catalog:
        entry = candidate.entry
        if not isinstance(entry, Typedef):
            continue
        if any(token.endswith(struct_name) for token in entry.typedef):
            logger.debug(
                f"Resolved struct alias (struct={struct_name} alias={entry.name})"
            )
            return entry.name
    if struct_name.startswith("_"):
        return struct_name[1:]
    return struct_name


def _function_signature(entry: Function) -> str:
    return f"{entry.return_type} {entry.name}({', '.join(entry.parameters)});"


def _define_line(entry: Define) -> str:
    return f"#define {entry.name} {entry.value}"


def _typedef_line(entry: Typedef) -> str:
    return f"typedef {' '.join(entry.typedef)} {entry.name};"


def _field_lines(fields: Sequence[StructField]) -> str:
    return "".join(f"{INDENT}{field.type_} {field.name};\n" for field in fields)


def _enum_lines(fields: Sequence[EnumField]) -> str:
    lines = []
    for field in fields:
        if field.init is None:
            lines.append(f"{INDENT}{field.name},\n")
        else:
            lines.append(f"{INDENT}{field.name} = {field.init},\n")
    return "".join(lines)

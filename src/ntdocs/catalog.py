# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Catalog loading from JSON documents."""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from ntdocs.model import (
    Catalog,
    CategorizedEntry,
    Category,
    Define,
    Entry,
    Enum,
    EnumField,
    Function,
    Struct,
    StructField,
    Typedef,
    Union,
)

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "catalog.json"

CATEGORY_ALIASES: dict[str, Category] = {
    "nt": "Nt",
    "nt native api": "Nt",
    "win32": "Win32",
    "win32 api": "Win32",
}


class CatalogError(RuntimeError):
    """Represent a malformed or unreadable catalog."""


def load_bundled_catalog() -> Catalog:
    """Load the catalog shipped with the package.

    Returns:
        Immutable catalog.

    Raises:
        CatalogError: If the bundled document is malformed.
    """
    text = (
        resources.files("ntdocs")
        .joinpath("data", BUNDLED_CATALOG)
        .read_text(encoding="utf-8")
    )
    return _parse_text(text, source=f"ntdocs/data/{BUNDLED_CATALOG}")


def load_catalog(path: Path) -> Catalog:
    """Load a catalog from a JSON file.

    Args:
        path: JSON document holding an array of entries.

    Returns:
        Immutable catalog in document order.

    Raises:
        CatalogError: If the file cannot be read or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read catalog (path={path} error={exc})")
        raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc
    return _parse_text(text, source=str(path))


def parse_catalog(payload: Any) -> Catalog:
    """Convert decoded JSON into catalog records.

    Each item carries a ``category``, a ``type`` tag naming the entry kind and
    that kind's fields side by side, e.g.
    ``{"category": "NT", "type": "Define", "name": "X", "value": "1"}``.

    Args:
        payload: Decoded JSON value; must be a list of objects.

    Returns:
        Immutable catalog in document order.

    Raises:
        CatalogError: If any item is structurally invalid.
    """
    if not isinstance(payload, list):
        raise CatalogError("Catalog must be a JSON array of entries.")
    records: list[CategorizedEntry] = []
    for index, item in enumerate(payload):
        try:
            records.append(_parse_record(item))
        except CatalogError as exc:
            raise CatalogError(f"Entry {index}: {exc}") from exc
    return tuple(records)


def parse_category(value: str) -> Category:
    """Map a category spelling to its canonical value.

    Raises:
        CatalogError: If the spelling is unknown.
    """
    category = CATEGORY_ALIASES.get(value.strip().lower())
    if category is None:
        raise CatalogError(f"unknown category {value!r}")
    return category


def _parse_text(text: str, source: str) -> Catalog:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning(f"Catalog is not valid JSON (source={source} error={exc})")
        raise CatalogError(f"Invalid JSON in {source}: {exc}") from exc
    try:
        catalog = parse_catalog(payload)
    except CatalogError as exc:
        logger.warning(f"Catalog is malformed (source={source} error={exc})")
        raise
    logger.info(f"Catalog loaded (source={source} entries={len(catalog)})")
    return catalog


def _parse_record(item: Any) -> CategorizedEntry:
    if not isinstance(item, dict):
        raise CatalogError("entry must be an object")
    category = parse_category(_require_str(item, "category"))
    tag = _require_str(item, "type")
    entry: Entry
    if tag == "Function":
        entry = Function(
            name=_require_name(item),
            return_type=_require_str(item, "return_type"),
            parameters=_require_str_list(item, "parameters"),
            description=_require_str(item, "description"),
        )
    elif tag == "Typedef":
        entry = Typedef(
            name=_require_name(item), typedef=_require_str_list(item, "typedef")
        )
    elif tag == "Define":
        entry = Define(name=_require_name(item), value=_require_str(item, "value"))
    elif tag == "Struct":
        entry = Struct(name=_require_name(item), fields=_struct_fields(item))
    elif tag == "Union":
        entry = Union(name=_require_name(item), fields=_struct_fields(item))
    elif tag == "Enum":
        entry = Enum(name=_require_name(item), fields=_enum_fields(item))
    else:
        raise CatalogError(f"unknown entry type {tag!r}")
    return CategorizedEntry(category=category, entry=entry)


def _require_str(item: dict[str, Any], key: str) -> str:
    value = item.get(key)
    if not isinstance(value, str):
        raise CatalogError(f"field {key!r} must be a string")
    return value


def _require_name(item: dict[str, Any]) -> str:
    name = _require_str(item, "name")
    if not name:
        raise CatalogError("field 'name' must not be empty")
    return name


def _require_list(item: dict[str, Any], key: str) -> list[Any]:
    value = item.get(key)
    if not isinstance(value, list):
        raise CatalogError(f"field {key!r} must be a list")
    return value


def _require_str_list(item: dict[str, Any], key: str) -> tuple[str, ...]:
    values = _require_list(item, key)
    if not all(isinstance(value, str) for value in values):
        raise CatalogError(f"field {key!r} must contain only strings")
    return tuple(values)


def _struct_fields(item: dict[str, Any]) -> tuple[StructField, ...]:
    fields: list[StructField] = []
    for field in _require_list(item, "fields"):
        if not isinstance(field, dict):
            raise CatalogError("struct field must be an object")
        fields.append(
            StructField(name=_require_str(field, "name"), type_=_require_str(field, "type"))
        )
    return tuple(fields)


def _enum_fields(item: dict[str, Any]) -> tuple[EnumField, ...]:
    fields: list[EnumField] = []
    for field in _require_list(item, "fields"):
        if not isinstance(field, dict):
            raise CatalogError("enum member must be an object")
        init = field.get("init")
        if init is not None and (
            isinstance(init, bool) or not isinstance(init, int) or init < 0
        ):
            raise CatalogError(f"enum member init must be a non-negative integer, got {init!r}")
        fields.append(EnumField(name=_require_str(field, "name"), init=init))
    return tuple(fields)

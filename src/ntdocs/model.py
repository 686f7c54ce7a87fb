# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for catalog entries."""

from dataclasses import dataclass
from typing import Literal, assert_never

Category = Literal["Nt", "Win32"]


@dataclass(frozen=True)
class StructField:
    """Represent one struct or union field."""

    name: str
    type_: str


@dataclass(frozen=True)
class EnumField:
    """Represent one enum member with an optional explicit initializer."""

    name: str
    init: int | None = None


@dataclass(frozen=True)
class Function:
    """Represent a function declaration.

    Attributes:
        name: Function name.
        return_type: Return type text.
        parameters: Parameter type texts in declaration order.
        description: Free-text documentation.
    """

    name: str
    return_type: str
    parameters: tuple[str, ...]
    description: str


@dataclass(frozen=True)
class Typedef:
    """Represent a typedef as the ordered tokens of the aliased type."""

    name: str
    typedef: tuple[str, ...]


@dataclass(frozen=True)
class Define:
    """Represent a preprocessor define."""

    name: str
    value: str


@dataclass(frozen=True)
class Struct:
    name: str
    fields: tuple[StructField, ...]


@dataclass(frozen=True)
class Union:
    name: str
    fields: tuple[StructField, ...]


@dataclass(frozen=True)
class Enum:
    name: str
    fields: tuple[EnumField, ...]


Entry = Function | Typedef | Define | Struct | Union | Enum


@dataclass(frozen=True)
class CategorizedEntry:
    """Represent one catalog record.

    Attributes:
        category: API family the entry belongs to.
        entry: Kind-specific payload.
    """

    category: Category
    entry: Entry

    @property
    def name(self) -> str:
        """Return the identifying name regardless of the entry kind."""
        entry = self.entry
        match entry:
            case Function() | Typedef() | Define() | Struct() | Union() | Enum():
                return entry.name
            case _:
                assert_never(entry)

    @property
    def kind(self) -> str:
        """Return the entry kind label, e.g. ``Struct``."""
        return type(self.entry).__name__

    def __str__(self) -> str:
        from ntdocs.definition import pretty_definition

        return pretty_definition(self, ())


Catalog = tuple[CategorizedEntry, ...]

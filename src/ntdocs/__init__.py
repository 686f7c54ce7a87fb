# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the API declaration catalog."""

from ntdocs.catalog import CatalogError, load_bundled_catalog, load_catalog, parse_catalog
from ntdocs.definition import pretty_definition, raw_definition
from ntdocs.matcher import FuzzyMatcher
from ntdocs.model import Catalog, CategorizedEntry
from ntdocs.ranking import RankedEntry, fuzzy_score, fuzzy_score_ci, rank, resolve_best

__all__ = [
    "Catalog",
    "CatalogError",
    "CategorizedEntry",
    "FuzzyMatcher",
    "RankedEntry",
    "fuzzy_score",
    "fuzzy_score_ci",
    "load_bundled_catalog",
    "load_catalog",
    "parse_catalog",
    "pretty_definition",
    "rank",
    "raw_definition",
    "resolve_best",
]

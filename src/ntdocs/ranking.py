# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Fuzzy lookup and ranking over the catalog."""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import assert_never

from ntdocs.matcher import FuzzyMatcher
from ntdocs.model import (
    CategorizedEntry,
    Define,
    Enum,
    Function,
    Struct,
    Typedef,
    Union,
)

logger = logging.getLogger(__name__)

RANK_LIMIT = 50
NAME_MATCH_BONUS = 1000

_DEFAULT_MATCHER = FuzzyMatcher()


@dataclass(frozen=True)
class RankedEntry:
    """Represent one ranked result row.

    Attributes:
        entry: Matched catalog record.
        score: Relevance score; ``0`` when the query is empty.
    """

    entry: CategorizedEntry
    score: int


def resolve_best(
    query: str,
    catalog: Sequence[CategorizedEntry],
    matcher: FuzzyMatcher = _DEFAULT_MATCHER,
) -> CategorizedEntry | None:
    """Resolve a typed query to the single best matching record by name.

    The case-sensitive pass runs first; the lowercase pass runs only when the
    first one matches nothing. Ties go to the earliest record in the catalog.

    Args:
        query: Query text as typed.
        catalog: Records to search.
        matcher: Fuzzy scorer.

    Returns:
        Best matching record, or ``None`` when nothing matches.
    """
    scored = _score_names(query, catalog, matcher)
    if not scored:
        scored = _score_names(query, catalog, matcher, fold=str.lower)
    if not scored:
        logger.debug(f"No catalog entry matched (query={query!r})")
        return None
    best = max(scored, key=lambda item: item.score)
    logger.debug(
        f"Resolved query (query={query!r} name={best.entry.name} score={best.score})"
    )
    return best.entry


def rank(
    query: str,
    catalog: Sequence[CategorizedEntry],
    matcher: FuzzyMatcher = _DEFAULT_MATCHER,
    limit: int = RANK_LIMIT,
) -> list[RankedEntry]:
    """Rank catalog records against a query for incremental filtering.

    An empty query lists every record sorted by name. Otherwise records are
    scored on their names case-sensitively; only when none match at all is the
    whole catalog rescored case-insensitively. Results are ordered by score,
    highest first, with catalog order kept among equal scores.

    Args:
        query: Current filter text.
        catalog: Records to search.
        matcher: Fuzzy scorer.
        limit: Maximum number of rows returned.

    Returns:
        At most ``limit`` ranked rows.
    """
    if not query:
        rows = [
            RankedEntry(entry=entry, score=0)
            for entry in sorted(catalog, key=lambda entry: entry.name)
        ]
        return rows[:limit]

    rows = _score_names(query, catalog, matcher)
    if not rows:
        rows = _score_names(query, catalog, matcher, fold=str.lower)
    rows.sort(key=lambda row: row.score, reverse=True)
    return rows[:limit]


def fuzzy_score(
    record: CategorizedEntry,
    query: str,
    matcher: FuzzyMatcher = _DEFAULT_MATCHER,
) -> int | None:
    """Score one record against a query, falling back to its body text.

    A name hit is boosted by ``NAME_MATCH_BONUS`` so it always outranks a hit
    found only in the description, value, or field names.

    Args:
        record: Record to score.
        query: Query text.
        matcher: Fuzzy scorer.

    Returns:
        Best score, or ``None`` when neither the name nor the body matches.
    """
    score = matcher.fuzzy_match(record.name, query)
    if score is not None:
        return score + NAME_MATCH_BONUS
    return _best_score(
        (matcher.fuzzy_match(text, query) for text in secondary_texts(record))
    )


def fuzzy_score_ci(
    record: CategorizedEntry,
    query: str,
    matcher: FuzzyMatcher = _DEFAULT_MATCHER,
) -> int | None:
    """Case-insensitive variant of ``fuzzy_score``.

    Unlike ``fuzzy_score``, a name hit is returned without the name bonus.
    """
    folded = query.lower()
    score = matcher.fuzzy_match(record.name.lower(), folded)
    if score is not None:
        return score
    return _best_score(
        (matcher.fuzzy_match(text.lower(), folded) for text in secondary_texts(record))
    )


def secondary_texts(record: CategorizedEntry) -> list[str]:
    """Return the body texts searched when the name does not match."""
    entry = record.entry
    match entry:
        case Define():
            return [entry.value]
        case Function():
            return [entry.description]
        case Struct() | Union() | Enum():
            return [field.name for field in entry.fields]
        case Typedef():
            return []
        case _:
            assert_never(entry)


def _score_names(
    query: str,
    catalog: Iterable[CategorizedEntry],
    matcher: FuzzyMatcher,
    fold: Callable[[str], str] | None = None,
) -> list[RankedEntry]:
    if fold is not None:
        query = fold(query)
    rows: list[RankedEntry] = []
    for entry in catalog:
        name = fold(entry.name) if fold is not None else entry.name
        score = matcher.fuzzy_match(name, query)
        if score is not None:
            rows.append(RankedEntry(entry=entry, score=score))
    return rows


def _best_score(scores: Iterable[int | None]) -> int | None:
    best: int | None = None
    for score in scores:
        if score is not None and (best is None or score > best):
            best = score
    return best

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Close-name suggestions for queries that match nothing."""

import logging
from collections.abc import Sequence

import Levenshtein

from ntdocs.model import CategorizedEntry

logger = logging.getLogger(__name__)


def suggest_names(
    query: str,
    catalog: Sequence[CategorizedEntry],
    limit: int = 3,
    cutoff: float = 0.6,
) -> list[str]:
    """Suggest catalog names that are spelled close to ``query``.

    Args:
        query: Query that produced no fuzzy match.
        catalog: Records to draw names from.
        limit: Maximum number of suggestions.
        cutoff: Inclusive minimum similarity ratio in [0.0, 1.0].

    Returns:
        Distinct names, most similar first, catalog order among equals.

    Raises:
        ValueError: If ``cutoff`` is outside [0.0, 1.0] or ``limit`` is negative.
    """
    if cutoff < 0.0 or cutoff > 1.0:
        raise ValueError("cutoff must be between 0.0 and 1.0.")
    if limit < 0:
        raise ValueError("limit must be >= 0")
    folded = query.lower()
    seen: set[str] = set()
    scored: list[tuple[float, str]] = []
    for entry in catalog:
        if entry.name in seen:
            continue
        seen.add(entry.name)
        ratio = float(Levenshtein.ratio(folded, entry.name.lower()))
        if ratio >= cutoff:
            scored.append((ratio, entry.name))
    scored.sort(key=lambda item: item[0], reverse=True)
    logger.debug(f"Computed suggestions (query={query!r} candidates={len(scored)})")
    return [name for _, name in scored[:limit]]

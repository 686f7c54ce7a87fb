# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Subsequence fuzzy scoring in the fzf/skim family."""

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_CHAR_NON_WORD = 0
_CHAR_LOWER = 1
_CHAR_UPPER = 2
_CHAR_LETTER = 3
_CHAR_NUMBER = 4

_UNREACHABLE = -(10**9)


class FuzzyMatcher:
    """Score how well a pattern matches a choice as an ordered subsequence.

    Every pattern character must occur in the choice, in order. Matches that
    start words (after punctuation, at camel-case humps, at digit runs) and
    matches that continue a contiguous run score higher; gaps between matched
    characters cost a start penalty plus a smaller per-character extension.
    Comparison is case-sensitive; lowercase both sides to ignore case.
    """

    def fuzzy_match(self, choice: str, pattern: str) -> int | None:
        """Score ``pattern`` against ``choice``.

        Args:
            choice: Candidate text.
            pattern: Query text.

        Returns:
            Score where higher is better, ``0`` for an empty pattern, or
            ``None`` when the pattern is not a subsequence of the choice.
        """
        if not pattern:
            return 0
        if not _is_subsequence(pattern, choice):
            return None

        bonuses = _position_bonuses(choice)
        width = len(choice)
        previous = [_UNREACHABLE] * width
        for column, char in enumerate(choice):
            if char == pattern[0]:
                previous[column] = (
                    SCORE_MATCH + bonuses[column] * BONUS_FIRST_CHAR_MULTIPLIER
                )

        for pattern_char in pattern[1:]:
            current = [_UNREACHABLE] * width
            # Best score of a match ending at least two columns back, with the
            # gap penalty up to the current column already applied.
            gapped = _UNREACHABLE
            for column, char in enumerate(choice):
                if column >= 2:
                    gapped = max(
                        gapped + SCORE_GAP_EXTENSION,
                        previous[column - 2] + SCORE_GAP_START,
                    )
                if char != pattern_char:
                    continue
                best = _UNREACHABLE
                if column >= 1 and previous[column - 1] > _UNREACHABLE // 2:
                    best = (
                        previous[column - 1]
                        + SCORE_MATCH
                        + max(bonuses[column], BONUS_CONSECUTIVE)
                    )
                if gapped > _UNREACHABLE // 2:
                    best = max(best, gapped + SCORE_MATCH + bonuses[column])
                current[column] = best
            previous = current

        score = max(previous)
        if score <= _UNREACHABLE // 2:
            return None
        return score


def _is_subsequence(pattern: str, choice: str) -> bool:
    remaining = iter(choice)
    return all(char in remaining for char in pattern)


def _char_class(char: str) -> int:
    if char.islower():
        return _CHAR_LOWER
    if char.isupper():
        return _CHAR_UPPER
    if char.isdigit():
        return _CHAR_NUMBER
    if char.isalpha():
        return _CHAR_LETTER
    return _CHAR_NON_WORD


def _position_bonuses(choice: str) -> list[int]:
    """Compute the per-position match bonus for ``choice``."""
    bonuses: list[int] = []
    previous_class = _CHAR_NON_WORD
    for char in choice:
        current_class = _char_class(char)
        if current_class == _CHAR_NON_WORD:
            bonus = BONUS_NON_WORD
        elif previous_class == _CHAR_NON_WORD:
            bonus = BONUS_BOUNDARY
        elif (previous_class == _CHAR_LOWER and current_class == _CHAR_UPPER) or (
            previous_class != _CHAR_NUMBER and current_class == _CHAR_NUMBER
        ):
            bonus = BONUS_CAMEL123
        else:
            bonus = 0
        bonuses.append(bonus)
        previous_class = current_class
    return bonuses

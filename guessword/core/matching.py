from __future__ import annotations

from .distance import levenshtein_distance

# Words longer than this may absorb two typos, but only in proportion.
LONG_WORD = 8
MAX_EDIT_RATIO = 0.25


def max_edits_for(length: int) -> int:
    """
    Number of typos tolerated for a target word of the given length.

    Tolerance table
    ---------------
    - 0-3 letters : 0 (short words must be spelled exactly)
    - 4-5 letters : 1
    - 6-8 letters : 1
    - 9+ letters  : 2 (also capped by MAX_EDIT_RATIO, see `is_fuzzy_match`)
    """
    if length <= 3:
        return 0
    if length <= 5:
        return 1
    if length <= LONG_WORD:
        return 1
    return 2


def is_fuzzy_match(guess: str, target: str) -> bool:
    """
    Return True if `guess` is close enough to `target` to count as correct.

    Both inputs are case-folded here, so callers may pass raw casing.
    An exact match is always accepted.
    """
    g = (guess or "").lower()
    t = (target or "").lower()
    if g == t:
        return True

    distance = levenshtein_distance(g, t)
    length = len(t)
    if distance > max_edits_for(length):
        return False
    if length > LONG_WORD and distance / length > MAX_EDIT_RATIO:
        return False
    return True

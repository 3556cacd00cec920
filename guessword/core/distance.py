"""
Edit distance between two strings.

Insertions, deletions, substitutions and swaps of two neighbouring characters
each cost 1 (optimal string alignment), so "recieve" is one edit away from
"receive".

The strings are compared exactly as given; callers fold case first.
"""

from __future__ import annotations

from typing import List


def levenshtein_distance(a: str, b: str) -> int:
    """
    Compute the edit distance between `a` and `b`.

    Examples
    --------
      levenshtein_distance("kitten", "sitting") -> 3
      levenshtein_distance("abcd", "acbd")      -> 1   (adjacent swap)
    """
    if a == b:
        return 0

    m, n = len(a), len(b)
    if m == 0:
        return n
    if n == 0:
        return m

    # dp[i][j] = distance between a[:i] and b[:j]
    dp: List[List[int]] = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,         # deletion
                dp[i][j - 1] + 1,         # insertion
                dp[i - 1][j - 1] + cost,  # substitution
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                dp[i][j] = min(dp[i][j], dp[i - 2][j - 2] + 1)  # transposition

    return dp[m][n]

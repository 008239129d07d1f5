from __future__ import annotations
from typing import Optional


def first_diff_pos(a: str, b: str) -> int:
    """
    Index of the first position where a and b differ case-insensitively, or
    the length of the shorter string when one is a prefix of the other.
    Characters are folded one at a time so the result always indexes the
    original strings.
    """
    n = min(len(a), len(b))
    for i in range(n):
        if a[i] != b[i] and a[i].lower() != b[i].lower():
            return i
    return n


def levenshtein(s1: str, s2: str) -> int:
    """Unit-cost Levenshtein distance, case-sensitive."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row
    return previous_row[-1]


def weighted_edit_distance(a: str, b: str, *, substitution: int = 1, indel: int = 2,
                           limit: Optional[int] = None) -> Optional[int]:
    """
    Levenshtein distance with separate substitution and insertion/deletion
    costs. With `limit`, returns None as soon as the distance is known to
    exceed it.
    """
    if limit is not None and abs(len(a) - len(b)) * indel > limit:
        return None

    previous_row = [j * indel for j in range(len(b) + 1)]
    for i, ca in enumerate(a, start=1):
        current_row = [i * indel]
        for j, cb in enumerate(b, start=1):
            cost = previous_row[j - 1] + (0 if ca == cb else substitution)
            cost = min(cost, previous_row[j] + indel, current_row[j - 1] + indel)
            current_row.append(cost)
        if limit is not None and min(current_row) > limit:
            return None
        previous_row = current_row

    dist = previous_row[-1]
    if limit is not None and dist > limit:
        return None
    return dist

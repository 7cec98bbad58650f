"""Edit-distance based string similarity."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(first: str, second: str) -> int:
    """Minimum number of single-character edits turning ``first`` into ``second``."""
    return Levenshtein.distance(first, second)


def calculate_similarity(first: str | None, second: str | None) -> float:
    """Similarity in [0, 1], case-insensitive.

    ``1 - distance / max(len)``; identical strings (two empty strings included)
    score 1.0 and non-string input scores 0.0.
    """
    if not isinstance(first, str) or not isinstance(second, str):
        return 0.0

    a = first.lower()
    b = second.lower()
    if a == b:
        return 1.0

    return Levenshtein.normalized_similarity(a, b)

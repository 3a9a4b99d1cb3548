"""Fuzzy drink-name matching using Levenshtein edit distance.

- distance: case-insensitive edit distance (insert/delete/substitute = 1)
- similarity: 1 - distance / longer length, in [0, 1]
- rank: substring matches first (score 1.0), then fuzzy matches above a threshold
"""

from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

DEFAULT_THRESHOLD = 0.4


def distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings, ignoring case."""
    a = a.lower()
    b = b.lower()
    # Keep the row over the shorter string.
    if len(b) > len(a):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current[j] = previous[j - 1]
            else:
                current[j] = min(previous[j - 1], previous[j], current[j - 1]) + 1
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Similarity score from 0.0 (nothing in common) to 1.0 (identical)."""
    # Lengths of the lowercased forms; some characters grow when lowercased.
    a = a.lower()
    b = b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - distance(a, b) / longest


def _score(query: str, name: str) -> float:
    if query.lower() in name.lower():
        return 1.0
    return similarity(query, name)


def rank(
    query: str,
    items: Sequence[T],
    name_of: Callable[[T], str],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[T]:
    """Return items matching query, best first. Empty query returns everything."""
    if not query:
        return list(items)

    scored: List[Tuple[float, T]] = [(_score(query, name_of(item)), item) for item in items]
    # sorted() is stable, so equal scores keep input order.
    kept = sorted((pair for pair in scored if pair[0] >= threshold), key=lambda pair: pair[0], reverse=True)
    return [item for _, item in kept]

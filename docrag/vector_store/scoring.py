"""
Brute-force cosine scoring shared by every search path.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from docrag.errors import DimensionMismatchError, InvalidInputError
from docrag.vector_store.base import SearchResult, StoredEntry


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (|a| * |b|). A zero norm makes the denominator 1.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for av, bv in zip(a, b):
        dot += av * bv
        norm_a += av * av
        norm_b += bv * bv

    denom = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denom == 0:
        denom = 1.0
    return dot / denom


def rank_entries(query: Sequence[float], entries: Iterable[StoredEntry], k: int) -> List[SearchResult]:
    """Score every entry against ``query`` and keep the best ``k``, ties in insertion order."""
    if k <= 0:
        raise InvalidInputError(f"k must be positive, got {k}")

    scored = [
        SearchResult(text=entry.text, score=cosine_similarity(query, entry.embedding), metadata=entry.metadata)
        for entry in entries
    ]
    scored.sort(key=lambda r: r.score, reverse=True)
    return scored[:k]


__all__ = ["cosine_similarity", "rank_entries"]

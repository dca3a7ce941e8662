"""
Text chunking utilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from docrag.errors import InvalidInputError


@dataclass(frozen=True)
class Chunk:
    text: str
    index: int


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return " ".join((text or "").split())


def chunk_text(text: str, size: int, overlap: int) -> List[Chunk]:
    """
    Slide a ``size``-character window over the normalized text, stepping back
    ``overlap`` characters between windows.
    """
    if size <= 0:
        raise InvalidInputError(f"chunk size must be positive, got {size}")
    if overlap < 0:
        raise InvalidInputError(f"chunk overlap must be non-negative, got {overlap}")
    if overlap >= size:
        raise InvalidInputError(f"chunk overlap must be less than size, got overlap={overlap} size={size}")

    clean = normalize_text(text)
    chunks: List[Chunk] = []
    length = len(clean)
    start = 0

    while start < length:
        end = min(start + size, length)
        chunks.append(Chunk(text=clean[start:end], index=len(chunks)))
        if end == length:
            break
        start = max(end - overlap, 0)

    return chunks


__all__ = ["Chunk", "chunk_text", "normalize_text"]

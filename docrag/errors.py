"""
Exception hierarchy for the retrieval core.
"""

from __future__ import annotations


class DocRagError(Exception):
    """Base exception for all docrag errors."""


class InvalidInputError(DocRagError, ValueError):
    """
    Malformed input to a core operation.

    Raised for mismatched array lengths, non-positive ``k`` and invalid
    chunk size/overlap. Always correctable by the caller, never retried.
    """


class LengthMismatchError(InvalidInputError):
    """Chunks, vectors and metadata passed to ``add`` differ in length."""

    def __init__(self, chunks: int, vectors: int, metas: int):
        super().__init__(
            f"Array length mismatch: chunks={chunks}, vectors={vectors}, metas={metas}"
        )
        self.chunks = chunks
        self.vectors = vectors
        self.metas = metas


class DimensionMismatchError(InvalidInputError):
    """Query and stored vector have different dimensionality."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Vector dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class CorruptStateError(DocRagError):
    """Persisted collection exists but cannot be parsed into the expected shape."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ProviderError(DocRagError):
    """
    The embeddings or chat provider failed or returned an unusable response.

    Raised after the bounded retry for embeddings, immediately for chat.
    """

    def __init__(self, message: str, provider: str | None = None, attempts: int = 1):
        super().__init__(message)
        self.provider = provider
        self.attempts = attempts


class StorageError(DocRagError):
    """Durable storage failure (permissions, disk full) on load, save or delete."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


__all__ = [
    "DocRagError",
    "InvalidInputError",
    "LengthMismatchError",
    "DimensionMismatchError",
    "CorruptStateError",
    "ProviderError",
    "StorageError",
]

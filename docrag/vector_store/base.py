"""
Vector store interface and shared types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOURCE_NAME = "document"
DEFAULT_DOC_TYPE = "other"


class Metadata(BaseModel):
    """Provenance of a stored chunk. Serialised with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    source: str
    chunk_index: int = Field(alias="chunkIndex")
    doc_type: Optional[str] = Field(default=None, alias="docType")


class StoredEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(min_length=1)
    embedding: List[float]
    metadata: Metadata


class StoreDocument(BaseModel):
    """On-disk shape of one namespace collection."""

    documents: List[StoredEntry]


@dataclass(frozen=True)
class SearchResult:
    text: str
    score: float
    metadata: Metadata


@dataclass(frozen=True)
class DocumentFilter:
    name: str
    doc_type: Optional[str] = None


@dataclass(frozen=True)
class DocInfo:
    name: str
    doc_type: str
    chunks: int


def infer_doc_type(name: str) -> str:
    lowered = (name or "").lower()
    if lowered.endswith(".pdf"):
        return "pdf"
    if lowered.endswith(".md"):
        return "md"
    if lowered.endswith(".txt"):
        return "txt"
    return DEFAULT_DOC_TYPE


class VectorStore(Protocol):
    namespace: str

    def load(self) -> None:
        ...

    def add(self, chunks: Sequence[str], vectors: Sequence[Sequence[float]], metas: Sequence[Metadata]) -> int:
        ...

    def search(self, query: Sequence[float], k: int) -> List[SearchResult]:
        ...

    def search_filtered(self, query: Sequence[float], k: int, filter: DocumentFilter) -> List[SearchResult]:
        ...

    def list_documents(self) -> List[DocInfo]:
        ...

    def delete_all(self) -> bool:
        ...


__all__ = [
    "DEFAULT_DOC_TYPE",
    "DEFAULT_SOURCE_NAME",
    "DocInfo",
    "DocumentFilter",
    "Metadata",
    "SearchResult",
    "StoreDocument",
    "StoredEntry",
    "VectorStore",
    "infer_doc_type",
]

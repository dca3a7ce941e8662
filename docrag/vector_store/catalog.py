"""
Read-only view of which documents a namespace holds.
"""

from __future__ import annotations

from typing import List, Optional

from docrag.vector_store.base import DocInfo, VectorStore


class DocumentCatalog:
    def __init__(self, store: VectorStore) -> None:
        self.store = store

    def list(self) -> List[DocInfo]:
        return self.store.list_documents()

    def total_chunks(self) -> int:
        return sum(doc.chunks for doc in self.list())

    def find(self, name: str, doc_type: Optional[str] = None) -> List[DocInfo]:
        """Entries for ``name`` (case-insensitive), optionally narrowed to one doc type."""
        name = name.lower()
        return [
            doc
            for doc in self.list()
            if doc.name.lower() == name and (doc_type is None or doc.doc_type.lower() == doc_type.lower())
        ]


__all__ = ["DocumentCatalog"]

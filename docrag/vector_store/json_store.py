"""
JSON-file VectorStore: one file per namespace, linear-scan cosine search.
"""

from __future__ import annotations

import logging
import math
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from pydantic import ValidationError

from docrag.config import RAGConfig
from docrag.errors import CorruptStateError, InvalidInputError, LengthMismatchError, StorageError
from docrag.vector_store.base import (
    DEFAULT_DOC_TYPE,
    DEFAULT_SOURCE_NAME,
    DocInfo,
    DocumentFilter,
    Metadata,
    SearchResult,
    StoreDocument,
    StoredEntry,
)
from docrag.vector_store.scoring import rank_entries

STORE_FILE_TEMPLATE = "vector_store-{namespace}.json"

logger = logging.getLogger(__name__)

_write_locks: Dict[str, threading.Lock] = {}
_write_locks_guard = threading.Lock()


def store_path(data_dir: str | Path, namespace: str) -> Path:
    return Path(data_dir) / STORE_FILE_TEMPLATE.format(namespace=namespace)


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _write_locks_guard:
        lock = _write_locks.get(key)
        if lock is None:
            lock = _write_locks[key] = threading.Lock()
        return lock


class JsonVectorStore:
    """
    Flat collection of StoredEntry persisted as ``{"documents": [...]}``.

    Every write re-reads the file inside a lock shared by all instances that
    point at the same path, then replaces the file atomically. Readers work
    on the snapshot taken by the last ``load``.
    """

    def __init__(self, namespace: str, data_dir: str | Path = "./data", path: str | Path | None = None) -> None:
        if not namespace:
            raise InvalidInputError("namespace must not be empty")
        self.namespace = namespace
        self.path = Path(path) if path is not None else store_path(data_dir, namespace)
        self._documents: List[StoredEntry] = []
        self._loaded = False

    @classmethod
    def from_config(cls, config: RAGConfig) -> "JsonVectorStore":
        return cls(namespace=config.namespace, data_dir=config.data_dir)

    @property
    def documents(self) -> Tuple[StoredEntry, ...]:
        self._ensure_loaded()
        return tuple(self._documents)

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._documents)

    # --- Persistence ---
    def load(self) -> None:
        with _lock_for(self.path):
            documents = self._read()
            if documents is None:
                documents = []
                self._write(documents)
                logger.info("Initialised empty vector store", extra={"path": str(self.path)})
        self._documents = documents
        self._loaded = True
        logger.info(
            "Vector store loaded",
            extra={"namespace": self.namespace, "entries": len(documents), "path": str(self.path)},
        )

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _read(self) -> Optional[List[StoredEntry]]:
        """Return persisted entries, or None when nothing is persisted."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Cannot read vector store: {exc}", path=str(self.path)) from exc

        if not raw.strip():
            return []

        try:
            payload = StoreDocument.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Vector store file is corrupt", extra={"path": str(self.path), "errors": exc.error_count()})
            raise CorruptStateError(f"Corrupt vector store at {self.path}: {exc}", path=str(self.path)) from exc
        return list(payload.documents)

    def _write(self, documents: List[StoredEntry]) -> None:
        payload = StoreDocument(documents=documents).model_dump_json(by_alias=True, exclude_none=True, indent=2)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write vector store: {exc}", path=str(self.path)) from exc

    # --- Mutations ---
    def add(
        self,
        chunks: Sequence[str],
        vectors: Sequence[Sequence[float]],
        metas: Sequence[Metadata],
    ) -> int:
        if not (len(chunks) == len(vectors) == len(metas)):
            raise LengthMismatchError(len(chunks), len(vectors), len(metas))
        if any(not text for text in chunks):
            raise InvalidInputError("Chunk text must not be empty")
        if any(not math.isfinite(x) for vector in vectors for x in vector):
            raise InvalidInputError("Embedding components must be finite numbers")

        new_entries = [
            StoredEntry(
                id=str(uuid4()),
                text=text,
                embedding=[float(x) for x in vector],
                metadata=meta,
            )
            for text, vector, meta in zip(chunks, vectors, metas)
        ]
        if not new_entries:
            return 0

        with _lock_for(self.path):
            documents = self._read() or []
            documents.extend(new_entries)
            self._write(documents)
        self._documents = documents
        self._loaded = True

        logger.info(
            "Added entries to vector store",
            extra={"namespace": self.namespace, "count": len(new_entries), "total": len(documents)},
        )
        return len(new_entries)

    def delete_all(self) -> bool:
        """Remove the persisted file. Returns False when there was nothing to remove."""
        removed = False
        with _lock_for(self.path):
            try:
                self.path.unlink()
            except FileNotFoundError:
                logger.info("Nothing to delete", extra={"path": str(self.path)})
            except OSError as exc:
                raise StorageError(f"Cannot delete vector store: {exc}", path=str(self.path)) from exc
            else:
                logger.info("Vector store deleted", extra={"namespace": self.namespace, "path": str(self.path)})
                removed = True
        self._documents = []
        self._loaded = False
        return removed

    # --- Queries ---
    def search(self, query: Sequence[float], k: int) -> List[SearchResult]:
        self._ensure_loaded()
        return rank_entries(query, self._documents, k)

    def search_filtered(self, query: Sequence[float], k: int, filter: DocumentFilter) -> List[SearchResult]:
        self._ensure_loaded()
        name = (filter.name or "").lower()
        doc_type = filter.doc_type.lower() if filter.doc_type else None

        candidates = [
            entry
            for entry in self._documents
            if entry.metadata.source.lower() == name
            and (doc_type is None or (entry.metadata.doc_type or "").lower() == doc_type)
        ]
        return rank_entries(query, candidates, k)

    def list_documents(self) -> List[DocInfo]:
        self._ensure_loaded()
        counts: Dict[Tuple[str, str], int] = {}
        for entry in self._documents:
            key = (entry.metadata.source or DEFAULT_SOURCE_NAME, entry.metadata.doc_type or DEFAULT_DOC_TYPE)
            counts[key] = counts.get(key, 0) + 1
        return [DocInfo(name=name, doc_type=doc_type, chunks=chunks) for (name, doc_type), chunks in counts.items()]


__all__ = ["JsonVectorStore", "STORE_FILE_TEMPLATE", "store_path"]

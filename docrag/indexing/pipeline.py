"""
Ingestion pipeline: chunk extracted text, embed, and append into the vector store.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from tqdm import tqdm

from docrag.config import RAGConfig
from docrag.embeddings.client import EmbeddingsClient
from docrag.indexing.chunker import chunk_text
from docrag.vector_store.base import Metadata, VectorStore, infer_doc_type

logger = logging.getLogger(__name__)


@dataclass
class FileSummary:
    name: str
    doc_type: str
    chunks: int
    chars: int


@dataclass
class IngestSummary:
    namespace: str
    files: int
    chunks: int
    stored: int
    elapsed_sec: float
    file_summaries: List[FileSummary] = field(default_factory=list)


class IngestService:
    """Chunk, embed and add, as a single batch per call."""

    def __init__(
        self,
        vector_store: VectorStore,
        embeddings_client: EmbeddingsClient,
        config: RAGConfig,
        show_progress: bool = False,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.config = config
        self.show_progress = show_progress
        self.logger = logger_ or logging.getLogger(__name__)

    def ingest(self, documents: Iterable[Tuple[str, str]]) -> IngestSummary:
        """
        Index ``(name, text)`` pairs. Either every chunk of the call is stored or none is.
        """
        started = time.time()
        texts: List[str] = []
        metas: List[Metadata] = []
        summaries: List[FileSummary] = []

        for name, text in documents:
            name = name or "document"
            doc_type = infer_doc_type(name)
            chunks = chunk_text(text, self.config.chunk_size, self.config.chunk_overlap)
            for chunk in chunks:
                texts.append(chunk.text)
                metas.append(Metadata(source=name, chunk_index=chunk.index, doc_type=doc_type))
            summaries.append(FileSummary(name=name, doc_type=doc_type, chunks=len(chunks), chars=len(text or "")))

        stored = 0
        if texts:
            vectors = self._embed_all(texts)
            stored = self.vector_store.add(texts, vectors, metas)
        else:
            self.logger.warning("No text extracted; nothing to index", extra={"files": len(summaries)})

        elapsed = time.time() - started
        self.logger.info(
            "Ingest completed",
            extra={
                "namespace": self.config.namespace,
                "files": len(summaries),
                "chunks": len(texts),
                "stored": stored,
                "elapsed_sec": round(elapsed, 2),
            },
        )
        return IngestSummary(
            namespace=self.config.namespace,
            files=len(summaries),
            chunks=len(texts),
            stored=stored,
            elapsed_sec=elapsed,
            file_summaries=summaries,
        )

    def _embed_all(self, texts: List[str]) -> List[List[float]]:
        batch_size = self.config.embed_batch_size
        vectors: List[List[float]] = []
        for i in tqdm(
            range(0, len(texts), batch_size),
            desc="Embedding",
            unit="batch",
            disable=not self.show_progress,
        ):
            vectors.extend(self.embeddings_client.embed(texts[i : i + batch_size]))
        return vectors


__all__ = ["FileSummary", "IngestService", "IngestSummary"]

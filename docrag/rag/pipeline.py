"""
RAG pipeline: normalize question, retrieve context, ask the chat model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from docrag.config import RAGConfig
from docrag.embeddings.client import EmbeddingsClient
from docrag.errors import InvalidInputError
from docrag.indexing.chunker import normalize_text
from docrag.llm.client import LLMClient
from docrag.vector_store.base import DocumentFilter, SearchResult, VectorStore

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"
SYSTEM_PROMPT = (
    "You are a helpful assistant. Answer only from the provided context; "
    "if the answer is not there, say that it is not in the documents."
)


@dataclass
class AskResult:
    answer: str
    contexts: List[SearchResult]
    namespace: str


class RAGService:
    def __init__(
        self,
        vector_store: VectorStore,
        embeddings_client: EmbeddingsClient,
        llm_client: LLMClient,
        config: RAGConfig,
        logger_: logging.Logger | None = None,
    ) -> None:
        self.vector_store = vector_store
        self.embeddings_client = embeddings_client
        self.llm_client = llm_client
        self.config = config
        self.logger = logger_ or logging.getLogger(__name__)

    # --- Public API ---
    def ask(self, question: str, top_k: int | None = None, doc: DocumentFilter | None = None) -> AskResult:
        question = normalize_text(question)
        if not question:
            raise InvalidInputError("Question must not be empty")

        hits = self.retrieve(question, top_k=top_k if top_k is not None else self.config.top_k, doc=doc)
        answer = self.llm_client.complete(self.build_messages(question, hits))
        return AskResult(answer=answer, contexts=hits, namespace=self.config.namespace)

    # --- Steps ---
    def retrieve(self, question: str, top_k: int, doc: DocumentFilter | None = None) -> List[SearchResult]:
        query = self.embeddings_client.embed_text(question)
        if doc is not None and doc.name:
            hits = self.vector_store.search_filtered(query, top_k, doc)
        else:
            hits = self.vector_store.search(query, top_k)

        self.logger.info(
            "Retrieved chunks",
            extra={
                "namespace": self.config.namespace,
                "requested": top_k,
                "returned": len(hits),
                "top_score": round(hits[0].score, 3) if hits else None,
                "doc": doc.name if doc else None,
            },
        )
        return hits

    @staticmethod
    def build_context(hits: Sequence[SearchResult]) -> str:
        return CONTEXT_SEPARATOR.join(
            f"[[{idx} | {hit.metadata.source} #{hit.metadata.chunk_index}]]\n{hit.text}"
            for idx, hit in enumerate(hits, start=1)
        )

    def build_messages(self, question: str, hits: Sequence[SearchResult]) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"Question: {question}\n\nContext:\n{self.build_context(hits)}"},
        ]


__all__ = ["AskResult", "RAGService", "SYSTEM_PROMPT"]

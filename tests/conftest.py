"""
Shared test fixtures and configuration for pytest.
"""

from typing import Dict, List, Sequence

import pytest

from docrag.config import RAGConfig
from docrag.errors import ProviderError
from docrag.vector_store.base import Metadata
from docrag.vector_store.json_store import JsonVectorStore

VOCABULARY = ("apple", "banana", "cherry")


class FakeEmbeddingsClient:
    """Counts vocabulary words, giving deterministic 3-dimensional vectors."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[List[str]] = []

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        if self.fail:
            raise ProviderError("embedding backend down", provider="fake", attempts=2)
        return [self._vector(t) for t in texts]

    def embed_text(self, text: str) -> List[float]:
        return self.embed([text])[0]

    @staticmethod
    def _vector(text: str) -> List[float]:
        lowered = text.lower()
        return [float(lowered.count(word)) for word in VOCABULARY]


class FakeLLMClient:
    def __init__(self, answer: str = "stub answer"):
        self.answer = answer
        self.messages: List[List[Dict[str, str]]] = []

    def complete(self, messages: List[Dict[str, str]]) -> str:
        self.messages.append(messages)
        return self.answer


@pytest.fixture
def rag_config(tmp_path) -> RAGConfig:
    return RAGConfig(namespace="test", data_dir=str(tmp_path), chunk_size=40, chunk_overlap=10, top_k=3)


@pytest.fixture
def store(rag_config) -> JsonVectorStore:
    store = JsonVectorStore.from_config(rag_config)
    store.load()
    return store


@pytest.fixture
def fake_embeddings() -> FakeEmbeddingsClient:
    return FakeEmbeddingsClient()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def two_chunk_store(store) -> JsonVectorStore:
    """``a.txt`` with embeddings [1, 0] and [0, 1]."""
    store.add(
        ["first chunk", "second chunk"],
        [[1.0, 0.0], [0.0, 1.0]],
        [
            Metadata(source="a.txt", chunk_index=0, doc_type="txt"),
            Metadata(source="a.txt", chunk_index=1, doc_type="txt"),
        ],
    )
    return store


@pytest.fixture
def failing_embeddings() -> FakeEmbeddingsClient:
    return FakeEmbeddingsClient(fail=True)

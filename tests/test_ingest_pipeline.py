"""
Unit tests for the ingestion service.
"""

import pytest

from docrag.config import RAGConfig
from docrag.errors import ProviderError
from docrag.indexing.pipeline import IngestService
from docrag.vector_store.base import DocInfo
from docrag.vector_store.json_store import JsonVectorStore


class TestIngestService:
    def test_chunks_embeds_and_stores(self, rag_config, store, fake_embeddings):
        service = IngestService(store, fake_embeddings, rag_config)
        text = "apple " * 20  # 119 normalized chars -> 4 windows of 40 with overlap 10

        summary = service.ingest([("fruit.txt", text), ("empty.md", "   ")])

        assert summary.namespace == "test"
        assert summary.files == 2
        assert summary.chunks == summary.stored == 4
        assert [(f.name, f.doc_type, f.chunks) for f in summary.file_summaries] == [
            ("fruit.txt", "txt", 4),
            ("empty.md", "md", 0),
        ]
        metas = [e.metadata for e in store.documents]
        assert [m.chunk_index for m in metas] == [0, 1, 2, 3]
        assert {m.source for m in metas} == {"fruit.txt"}

    def test_persisted_for_fresh_store(self, rag_config, store, fake_embeddings):
        IngestService(store, fake_embeddings, rag_config).ingest([("a.pdf", "banana split"), ("b", "cherry")])

        reopened = JsonVectorStore.from_config(rag_config)
        assert set(reopened.list_documents()) == {
            DocInfo(name="a.pdf", doc_type="pdf", chunks=1),
            DocInfo(name="b", doc_type="other", chunks=1),
        }

    def test_embeds_in_configured_batches(self, tmp_path, fake_embeddings):
        config = RAGConfig(namespace="test", data_dir=str(tmp_path), chunk_size=5, chunk_overlap=0, embed_batch_size=3)
        store = JsonVectorStore.from_config(config)
        IngestService(store, fake_embeddings, config).ingest([("a.txt", "x" * 35)])

        assert [len(call) for call in fake_embeddings.calls] == [3, 3, 1]
        assert len(store) == 7

    def test_no_text_skips_embedding(self, rag_config, store, fake_embeddings):
        summary = IngestService(store, fake_embeddings, rag_config).ingest([("scan.pdf", "")])
        assert summary.stored == 0
        assert fake_embeddings.calls == []

    def test_provider_failure_persists_nothing(self, rag_config, store, failing_embeddings):
        service = IngestService(store, failing_embeddings, rag_config)
        with pytest.raises(ProviderError):
            service.ingest([("a.txt", "apple banana cherry")])

        assert len(JsonVectorStore.from_config(rag_config)) == 0

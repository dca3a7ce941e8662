from docrag.vector_store import DocumentCatalog, get_catalog
from docrag.vector_store.base import DocInfo, Metadata


class TestDocumentCatalog:
    def test_empty(self, store):
        catalog = DocumentCatalog(store)
        assert catalog.list() == []
        assert catalog.total_chunks() == 0

    def test_reflects_store(self, rag_config, store):
        store.add(
            ["a", "b", "c"],
            [[1.0], [1.0], [1.0]],
            [
                Metadata(source="Guide.pdf", chunk_index=0, doc_type="pdf"),
                Metadata(source="Guide.pdf", chunk_index=1, doc_type="pdf"),
                Metadata(source="notes.md", chunk_index=0, doc_type="md"),
            ],
        )
        catalog = get_catalog(rag_config)

        assert catalog.total_chunks() == 3
        assert catalog.find("guide.pdf") == [DocInfo(name="Guide.pdf", doc_type="pdf", chunks=2)]
        assert catalog.find("guide.pdf", doc_type="md") == []
        assert catalog.find("missing") == []

    def test_tracks_delete(self, two_chunk_store):
        catalog = DocumentCatalog(two_chunk_store)
        assert catalog.total_chunks() == 2
        two_chunk_store.delete_all()
        assert catalog.list() == []

"""
Vector store abstractions and factories.
"""

from docrag.config import RAGConfig
from docrag.vector_store.catalog import DocumentCatalog
from docrag.vector_store.json_store import JsonVectorStore


def get_vector_store(config: RAGConfig) -> JsonVectorStore:
    """
    Open the store for the config's namespace. Stores are cheap; open one per request.
    """
    return JsonVectorStore.from_config(config)


def get_catalog(config: RAGConfig) -> DocumentCatalog:
    return DocumentCatalog(get_vector_store(config))


__all__ = ["DocumentCatalog", "JsonVectorStore", "get_catalog", "get_vector_store"]

"""
CLI for searching the vector store with a text query.

Example:
    python -m scripts.search_query --query "retention policy" --top-k 5 --doc handbook.pdf
"""

from __future__ import annotations

import argparse

from docrag.config import RAGConfig
from docrag.embeddings.client import get_embeddings_client
from docrag.vector_store import get_vector_store
from docrag.vector_store.base import DocumentFilter


def main() -> None:
    parser = argparse.ArgumentParser(description="Search indexed chunks by text query.")
    parser.add_argument("--query", "-q", required=True, help="Query text")
    parser.add_argument("--top-k", type=int, default=None, help="How many results to return")
    parser.add_argument("--doc", default=None, help="Restrict to one document name")
    parser.add_argument("--doc-type", default=None, help="Restrict to one doc type (with --doc)")
    parser.add_argument("--provider", default=None, help="openai or ollama")
    parser.add_argument("--snippet", type=int, default=300, help="Snippet length")
    args = parser.parse_args()

    config = RAGConfig.from_settings(namespace=args.provider)
    store = get_vector_store(config)
    query = get_embeddings_client(config.namespace).embed_text(args.query)
    top_k = args.top_k if args.top_k is not None else config.top_k

    if args.doc:
        results = store.search_filtered(query, top_k, DocumentFilter(name=args.doc, doc_type=args.doc_type))
    else:
        results = store.search(query, top_k)

    if not results:
        print("No results")
        return

    for idx, hit in enumerate(results, start=1):
        snippet = hit.text[: args.snippet]
        print(f"\n#{idx} score={hit.score:.4f} source={hit.metadata.source} chunk={hit.metadata.chunk_index}")
        print("text:", snippet + ("..." if len(hit.text) > args.snippet else ""))


if __name__ == "__main__":
    main()

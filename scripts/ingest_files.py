"""
CLI for indexing local files into a provider's vector store.

Example:
    python -m scripts.ingest_files notes.md report.pdf --provider ollama
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docrag.config import RAGConfig, setup_logging
from docrag.embeddings.client import get_embeddings_client
from docrag.errors import DocRagError
from docrag.indexing.extractors import file_to_text
from docrag.indexing.pipeline import IngestService
from docrag.vector_store import get_vector_store


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index local PDF/TXT/MD files.")
    parser.add_argument("paths", nargs="+", type=Path, help="Files to index.")
    parser.add_argument("--provider", default=None, help="openai or ollama (defaults to RAG_PROVIDER).")
    return parser.parse_args()


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args()

    try:
        config = RAGConfig.from_settings(namespace=args.provider)
        documents = [(path.name, file_to_text(path.name, path.read_bytes())) for path in args.paths]
        service = IngestService(
            get_vector_store(config),
            get_embeddings_client(config.namespace),
            config,
            show_progress=True,
            logger_=logger,
        )
        summary = service.ingest(documents)
    except (DocRagError, OSError):
        logger.exception("Ingest failed")
        sys.exit(1)

    for item in summary.file_summaries:
        print(f"{item.name} [{item.doc_type}]: {item.chunks} chunks, {item.chars} chars")
    print(f"Stored {summary.stored} chunks in namespace '{summary.namespace}' (elapsed {summary.elapsed_sec:.2f}s)")


if __name__ == "__main__":
    main()

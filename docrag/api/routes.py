from __future__ import annotations

import logging
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from docrag.config import RAGConfig, settings
from docrag.embeddings.client import EmbeddingsClient, get_embeddings_client
from docrag.indexing.extractors import file_to_text
from docrag.indexing.pipeline import IngestService
from docrag.llm.client import LLMClient, get_llm_client
from docrag.models.schemas import (
    AskRequest,
    AskResponse,
    ContextHit,
    DeleteResponse,
    DocInfoOut,
    DocsResponse,
    FileSummaryOut,
    IngestResponse,
)
from docrag.rag.pipeline import RAGService
from docrag.vector_store import get_catalog, get_vector_store
from docrag.vector_store.base import DocumentFilter

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

ConfigFactory = Callable[[Optional[str]], RAGConfig]
EmbeddingsFactory = Callable[[str], EmbeddingsClient]
LLMFactory = Callable[[str], LLMClient]

NO_TEXT_MESSAGE = "No text was extracted. Check that the files are not scanned PDFs or empty."


def config_factory() -> ConfigFactory:
    return lambda provider: RAGConfig.from_settings(settings, namespace=provider)


def embeddings_factory() -> EmbeddingsFactory:
    return get_embeddings_client


def llm_factory() -> LLMFactory:
    return get_llm_client


@router.post("/ingest", response_model=IngestResponse, summary="Index uploaded documents")
def ingest(
    files: Optional[List[UploadFile]] = File(default=None),
    file: Optional[UploadFile] = File(default=None),
    provider: Optional[str] = Form(default=None),
    make_config: ConfigFactory = Depends(config_factory),
    make_embeddings: EmbeddingsFactory = Depends(embeddings_factory),
) -> IngestResponse:
    uploads = list(files or [])
    if file is not None and not uploads:
        uploads.append(file)
    if not uploads:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='No files provided. Use field "files" or "file".',
        )

    config = make_config(provider)
    documents = []
    for upload in uploads:
        name = upload.filename or "document"
        documents.append((name, file_to_text(name, upload.file.read(), upload.content_type)))

    store = get_vector_store(config)
    logger.info("Ingest request", extra={"files": len(documents), "namespace": config.namespace})
    service = IngestService(store, make_embeddings(config.namespace), config)
    summary = service.ingest(documents)

    return IngestResponse(
        files_processed=summary.files,
        chunks=summary.chunks,
        stored=summary.stored,
        provider=config.namespace,
        ref=str(store.path) if summary.stored else None,
        files=[
            FileSummaryOut(name=f.name, doc_type=f.doc_type, chunks=f.chunks, chars=f.chars)
            for f in summary.file_summaries
        ],
        message=None if summary.chunks else NO_TEXT_MESSAGE,
    )


@router.post("/ask", response_model=AskResponse, summary="Ask a question about indexed documents")
def ask(
    request: AskRequest,
    make_config: ConfigFactory = Depends(config_factory),
    make_embeddings: EmbeddingsFactory = Depends(embeddings_factory),
    make_llm: LLMFactory = Depends(llm_factory),
) -> AskResponse:
    question = (request.question or "").strip()
    if not question:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question must not be empty")

    config = make_config(request.provider)
    store = get_vector_store(config)
    logger.info("Ask request", extra={"len": len(question), "namespace": config.namespace})
    service = RAGService(
        vector_store=store,
        embeddings_client=make_embeddings(config.namespace),
        llm_client=make_llm(config.namespace),
        config=config,
    )
    doc = DocumentFilter(name=request.doc.name, doc_type=request.doc.doc_type) if request.doc else None
    result = service.ask(question, top_k=request.top_k, doc=doc)

    return AskResponse(
        answer=result.answer,
        contexts=[ContextHit.from_result(hit) for hit in result.contexts],
        provider=result.namespace,
        ref=str(store.path),
    )


@router.get("/docs", response_model=DocsResponse, summary="List indexed documents")
def list_docs(
    provider: Optional[str] = Query(default=None),
    make_config: ConfigFactory = Depends(config_factory),
) -> DocsResponse:
    config = make_config(provider)
    catalog = get_catalog(config)
    return DocsResponse(
        docs=[DocInfoOut.from_info(info) for info in catalog.list()],
        provider=config.namespace,
        ref=str(catalog.store.path),
    )


@router.delete("/docs", response_model=DeleteResponse, summary="Delete every indexed document of a provider")
def delete_docs(
    provider: Optional[str] = Query(default=None),
    make_config: ConfigFactory = Depends(config_factory),
) -> DeleteResponse:
    config = make_config(provider)
    store = get_vector_store(config)
    existed = store.delete_all()
    logger.info("Delete request", extra={"namespace": config.namespace, "existed": existed})
    return DeleteResponse(deleted=existed, provider=config.namespace, ref=str(store.path))


__all__ = ["router", "config_factory", "embeddings_factory", "llm_factory"]

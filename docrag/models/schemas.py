from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from docrag.vector_store.base import DocInfo, SearchResult


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Ingest
class FileSummaryOut(CamelModel):
    name: str
    doc_type: str = Field(alias="docType")
    chunks: int = Field(..., ge=0)
    chars: int = Field(..., ge=0)


class IngestResponse(CamelModel):
    files_processed: int = Field(..., ge=0, alias="filesProcessed")
    chunks: int = Field(..., ge=0)
    stored: int = Field(..., ge=0)
    provider: str
    ref: Optional[str] = None
    files: List[FileSummaryOut]
    message: Optional[str] = None


# Ask
class DocSelector(CamelModel):
    name: str = Field(..., min_length=1)
    doc_type: Optional[str] = Field(default=None, alias="docType")


class AskRequest(CamelModel):
    question: str = Field(..., min_length=1, description="User question")
    top_k: Optional[int] = Field(default=None, gt=0, alias="topK")
    provider: Optional[str] = None
    doc: Optional[DocSelector] = None


class MetadataOut(CamelModel):
    source: str
    chunk_index: int = Field(alias="chunkIndex")
    doc_type: Optional[str] = Field(default=None, alias="docType")


class ContextHit(CamelModel):
    text: str
    score: float
    metadata: MetadataOut

    @classmethod
    def from_result(cls, result: SearchResult) -> "ContextHit":
        meta = result.metadata
        return cls(
            text=result.text,
            score=result.score,
            metadata=MetadataOut(source=meta.source, chunk_index=meta.chunk_index, doc_type=meta.doc_type),
        )


class AskResponse(CamelModel):
    answer: str
    contexts: List[ContextHit]
    provider: str
    ref: str


# Catalog
class DocInfoOut(CamelModel):
    name: str
    doc_type: str = Field(alias="docType")
    chunks: int = Field(..., ge=0)

    @classmethod
    def from_info(cls, info: DocInfo) -> "DocInfoOut":
        return cls(name=info.name, doc_type=info.doc_type, chunks=info.chunks)


class DocsResponse(CamelModel):
    docs: List[DocInfoOut]
    provider: str
    ref: str


class DeleteResponse(CamelModel):
    deleted: bool
    provider: str
    ref: str


__all__ = [
    "AskRequest",
    "AskResponse",
    "ContextHit",
    "DeleteResponse",
    "DocInfoOut",
    "DocSelector",
    "DocsResponse",
    "FileSummaryOut",
    "IngestResponse",
    "MetadataOut",
]

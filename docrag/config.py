"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docrag.errors import InvalidInputError

ProviderName = Literal["openai", "ollama"]
PROVIDERS = ("openai", "ollama")


class Settings(BaseSettings):
    """Centralised application settings."""

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rag_provider: ProviderName = Field(default="openai", alias="RAG_PROVIDER")

    openai_api_key: SecretStr | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_chat_model: str = Field(default="gpt-4o-mini", alias="OPENAI_CHAT_MODEL")
    openai_embed_model: str = Field(default="text-embedding-3-small", alias="OPENAI_EMBED_MODEL")

    ollama_base_url: str = Field(default="http://localhost:11434", alias="OLLAMA_BASE_URL")
    ollama_chat_model: str = Field(default="llama3.1", alias="OLLAMA_CHAT_MODEL")
    ollama_embed_model: str = Field(default="embeddinggemma:300m", alias="OLLAMA_EMBED_MODEL")

    chunk_size: int = Field(default=1000, alias="RAG_CHUNK_SIZE")
    chunk_overlap: int = Field(default=150, alias="RAG_CHUNK_OVERLAP")
    top_k: int = Field(default=5, alias="RAG_TOP_K")

    data_dir: str = Field(default="./data", alias="RAG_DATA_DIR")

    embed_retries: int = Field(default=1, ge=0, alias="RAG_EMBED_RETRIES")
    embed_batch_size: int = Field(default=64, gt=0, alias="RAG_EMBED_BATCH_SIZE")

    @field_validator("rag_provider", mode="before")
    @classmethod
    def _lowercase_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


settings = Settings()


@dataclass(frozen=True)
class RAGConfig:
    """Immutable retrieval parameters handed to services at construction time."""

    namespace: str
    data_dir: str = "./data"
    chunk_size: int = 1000
    chunk_overlap: int = 150
    top_k: int = 5
    embed_retries: int = 1
    embed_batch_size: int = 64

    def __post_init__(self) -> None:
        if not self.namespace:
            raise InvalidInputError("namespace must not be empty")
        if self.chunk_size <= 0:
            raise InvalidInputError(f"chunk_size must be positive, got {self.chunk_size}")
        if not 0 <= self.chunk_overlap < self.chunk_size:
            raise InvalidInputError(
                f"chunk_overlap must be in [0, chunk_size), got {self.chunk_overlap} for size {self.chunk_size}"
            )
        if self.top_k <= 0:
            raise InvalidInputError(f"top_k must be positive, got {self.top_k}")

    @classmethod
    def from_settings(cls, source: Settings | None = None, namespace: str | None = None) -> "RAGConfig":
        source = source or settings
        return cls(
            namespace=resolve_provider(namespace, source),
            data_dir=source.data_dir,
            chunk_size=source.chunk_size,
            chunk_overlap=source.chunk_overlap,
            top_k=source.top_k,
            embed_retries=source.embed_retries,
            embed_batch_size=source.embed_batch_size,
        )


def resolve_provider(raw: str | None, source: Settings | None = None) -> str:
    """
    Map a user-supplied provider name onto a known provider, falling back to the configured one.
    """
    value = (raw or "").strip().lower()
    if not value:
        return (source or settings).rag_provider
    if value not in PROVIDERS:
        raise InvalidInputError(f"Unsupported provider: {raw}")
    return value


def setup_logging() -> logging.Logger:
    """
    Configure base logging for the app.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
    return logging.getLogger("docrag")


def public_settings() -> Dict[str, Any]:
    """
    Return settings without secrets for safe logging/inspection.
    """
    return settings.model_dump(
        exclude={"openai_api_key"},
        exclude_none=True,
    )


__all__ = [
    "PROVIDERS",
    "ProviderName",
    "RAGConfig",
    "Settings",
    "settings",
    "resolve_provider",
    "setup_logging",
    "public_settings",
]

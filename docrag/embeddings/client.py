"""
OpenAI-compatible embeddings client for the OpenAI and Ollama providers.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from openai import OpenAI, OpenAIError

from docrag.config import Settings, resolve_provider, settings
from docrag.errors import ProviderError

DEFAULT_EMBED_BATCH_SIZE = 64
DEFAULT_EMBED_RETRIES = 1

logger = logging.getLogger(__name__)


def ollama_openai_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/v1"


class EmbeddingsClient:
    """
    Turns texts into vectors. Each request gets ``1 + retries`` attempts before
    a ProviderError is raised.
    """

    def __init__(
        self,
        model: str,
        provider: str = "openai",
        batch_size: int = DEFAULT_EMBED_BATCH_SIZE,
        retries: int = DEFAULT_EMBED_RETRIES,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.provider = provider
        self.batch_size = batch_size
        self.retries = retries
        self.client = client or OpenAI(max_retries=0)

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        # Some OpenAI-compatible Ollama servers reject list input.
        step = 1 if self.provider == "ollama" else self.batch_size
        embeddings: List[List[float]] = []
        for i in range(0, len(texts), step):
            batch = list(texts[i : i + step])
            embeddings.extend(self._embed_batch(batch))
        return embeddings

    def embed_text(self, text: str) -> List[float]:
        return self.embed([text])[0]

    def _embed_batch(self, batch: List[str]) -> List[List[float]]:
        attempts = self.retries + 1
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                payload = batch[0] if len(batch) == 1 and self.provider == "ollama" else batch
                response = self.client.embeddings.create(model=self.model, input=payload)
                vectors = [list(item.embedding or []) for item in (response.data or [])]
                if len(vectors) != len(batch) or any(not v for v in vectors):
                    raise ProviderError(
                        f"Empty or incomplete embeddings response ({len(vectors)} vectors for {len(batch)} inputs)",
                        provider=self.provider,
                    )
                return vectors
            except (OpenAIError, ProviderError) as exc:
                last_error = exc
                logger.warning(
                    "Embedding request failed",
                    extra={"provider": self.provider, "attempt": attempt, "attempts": attempts, "error": str(exc)},
                )

        raise ProviderError(
            f"{self.provider} embeddings error: {last_error}",
            provider=self.provider,
            attempts=attempts,
        ) from last_error


def get_embeddings_client(provider: str | None = None, source: Settings | None = None) -> EmbeddingsClient:
    source = source or settings
    name = resolve_provider(provider, source)
    if name == "ollama":
        client = OpenAI(base_url=ollama_openai_url(source.ollama_base_url), api_key="ollama", max_retries=0)
        model = source.ollama_embed_model
    else:
        api_key = source.openai_api_key.get_secret_value() if source.openai_api_key else None
        try:
            client = OpenAI(api_key=api_key, max_retries=0)
        except OpenAIError as exc:
            raise ProviderError(f"openai client unavailable: {exc}", provider=name) from exc
        model = source.openai_embed_model
    return EmbeddingsClient(
        model=model,
        provider=name,
        batch_size=source.embed_batch_size,
        retries=source.embed_retries,
        client=client,
    )


__all__ = ["EmbeddingsClient", "get_embeddings_client", "ollama_openai_url"]

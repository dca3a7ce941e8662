"""
OpenAI-compatible chat client for the OpenAI and Ollama providers.
"""

from __future__ import annotations

from typing import Any, Dict, List

from openai import OpenAI, OpenAIError

from docrag.config import Settings, resolve_provider, settings
from docrag.embeddings.client import ollama_openai_url
from docrag.errors import ProviderError

DEFAULT_TEMPERATURE = 0.1


class LLMClient:
    def __init__(
        self,
        model: str,
        provider: str = "openai",
        temperature: float = DEFAULT_TEMPERATURE,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.provider = provider
        self.temperature = temperature
        self.client = client or OpenAI(max_retries=0)

    def complete(self, messages: List[Dict[str, Any]]) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=messages,
            )
        except OpenAIError as exc:
            raise ProviderError(f"{self.provider} chat error: {exc}", provider=self.provider) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


def get_llm_client(provider: str | None = None, source: Settings | None = None) -> LLMClient:
    source = source or settings
    name = resolve_provider(provider, source)
    if name == "ollama":
        client = OpenAI(base_url=ollama_openai_url(source.ollama_base_url), api_key="ollama", max_retries=0)
        return LLMClient(model=source.ollama_chat_model, provider=name, client=client)

    api_key = source.openai_api_key.get_secret_value() if source.openai_api_key else None
    try:
        client = OpenAI(api_key=api_key, max_retries=0)
    except OpenAIError as exc:
        raise ProviderError(f"openai client unavailable: {exc}", provider=name) from exc
    return LLMClient(model=source.openai_chat_model, provider=name, client=client)


__all__ = ["LLMClient", "get_llm_client", "DEFAULT_TEMPERATURE"]

"""
Lemon - LLM Client
Thin wrapper around the OpenAI chat completions API
"""

import logging
from typing import Any, Optional

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletionMessage

from ..config import get_settings
from ..errors import (
    LemonError,
    UnknownUpstreamError,
    UpstreamAuthError,
    UpstreamRateLimited,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


def map_upstream_error(exc: Exception) -> LemonError:
    """Translate an OpenAI SDK exception into a Lemon error."""
    if isinstance(exc, LemonError):
        return exc
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return UpstreamAuthError()
    if isinstance(exc, openai.RateLimitError):
        return UpstreamRateLimited()
    if isinstance(exc, (openai.APIConnectionError, openai.InternalServerError)):
        # APITimeoutError is an APIConnectionError
        return UpstreamUnavailable()
    return UnknownUpstreamError()


class LLMClient:
    """Sends chat completion requests and normalizes their failures"""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self.settings = get_settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.llm_api_key:
                logger.error("LLM API key is not set")
                raise UpstreamAuthError()
            self._client = AsyncOpenAI(
                api_key=self.settings.llm_api_key,
                base_url=self.settings.llm_base_url,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        tools: Optional[list[dict[str, Any]]] = None,
    ) -> ChatCompletionMessage:
        """
        Run one chat completion and return the assistant message.

        Raises:
            LemonError: Any upstream failure, mapped to its error type
        """
        model = model or self.settings.llm_model
        params: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if tools:
            params["tools"] = tools

        client = self.client
        logger.info(f"Calling LLM with model {model}")
        try:
            response = await client.chat.completions.create(**params)
        except openai.OpenAIError as e:
            logger.error(f"LLM request error: {type(e).__name__}: {e}")
            raise map_upstream_error(e) from e

        if not response.choices:
            logger.error("LLM returned no choices")
            raise UnknownUpstreamError()

        return response.choices[0].message

    async def complete_text(self, messages: list[dict[str, Any]], **kwargs: Any) -> str:
        """Run a completion and return its trimmed text content."""
        message = await self.complete(messages, **kwargs)
        return (message.content or "").strip()


# Singleton instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client instance"""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client

"""
Text completion client with retry logic.

Wraps an OpenAI-compatible chat completion endpoint. Returns raw text only;
callers own all parsing. Failures surface as ModelUnavailable or
ModelTimeout so every call site can fall back without a model.
"""

import asyncio
import logging
from typing import List, Dict, Optional, Sequence

import openai
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_not_exception_type,
)

from triptailor.shared.errors import ModelUnavailable, ModelTimeout
from triptailor.shared.settings import Settings


logger = logging.getLogger(__name__)

# Transient failures worth another attempt. Timeouts are excluded: a hung
# endpoint is not retried, the caller falls back instead.
RETRYABLE_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


def build_messages(
    system_prompts: Sequence[str],
    user_message: str,
) -> List[Dict[str, str]]:
    """Ordered system prompts followed by the user message."""
    messages = [{"role": "system", "content": prompt} for prompt in system_prompts]
    messages.append({"role": "user", "content": user_message})
    return messages


class TextCompletionClient:
    """
    Async chat completion client.

    Attributes:
        model: Model identifier
        temperature: Sampling temperature
        max_tokens: Completion token cap
        max_retries: Attempts for transient failures (tenacity)
        retry_min_wait: Minimum backoff in seconds
        retry_max_wait: Maximum backoff in seconds
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4.1-mini",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        max_retries: int = 3,
        retry_min_wait: float = 2,
        retry_max_wait: float = 10,
    ):
        self._client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait

    async def complete(self, system_prompts: Sequence[str], user_message: str) -> str:
        """
        Run one chat completion and return the raw text.

        Args:
            system_prompts: System prompts, sent in order
            user_message: The user turn

        Returns:
            The assistant's response content, stripped.

        Raises:
            ModelTimeout: If the call exceeds the client timeout
            ModelUnavailable: On connection errors, non-2xx status or empty output
        """
        messages = build_messages(system_prompts, user_message)

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(
                    multiplier=1, min=self.retry_min_wait, max=self.retry_max_wait
                ),
                retry=(
                    retry_if_exception_type(RETRYABLE_ERRORS)
                    & retry_if_not_exception_type(openai.APITimeoutError)
                ),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.chat.completions.create(
                        model=self.model,
                        messages=messages,
                        temperature=self.temperature,
                        max_tokens=self.max_tokens,
                    )
        except openai.APITimeoutError as e:
            raise ModelTimeout(f"Completion timed out: {e}") from e
        except openai.APIError as e:
            raise ModelUnavailable(f"Completion failed: {e}") from e

        if not response.choices:
            raise ModelUnavailable("Completion returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise ModelUnavailable("Completion returned empty content")

        logger.debug(
            f"Completion ok | model={self.model}, chars={len(content)}, "
            f"prompts={len(system_prompts)}"
        )
        return content.strip()

    async def probe(self) -> bool:
        """Cheap live check that the endpoint accepts our credentials."""
        try:
            await self._client.models.list()
            return True
        except openai.APIError as e:
            logger.warning(f"LLM validation failed: {e}")
            return False


async def complete_with_deadline(
    llm: TextCompletionClient,
    system_prompts: Sequence[str],
    user_message: str,
    timeout: Optional[float],
) -> str:
    """
    Run llm.complete under a hard deadline covering every retry attempt.

    Raises:
        ModelTimeout: If the deadline passes first
        ModelUnavailable: As raised by complete()
    """
    if not timeout:
        return await llm.complete(system_prompts, user_message)
    try:
        return await asyncio.wait_for(
            llm.complete(system_prompts, user_message), timeout=timeout
        )
    except asyncio.TimeoutError as e:
        raise ModelTimeout(f"Completion exceeded {timeout}s deadline") from e


def create_text_completion_client(
    settings: Settings,
    max_retries: int = 3,
) -> Optional[TextCompletionClient]:
    """
    Build a client from settings.

    Returns None when no credentials are configured; callers treat that
    as the model being unavailable.
    """
    if not settings.llm_enabled:
        logger.warning("LLM_API_KEY not found. LLM features will be limited.")
        return None

    client = AsyncOpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        timeout=settings.llm_timeout,
        max_retries=0,  # retries handled by tenacity
    )
    return TextCompletionClient(
        client,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        max_retries=max_retries,
    )

"""
OpenAI Provider — chat completions via the official SDK.

The client is created lazily: the service starts without a key and
only the rewrite endpoint refuses to run when none is configured.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from openai import APIConnectionError, APIError, AsyncOpenAI, RateLimitError

from unai.llm import LLMProvider
from unai.llm.breaker import CircuitBreaker, is_transient

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider with retry and circuit breaker."""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: int = 3,
        request_timeout: float = 60.0,
    ):
        self._api_key = api_key if api_key is not None else os.getenv("OPENAI_API_KEY", "")
        self._model = model or os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self._client: Optional[AsyncOpenAI] = None
        self.max_retries = max_retries
        self.request_timeout = request_timeout
        self.circuit_breaker = CircuitBreaker(name=self.name)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise RuntimeError("OPENAI_API_KEY not set.")
            # Retries are handled here, not by the SDK
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=self.request_timeout,
                max_retries=0,
            )
        return self._client

    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        self.circuit_breaker.check()
        client = self._get_client()

        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        kwargs = {"model": self._model, "messages": messages, "temperature": temperature}
        if max_output_tokens:
            kwargs["max_tokens"] = max_output_tokens

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                response = await client.chat.completions.create(**kwargs)
                self.circuit_breaker.record_success()
                if not response.choices:
                    return ""
                return response.choices[0].message.content or ""
            except (RateLimitError, APIConnectionError) as e:
                last_error = e
            except APIError as e:
                last_error = e
                if not is_transient(e):
                    break
            except Exception:
                self.circuit_breaker.record_failure()
                raise
            if attempt < self.max_retries - 1:
                delay = 2 ** attempt
                logger.warning(
                    "OpenAI call failed (attempt %d/%d): %s. Retrying in %ds",
                    attempt + 1, self.max_retries, last_error, delay,
                    extra={"provider": self.name, "model": self._model},
                )
                await asyncio.sleep(delay)

        self.circuit_breaker.record_failure()
        raise last_error  # type: ignore[misc]

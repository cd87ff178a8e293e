"""
Gemini Provider — Google Gemini API implementation.

Uses the google.genai SDK. Client is lazily initialized,
so the app loads without an API key.

Features:
- Model fallback: primary model → gemini-2.5-flash on failure
- Circuit breaker shared with the other providers
- Exponential backoff retry on transient errors
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from google import genai
from google.genai import types

from unai.llm import LLMProvider
from unai.llm.breaker import CircuitBreaker, is_transient

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "gemini-2.5-flash"


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider with fallback and circuit breaker."""

    name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key if api_key is not None else os.getenv("GEMINI_API_KEY", "")
        self._model = model or os.getenv("GEMINI_MODEL", FALLBACK_MODEL)
        self._client: Optional[genai.Client] = None
        self.circuit_breaker = CircuitBreaker(name=self.name)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise RuntimeError(
                    "GEMINI_API_KEY not set. Get one from "
                    "https://aistudio.google.com/apikey"
                )
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def _call_model(
        self,
        model: str,
        prompt: str,
        config: types.GenerateContentConfig,
        max_retries: int = 3,
    ) -> str:
        """Call a specific model with retry logic."""
        client = self._get_client()
        last_error: Optional[Exception] = None
        for attempt in range(max_retries):
            try:
                response = await client.aio.models.generate_content(
                    model=model,
                    contents=prompt,
                    config=config,
                )
                return response.text or ""
            except Exception as e:
                last_error = e
                if is_transient(e) and attempt < max_retries - 1:
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise

        raise last_error  # type: ignore[misc]

    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        self.circuit_breaker.check()

        config = types.GenerateContentConfig(
            temperature=temperature,
            system_instruction=system_instruction,
            max_output_tokens=max_output_tokens,
        )

        try:
            result = await self._call_model(self._model, prompt, config, max_retries=2)
            self.circuit_breaker.record_success()
            return result
        except Exception as primary_err:
            if self._model == FALLBACK_MODEL:
                self.circuit_breaker.record_failure()
                raise
            logger.warning(
                "Primary model %s failed (%s), falling back to %s",
                self._model, primary_err, FALLBACK_MODEL,
                extra={"provider": self.name, "model": self._model},
            )
            try:
                result = await self._call_model(
                    FALLBACK_MODEL, prompt, config, max_retries=1,
                )
            except Exception as fallback_err:
                logger.error(
                    "Fallback model %s also failed: %s",
                    FALLBACK_MODEL, fallback_err,
                    extra={"provider": self.name, "model": FALLBACK_MODEL},
                )
                self.circuit_breaker.record_failure()
                raise fallback_err from primary_err
            self.circuit_breaker.record_success()
            return result

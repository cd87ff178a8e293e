"""
LLM Provider — Abstract Interface

All rewrite calls go through this interface. Swap providers
by changing UNAI_LLM_PROVIDER in env.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    name: str = "unknown"

    @property
    def configured(self) -> bool:
        """Whether credentials are present. Checked before any call."""
        return True

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """Generate a text response from the LLM."""
        ...

"""
Circuit breaker shared by the LLM providers.

closed → open → half-open → closed. While open, providers raise
CircuitOpenError immediately so the rewriter falls back to the
original text instead of waiting on a dead upstream.
"""

from __future__ import annotations

import logging
import time

logger = logging.getLogger(__name__)

FAILURE_THRESHOLD = 3    # Open after this many consecutive failures
RECOVERY_TIMEOUT = 60    # Seconds before a half-open retry


class CircuitOpenError(Exception):
    """Raised when the circuit breaker is open."""


class CircuitBreaker:
    def __init__(
        self,
        failure_threshold: int = FAILURE_THRESHOLD,
        recovery_timeout: float = RECOVERY_TIMEOUT,
        name: str = "llm",
    ):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.name = name
        self._failures = 0
        self._last_failure_time: float = 0
        self._state = "closed"

    @property
    def state(self) -> str:
        if self._state == "open":
            if time.monotonic() - self._last_failure_time >= self.recovery_timeout:
                self._state = "half-open"
        return self._state

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    def record_success(self) -> None:
        self._failures = 0
        self._state = "closed"

    def record_failure(self) -> None:
        self._failures += 1
        self._last_failure_time = time.monotonic()
        if self._failures >= self.failure_threshold:
            self._state = "open"
            logger.warning(
                "Circuit breaker OPEN for %s after %d consecutive failures, "
                "rewrites fall back for %ds",
                self.name, self._failures, self.recovery_timeout,
                extra={"provider": self.name},
            )

    def check(self) -> None:
        """Raise CircuitOpenError if calls should not be attempted."""
        if self.is_open:
            raise CircuitOpenError(
                f"{self.name} circuit breaker is open after repeated failures."
            )


def is_transient(error: Exception) -> bool:
    """Heuristic for retryable upstream errors."""
    error_str = str(error).lower()
    return any(k in error_str for k in (
        "429", "500", "502", "503", "rate", "quota", "timeout",
        "timed out", "connection", "unavailable", "overloaded",
    ))

"""
Structured Logging

Configures Python logging to emit JSON lines in production and a
readable line format in development.

Usage:
    from unai.logging import get_logger
    logger = get_logger("api")
    logger.info("Rewrite complete", extra={"original_score": 72, "mode": "light"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


LOG_LEVEL = os.getenv("UNAI_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("UNAI_LOG_FORMAT", "json")  # "json" or "text"

# Extra fields copied from log records into the JSON entry
EXTRA_FIELDS = (
    "original_score", "new_score", "score", "mode", "patterns_found",
    "patterns_remaining", "pattern_id", "provider", "model", "catalog",
    "text_length", "error", "error_type", "duration_ms", "status_code",
    "method", "path",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(fmt: str | None = None) -> logging.Logger:
    """Configure the unai logger tree. Call once at startup."""
    root = logging.getLogger("unai")
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    # Quiet third-party chatter
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the unai namespace."""
    return logging.getLogger(f"unai.{name}")

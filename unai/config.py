"""
UnAI Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "1.0.0"

    # --- Rewrite provider ---
    LLM_PROVIDER: str = os.getenv("UNAI_LLM_PROVIDER", "openai")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # --- Rewrite tuning ---
    REWRITE_TEMPERATURE: float = float(
        os.getenv("UNAI_REWRITE_TEMPERATURE", "0.7")
    )
    REWRITE_MAX_TOKENS: int = int(os.getenv("UNAI_REWRITE_MAX_TOKENS", "4096"))

    # --- Detection ---
    CATALOG: str = os.getenv("UNAI_CATALOG", "full")  # "full" or "core"
    MAX_TEXT_LENGTH: int = int(os.getenv("UNAI_MAX_TEXT_LENGTH", "10000"))

    # --- Server ---
    HOST: str = os.getenv("UNAI_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("UNAI_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("UNAI_CORS_ORIGINS", "*")


settings = Settings()

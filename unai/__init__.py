"""
UnAI — AI Cliché Detection and Rewriting

Finds formulaic "AI-sounding" phrasing in Chinese and English text,
scores its density on a 0-100 scale, and rewrites it through an LLM.

Public API:
  - detect_patterns:   Catalog matches with per-pattern counts (deterministic)
  - calculate_score:   0-100 AI-ness score (deterministic)
  - rewrite_and_score: LLM rewrite with before/after scores
  - PatternCatalog:    Immutable, load-time compiled pattern catalog
  - LLMProvider:       Abstract LLM interface for provider swapping

Usage:
    from unai import detect_patterns, calculate_score
    from unai import rewrite_and_score, get_provider
"""

__version__ = "1.0.0"

from unai.patterns import (
    CATALOG_VERSION,
    CORE_PATTERN_IDS,
    PATTERNS,
    Pattern,
    PatternCatalog,
    core_catalog,
    default_catalog,
    get_catalog,
)
from unai.detector import Detection, detect_patterns
from unai.scorer import SEVERITY_WEIGHTS, calculate_score, score_detections, score_level
from unai.rewriter import rewrite_and_score, rewrite_text
from unai.llm import LLMProvider
from unai.llm.factory import get_provider

__all__ = [
    "CATALOG_VERSION",
    "CORE_PATTERN_IDS",
    "PATTERNS",
    "Pattern",
    "PatternCatalog",
    "core_catalog",
    "default_catalog",
    "get_catalog",
    "Detection",
    "detect_patterns",
    "SEVERITY_WEIGHTS",
    "calculate_score",
    "score_detections",
    "score_level",
    "rewrite_and_score",
    "rewrite_text",
    "LLMProvider",
    "get_provider",
]

"""
API Schemas — Request and Response Models

Pydantic models for the UnAI API.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field

from unai.config import settings


# ============================================================
# DETECT
# ============================================================

class DetectRequest(BaseModel):
    """POST /detect request body."""
    text: str = Field(..., min_length=1, max_length=settings.MAX_TEXT_LENGTH,
                      description="The text to check for AI clichés.")

    model_config = {"json_schema_extra": {"examples": [
        {"text": "值得注意的是，这个方案简单来说就是把问题兜住。"},
    ]}}


class PatternMatch(BaseModel):
    id: str
    description: str
    category: str
    language: str
    severity: str
    count: int
    alternatives: list[str] = []


class DetectResponse(BaseModel):
    """POST /detect response body."""
    text_length: int
    score: int
    level: str
    patterns_found: int
    patterns: list[PatternMatch]
    score_breakdown: Optional[dict] = None
    catalog_version: str


# ============================================================
# REWRITE
# ============================================================

class RewriteRequest(BaseModel):
    """POST /rewrite request body."""
    text: str = Field(..., min_length=1, max_length=settings.MAX_TEXT_LENGTH,
                      description="The text to rewrite (1-10,000 characters by default).")
    mode: str = Field("balanced", pattern="^(light|balanced|aggressive)$",
                      description="Rewrite intensity: light, balanced, or aggressive.")

    model_config = {"json_schema_extra": {"examples": [
        {"text": "It's worth noting that, in conclusion, this works.", "mode": "balanced"},
    ]}}


class RewriteResponse(BaseModel):
    """POST /rewrite response body."""
    original: str
    rewritten: str
    original_score: int
    new_score: int
    patterns_found: int
    patterns_remaining: int
    patterns: list[PatternMatch]
    remaining_patterns: list[PatternMatch] = []
    mode: str
    fallback: bool = False
    error: Optional[str] = None
    diff_spans: Optional[list[dict]] = None
    catalog_version: str


# ============================================================
# CATALOG
# ============================================================

class PatternInfo(BaseModel):
    id: str
    rule: str
    category: str
    language: str
    severity: str
    description: str
    alternatives: list[str]
    literal: bool = False


class PatternsResponse(BaseModel):
    catalog: str
    catalog_version: str
    language: str
    total_patterns: int
    patterns: list[PatternInfo]


# ============================================================
# HEALTH
# ============================================================

class HealthResponse(BaseModel):
    status: str
    version: str
    catalog_version: str
    catalog: str
    catalog_patterns: int
    llm_provider: str
    llm_configured: bool

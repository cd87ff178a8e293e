"""
AI-ness Score Calculator

Computes a 0-100 score from detected patterns. Separated from
detector.py for single-responsibility.

Score is a density, not a count:
  raw        = sum(weight(severity) * occurrences)
  normalized = raw / (chars / 1000) * 2
  final      = round half up, clamped to [0, 100]

A short text with one high-severity hit scores far higher than a
long text with the same single hit. One high hit in 50 characters
already saturates at 100.
"""

from __future__ import annotations

import math
from typing import Optional

from unai.detector import Detection, detect_patterns
from unai.patterns import PatternCatalog

SEVERITY_WEIGHTS: dict[str, int] = {"high": 15, "medium": 8, "low": 3}

# Score bands used to colour results
LEVEL_HIGH = 70
LEVEL_MODERATE = 40


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_detections(
    detections: list[Detection],
    char_count: int,
) -> tuple[int, dict]:
    """
    Score precomputed detections for a text of char_count characters.

    Returns:
        (score, breakdown) where breakdown lists every contribution.
    """
    breakdown: dict = {
        "char_count": char_count,
        "contributions": [],
        "raw_score": 0,
        "normalized": 0.0,
        "final_score": 0,
    }
    if char_count <= 0:
        return 0, breakdown

    raw = 0
    for d in detections:
        weight = SEVERITY_WEIGHTS.get(d.pattern.severity, SEVERITY_WEIGHTS["low"])
        contribution = weight * d.count
        raw += contribution
        breakdown["contributions"].append({
            "pattern": d.pattern.id,
            "severity": d.pattern.severity,
            "count": d.count,
            "weight": weight,
            "contribution": contribution,
        })

    normalized = raw / (char_count / 1000) * 2
    final = max(0, min(100, _round_half_up(normalized)))

    breakdown["raw_score"] = raw
    breakdown["normalized"] = round(normalized, 3)
    breakdown["final_score"] = final
    return final, breakdown


def calculate_score(
    text: str,
    catalog: Optional[PatternCatalog] = None,
) -> int:
    """AI-ness score of text, an integer in [0, 100]."""
    if not text:
        return 0
    score, _ = score_detections(detect_patterns(text, catalog), len(text))
    return score


def score_level(score: int) -> str:
    """Band a score: "high" (>= 70), "moderate" (>= 40) or "low"."""
    if score >= LEVEL_HIGH:
        return "high"
    if score >= LEVEL_MODERATE:
        return "moderate"
    return "low"

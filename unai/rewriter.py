"""
Rewriter — LLM Rewrite With Before/After Scoring

Sends text to the configured LLM with an intensity directive, then
re-runs detection and scoring on whatever comes back.

Key rules:
  1. The LLM is a black box: any string it returns is scored as-is
  2. A failed or empty reply falls back to the original text, never an error
  3. Before/after scores use the same catalog
  4. Diffs are computed deterministically (diff-match-patch), not by the LLM
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import diff_match_patch as dmp_module

from unai.config import settings
from unai.detector import detect_patterns
from unai.llm import LLMProvider
from unai.patterns import CATALOG_VERSION, PatternCatalog, default_catalog
from unai.scorer import score_detections

logger = logging.getLogger(__name__)

# Singleton diff engine
_dmp = dmp_module.diff_match_patch()

MODES = ("light", "balanced", "aggressive")
DEFAULT_MODE = "balanced"

INTENSITY_INSTRUCTIONS: dict[str, str] = {
    "light": (
        "Minimal changes. Delete or swap only the cliché phrases themselves; "
        "keep every sentence and its structure."
    ),
    "balanced": (
        "Balanced. Remove the clichés and smooth the sentences around them; "
        "light restructuring is fine, keep the paragraph order."
    ),
    "aggressive": (
        "Aggressively rewrite. Restructure sentences and paragraphs freely "
        "so the text reads like a person wrote it from scratch."
    ),
}


SYSTEM_PROMPT = """You are UnAI, an expert writing editor that removes AI-generated writing clichés.

RULES:
- Preserve ALL factual content
- Remove Chinese AI patterns: "不是...而是...", "值得注意的是", "让我们深入探讨", "总而言之", "简单来说", "兜住/接住", "不仅...而且..."
- Remove English AI patterns: "It's worth noting", "Let's delve into", "Furthermore/Moreover", "In conclusion", "Not X but Y", "Great question!", sycophancy
- Keep same language as input
- Make text flow naturally like a human wrote it
- Return ONLY the rewritten text, nothing else"""


def build_system_prompt(mode: str) -> str:
    """System prompt with the intensity line for a mode."""
    intensity = INTENSITY_INSTRUCTIONS.get(mode, INTENSITY_INSTRUCTIONS[DEFAULT_MODE])
    return f"{SYSTEM_PROMPT}\nIntensity: {intensity}"


def _output_budget(text: str) -> int:
    return max(1, min(len(text) * 2, settings.REWRITE_MAX_TOKENS))


async def rewrite_text(
    text: str,
    mode: str,
    llm: LLMProvider,
) -> tuple[str, Optional[str]]:
    """
    Ask the LLM for a rewrite.

    Returns:
        (rewritten, error). On failure rewritten is the original text
        and error carries the reason.
    """
    try:
        reply = await llm.generate(
            prompt=text,
            system_instruction=build_system_prompt(mode),
            temperature=settings.REWRITE_TEMPERATURE,
            max_output_tokens=_output_budget(text),
        )
    except Exception as e:
        logger.warning(
            "Rewrite failed, returning original text: %s", e,
            extra={"provider": llm.name, "mode": mode, "error_type": type(e).__name__},
        )
        return text, str(e) or type(e).__name__

    rewritten = (reply or "").strip()
    if not rewritten:
        logger.warning(
            "Rewrite returned empty text, returning original",
            extra={"provider": llm.name, "mode": mode},
        )
        return text, "empty response"
    return rewritten, None


def compute_diff_spans(original: str, rewritten: str) -> list[dict]:
    """
    Character diff between original and rewritten text.

    Returns spans with type (equal/delete/insert), text, and positions
    in the original (orig_*) and rewritten (new_*) strings.
    """
    diffs = _dmp.diff_main(original, rewritten)
    _dmp.diff_cleanupSemantic(diffs)

    spans = []
    orig_pos = 0
    new_pos = 0

    for op, chunk in diffs:
        end_orig = orig_pos + len(chunk)
        end_new = new_pos + len(chunk)
        if op == 0:  # EQUAL
            spans.append({
                "type": "equal",
                "text": chunk,
                "orig_start": orig_pos,
                "orig_end": end_orig,
                "new_start": new_pos,
                "new_end": end_new,
            })
            orig_pos, new_pos = end_orig, end_new
        elif op == -1:  # DELETE
            spans.append({
                "type": "delete",
                "text": chunk,
                "orig_start": orig_pos,
                "orig_end": end_orig,
            })
            orig_pos = end_orig
        else:  # INSERT
            spans.append({
                "type": "insert",
                "text": chunk,
                "new_start": new_pos,
                "new_end": end_new,
            })
            new_pos = end_new

    return spans


async def rewrite_and_score(
    text: str,
    mode: str,
    llm: LLMProvider,
    catalog: Optional[PatternCatalog] = None,
) -> dict:
    """
    Score, rewrite, and score again.

    Flow:
      1. Detect + score the original
      2. LLM rewrite (falls back to the original on failure)
      3. Detect + score the rewrite
      4. Diff spans between the two
    """
    catalog = catalog if catalog is not None else default_catalog
    start = time.time()

    detected = detect_patterns(text, catalog)
    original_score, _ = score_detections(detected, len(text))

    rewritten, error = await rewrite_text(text, mode, llm)

    remaining = detect_patterns(rewritten, catalog)
    new_score, _ = score_detections(remaining, len(rewritten))

    logger.info(
        "Rewrite scored: %d -> %d", original_score, new_score,
        extra={
            "original_score": original_score,
            "new_score": new_score,
            "mode": mode,
            "patterns_found": len(detected),
            "patterns_remaining": len(remaining),
            "provider": llm.name,
            "duration_ms": int((time.time() - start) * 1000),
        },
    )

    return {
        "original": text,
        "rewritten": rewritten,
        "original_score": original_score,
        "new_score": new_score,
        "patterns_found": len(detected),
        "patterns_remaining": len(remaining),
        "patterns": [d.to_dict() for d in detected],
        "remaining_patterns": [d.to_dict() for d in remaining],
        "mode": mode,
        "fallback": error is not None,
        "error": error,
        "diff_spans": compute_diff_spans(text, rewritten),
        "catalog_version": CATALOG_VERSION,
    }

"""
Detector — Pattern Matching Engine

Runs every catalog entry against the text and reports which patterns
matched and how often. Deterministic, no I/O, no shared state: the
catalog is read-only and each call builds its own result list.

Output order is catalog order, never match position or frequency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from unai.patterns import (
    CATALOG_VERSION,
    CatalogEntry,
    Pattern,
    PatternCatalog,
    default_catalog,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Detection:
    """A pattern that matched at least once."""
    pattern: Pattern
    count: int              # Non-overlapping occurrences, always >= 1

    def to_dict(self) -> dict:
        p = self.pattern
        return {
            "id": p.id,
            "description": p.description,
            "category": p.category,
            "language": p.language,
            "severity": p.severity,
            "count": self.count,
            "alternatives": list(p.alternatives),
        }


def _count_matches(entry: CatalogEntry, text: str) -> int:
    """
    Count occurrences for one entry.

    A fault while matching is confined to this entry: it degrades to
    literal containment of the raw rule rather than aborting the scan.
    """
    try:
        return entry.matcher.count(text)
    except Exception as e:
        logger.warning(
            "Pattern %s failed to match (%s), falling back to literal",
            entry.pattern.id, e,
            extra={"pattern_id": entry.pattern.id, "error_type": type(e).__name__},
        )
        return 1 if entry.pattern.rule in text else 0


def detect_patterns(
    text: str,
    catalog: Optional[PatternCatalog] = None,
) -> list[Detection]:
    """
    Detect cliché patterns in text.

    Args:
        text: Any string. Length limits belong to the caller.
        catalog: Catalog to evaluate. Defaults to the full catalog.

    Returns:
        One Detection per matched pattern, in catalog order.
    """
    if not text:
        return []

    catalog = catalog if catalog is not None else default_catalog
    detections: list[Detection] = []

    for entry in catalog:
        count = _count_matches(entry, text)
        if count > 0:
            detections.append(Detection(pattern=entry.pattern, count=count))

    return detections


def summarize(detections: list[Detection]) -> dict:
    """Severity and occurrence totals, shown in CLI reports."""
    by_severity = {"high": 0, "medium": 0, "low": 0}
    for d in detections:
        by_severity[d.pattern.severity] = by_severity.get(d.pattern.severity, 0) + 1
    return {
        "patterns_found": len(detections),
        "occurrences": sum(d.count for d in detections),
        "by_severity": by_severity,
        "catalog_version": CATALOG_VERSION,
    }

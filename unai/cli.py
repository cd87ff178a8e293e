"""
unai — command-line detection and scoring.

Usage:
    unai detect essay.txt                  # Score a file
    cat draft.md | unai detect             # Score stdin
    unai detect a.txt b.txt --json         # JSON payloads (same shape as POST /detect)
    unai detect draft.md --fail-above 40   # Exit 2 when a score exceeds 40 (for CI)
    unai patterns --language zh            # List the catalog
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from unai.detector import detect_patterns, summarize
from unai.patterns import CATALOG_VERSION, PatternCatalog, get_catalog
from unai.scorer import score_detections, score_level


def build_report(text: str, catalog: PatternCatalog) -> dict:
    """Detection payload for one text: the /detect response plus a severity summary."""
    detections = detect_patterns(text, catalog)
    score, breakdown = score_detections(detections, len(text))
    return {
        "text_length": len(text),
        "score": score,
        "level": score_level(score),
        "patterns_found": len(detections),
        "patterns": [d.to_dict() for d in detections],
        "score_breakdown": breakdown,
        "summary": summarize(detections),
        "catalog_version": CATALOG_VERSION,
    }


def format_report(name: str, report: dict) -> str:
    lines = [
        f"{name}: score {report['score']}/100 ({report['level']}), "
        f"{report['patterns_found']} pattern(s) in {report['text_length']} chars",
    ]
    summary = report.get("summary")
    if summary and summary["patterns_found"]:
        sev = summary["by_severity"]
        lines.append(
            f"  {summary['occurrences']} occurrence(s): "
            f"{sev['high']} high, {sev['medium']} medium, {sev['low']} low"
        )
    for p in report["patterns"]:
        alt = f"  → {p['alternatives'][0]}" if p["alternatives"] else ""
        lines.append(
            f"  [{p['id']}] {p['severity']:<6} x{p['count']}  {p['description']}{alt}"
        )
    return "\n".join(lines)


def _read_inputs(paths: list[str]) -> list[tuple[str, str]]:
    if not paths or paths == ["-"]:
        return [("<stdin>", sys.stdin.read())]
    inputs = []
    for raw in paths:
        if raw == "-":
            inputs.append(("<stdin>", sys.stdin.read()))
        else:
            inputs.append((raw, Path(raw).read_text(encoding="utf-8")))
    return inputs


def cmd_detect(args: argparse.Namespace) -> int:
    catalog = get_catalog(args.catalog)
    try:
        inputs = _read_inputs(args.files)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    reports = [(name, build_report(text, catalog)) for name, text in inputs]

    if args.json:
        payload = [dict(r, source=name) for name, r in reports]
        print(json.dumps(payload if len(payload) > 1 else payload[0],
                         ensure_ascii=False, indent=2))
    else:
        print("\n\n".join(format_report(name, r) for name, r in reports))

    if args.fail_above is not None and any(
        r["score"] > args.fail_above for _, r in reports
    ):
        return 2
    return 0


def cmd_patterns(args: argparse.Namespace) -> int:
    catalog = get_catalog(args.catalog)
    patterns = catalog.describe(language=args.language)
    if args.json:
        print(json.dumps(patterns, ensure_ascii=False, indent=2))
        return 0
    for p in patterns:
        print(f"{p['id']}  {p['severity']:<6} {p['language']:<4} {p['description']}")
    print(f"\n{len(patterns)} pattern(s), catalog {args.catalog} v{CATALOG_VERSION}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unai", description="Detect and score AI-cliché phrasing in text",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    detect = sub.add_parser("detect", help="Score files or stdin")
    detect.add_argument("files", nargs="*", help="Files to score (default: stdin)")
    detect.add_argument("--catalog", choices=["full", "core"], default="full")
    detect.add_argument("--json", action="store_true", help="Output JSON")
    detect.add_argument(
        "--fail-above", type=int, default=None, metavar="N",
        help="Exit with status 2 if any input scores above N",
    )
    detect.set_defaults(func=cmd_detect)

    patterns = sub.add_parser("patterns", help="List catalog patterns")
    patterns.add_argument("--catalog", choices=["full", "core"], default="full")
    patterns.add_argument(
        "--language", choices=["all", "zh", "en", "both"], default="all",
    )
    patterns.add_argument("--json", action="store_true", help="Output JSON")
    patterns.set_defaults(func=cmd_patterns)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

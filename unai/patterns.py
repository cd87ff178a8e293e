"""
Pattern Catalog — Immutable Cliché Definitions

The catalog is the detection surface of UnAI. It defines:
  1. Every cliché pattern (id, match rule, category, language, severity)
  2. The human-facing description and suggested alternatives
  3. How each match rule is resolved at load time (regex or literal)

The catalog is read-only. Entries are frozen dataclasses stored in
tuples; a catalog is built once and then only iterated. Every entry
is checked against every input regardless of the input's language,
so English rules are written so they do not fire on Chinese text and
vice versa.

Two variants exist:
  - the full catalog (PATTERNS), canonical
  - the core catalog (CORE_PATTERN_IDS), the 21 high/medium entries
    served by the original standalone rewrite endpoint
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

logger = logging.getLogger(__name__)

# --- Catalog Version (stamped on every detection result) ---
CATALOG_VERSION = "1.0.0"

LANGUAGES = ("zh", "en", "both")
SEVERITIES = ("high", "medium", "low")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Pattern:
    """A single cliché definition."""
    id: str                         # e.g. "zh008", stable across versions
    rule: str                       # Regex, or a literal if it does not compile
    category: str                   # e.g. "缓和语", "Sycophancy"
    language: str                   # "zh", "en", "both"
    severity: str                   # "high", "medium", "low"
    description: str                # Shown to end users
    alternatives: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompiledRule:
    """A rule that compiled as a regular expression."""
    regex: re.Pattern

    def count(self, text: str) -> int:
        return sum(1 for _ in self.regex.finditer(text))


@dataclass(frozen=True)
class LiteralRule:
    """
    Substring fallback for a rule that is not a valid regex.

    Containment only: reports 1 however many times the literal occurs.
    """
    literal: str

    def count(self, text: str) -> int:
        return 1 if self.literal in text else 0


MatchRule = Union[CompiledRule, LiteralRule]


@dataclass(frozen=True)
class CatalogEntry:
    """A pattern paired with its load-time resolved rule."""
    pattern: Pattern
    matcher: MatchRule

    @property
    def is_literal(self) -> bool:
        return isinstance(self.matcher, LiteralRule)


def compile_rule(rule: str) -> MatchRule:
    """
    Resolve a textual rule once.

    No flags are applied: case behaviour is whatever the rule encodes
    (e.g. "[Ii]n conclusion").
    """
    try:
        return CompiledRule(re.compile(rule))
    except re.error:
        return LiteralRule(rule)


# ============================================================
# CHINESE PATTERNS
# ============================================================

CHINESE_PATTERNS: tuple[Pattern, ...] = (
    # --- 对立句式 ---
    Pattern(
        id="zh001",
        rule="不是[^，。]+而是",
        category="对立句式",
        language="zh",
        severity="high",
        description='"不是...而是..."句式',
        alternatives=("直接陈述后者", '用"其实"引出', '换用"更准确地说"'),
    ),
    Pattern(
        id="zh002",
        rule="并不是[^，。]+而是",
        category="对立句式",
        language="zh",
        severity="high",
        description='"并不是...而是..."',
        alternatives=("去掉否定，直接说",),
    ),
    Pattern(
        id="zh003",
        rule="与其说[^，。]+不如说",
        category="对立句式",
        language="zh",
        severity="medium",
        description='"与其说...不如说..."',
        alternatives=("直接表达后者观点",),
    ),

    # --- 总结排比 ---
    Pattern(
        id="zh004",
        rule="简单[一来]说",
        category="总结排比",
        language="zh",
        severity="high",
        description='"简单来说/简单一句话"',
        alternatives=("删除，直接说内容",),
    ),
    Pattern(
        id="zh005",
        rule="一句话[概总]括",
        category="总结排比",
        language="zh",
        severity="high",
        description='"一句话概括"',
        alternatives=("删除",),
    ),
    Pattern(
        id="zh006",
        rule="总[的而]言之",
        category="总结排比",
        language="zh",
        severity="high",
        description='"总而言之/总的来说"',
        alternatives=('删除或用"所以"', "直接写结论"),
    ),
    Pattern(
        id="zh007",
        rule="综上所述",
        category="总结排比",
        language="zh",
        severity="high",
        description='"综上所述"',
        alternatives=("删除", '用"回到最初的问题"'),
    ),

    # --- 缓和语 ---
    Pattern(
        id="zh008",
        rule="值得注意的是",
        category="缓和语",
        language="zh",
        severity="high",
        description='"值得注意的是"',
        alternatives=("删除，直接说", '用"另外"'),
    ),
    Pattern(
        id="zh009",
        rule="需要[指强]调的是",
        category="缓和语",
        language="zh",
        severity="high",
        description='"需要指出/强调的是"',
        alternatives=("删除",),
    ),
    Pattern(
        id="zh010",
        rule="不可否认",
        category="缓和语",
        language="zh",
        severity="medium",
        description='"不可否认"',
        alternatives=("删除", '用"确实"'),
    ),

    # --- 元叙述 ---
    Pattern(
        id="zh011",
        rule="让我[们来]深入",
        category="元叙述",
        language="zh",
        severity="high",
        description='"让我们深入探讨"',
        alternatives=("删除，直接展开分析",),
    ),
    Pattern(
        id="zh012",
        rule="接下来[我让]",
        category="元叙述",
        language="zh",
        severity="medium",
        description='"接下来我会..."',
        alternatives=("删除，直接写内容",),
    ),
    Pattern(
        id="zh013",
        rule="换句话说",
        category="元叙述",
        language="zh",
        severity="medium",
        description='"换句话说"',
        alternatives=("删除", '用"也就是"'),
    ),
    Pattern(
        id="zh014",
        rule="说白了",
        category="元叙述",
        language="zh",
        severity="medium",
        description='"说白了"口语化压缩',
        alternatives=("删除",),
    ),

    # --- 油腻表达 ---
    Pattern(
        id="zh015",
        rule="兜住",
        category="油腻表达",
        language="zh",
        severity="high",
        description='"兜住"',
        alternatives=('用"承接""维持"',),
    ),
    Pattern(
        id="zh016",
        rule="接住",
        category="油腻表达",
        language="zh",
        severity="high",
        description='"接住"',
        alternatives=('用"回应""处理"',),
    ),
    Pattern(
        id="zh017",
        rule="收敛",
        category="油腻表达",
        language="zh",
        severity="medium",
        description='"收敛"（非数学语境）',
        alternatives=('用"减少""控制"',),
    ),
    Pattern(
        id="zh018",
        rule="坍缩",
        category="油腻表达",
        language="zh",
        severity="medium",
        description='"坍缩"（非物理语境）',
        alternatives=('用"崩塌""瓦解"',),
    ),
    Pattern(
        id="zh019",
        rule="张力",
        category="油腻表达",
        language="zh",
        severity="medium",
        description='"张力"滥用',
        alternatives=('用"矛盾""冲突""紧张"',),
    ),

    # --- 自我修正 ---
    Pattern(
        id="zh020",
        rule="我现在可以[冷平]静",
        category="自我修正",
        language="zh",
        severity="high",
        description="模型声明自己的情绪状态",
        alternatives=("删除整句",),
    ),
    Pattern(
        id="zh021",
        rule="我换个[^，。]*语气",
        category="自我修正",
        language="zh",
        severity="high",
        description="声明要换语气",
        alternatives=("删除，直接用新语气",),
    ),

    # --- 排比递进 / 过渡词 ---
    Pattern(
        id="zh022",
        rule="这不仅仅是[^，。]+更是",
        category="排比递进",
        language="zh",
        severity="high",
        description='"不仅仅是...更是..."',
        alternatives=("分成两句独立表达",),
    ),
    Pattern(
        id="zh023",
        rule="不仅[^，。]+而且",
        category="排比递进",
        language="zh",
        severity="medium",
        description='"不仅...而且..."过度使用',
        alternatives=("分开说", '用"同时"'),
    ),
    Pattern(
        id="zh024",
        rule="事实上",
        category="过渡词",
        language="zh",
        severity="medium",
        description='"事实上"',
        alternatives=("删除", '用"其实"'),
    ),
    Pattern(
        id="zh025",
        rule="毫无疑问",
        category="过渡词",
        language="zh",
        severity="medium",
        description='"毫无疑问"',
        alternatives=("删除",),
    ),

    # --- 单字词 ---
    Pattern(
        id="zh026",
        rule="(?<=[，。])拆(?=[，。开来])",
        category="单字词",
        language="zh",
        severity="low",
        description='单字词"拆"滥用',
        alternatives=("拆解", "分析", "拆分"),
    ),
    Pattern(
        id="zh027",
        rule="(?<=[，。])搞(?=[，。])",
        category="单字词",
        language="zh",
        severity="low",
        description='单字词"搞"',
        alternatives=("做", "进行", "处理"),
    ),
)


# ============================================================
# ENGLISH PATTERNS
# ============================================================

ENGLISH_PATTERNS: tuple[Pattern, ...] = (
    # --- Filler phrases ---
    Pattern(
        id="en001",
        rule="It'?s worth noting that",
        category="Filler phrases",
        language="en",
        severity="high",
        description="\"It's worth noting that\"",
        alternatives=("Delete entirely", "Just state the fact"),
    ),
    Pattern(
        id="en002",
        rule="[Ll]et'?s delve into",
        category="Filler phrases",
        language="en",
        severity="high",
        description="\"Let's delve into\"",
        alternatives=("Delete", "Just start the analysis"),
    ),
    Pattern(
        id="en003",
        rule="[Ii]n today'?s (rapidly )?(evolving|changing)",
        category="Filler phrases",
        language="en",
        severity="high",
        description="\"In today's rapidly evolving...\"",
        alternatives=("Delete", "Be specific about what changed"),
    ),
    Pattern(
        id="en004",
        rule="[Ii]t'?s important to (note|understand|recognize)",
        category="Filler phrases",
        language="en",
        severity="high",
        description="\"It's important to note...\"",
        alternatives=("Delete, just say it",),
    ),

    # --- Transitions ---
    Pattern(
        id="en005",
        rule="[Ff]urthermore",
        category="Transitions",
        language="en",
        severity="medium",
        description='"Furthermore" overuse',
        alternatives=("Also", "And", "Delete"),
    ),
    Pattern(
        id="en006",
        rule="[Mm]oreover",
        category="Transitions",
        language="en",
        severity="medium",
        description='"Moreover"',
        alternatives=("Also", "And", "On top of that"),
    ),
    Pattern(
        id="en007",
        rule="[Hh]owever,? it",
        category="Transitions",
        language="en",
        severity="medium",
        description='"However" as sentence starter',
        alternatives=("But", "Though", "That said"),
    ),
    Pattern(
        id="en008",
        rule="[Ii]n conclusion",
        category="Summary",
        language="en",
        severity="high",
        description='"In conclusion"',
        alternatives=("Delete", "So", "The takeaway"),
    ),

    # --- Structure clichés ---
    Pattern(
        id="en009",
        rule="[Nn]ot [^,.]+ but (rather|instead)",
        category="Contrast structure",
        language="en",
        severity="high",
        description='"Not X, but Y" structure',
        alternatives=("State Y directly", 'Use "actually"'),
    ),
    Pattern(
        id="en010",
        rule="[Ww]hile [^,.]+ (it'?s|this|there)",
        category="Hedging",
        language="en",
        severity="medium",
        description="\"While X, it's Y\" hedge",
        alternatives=("Make two direct sentences",),
    ),
    Pattern(
        id="en011",
        rule="[Tt]his is not just [^,.]+ (this is|it'?s)",
        category="Contrast structure",
        language="en",
        severity="high",
        description="\"This is not just X, it's Y\"",
        alternatives=("State what it IS",),
    ),

    # --- Sycophancy ---
    Pattern(
        id="en012",
        rule="[Gg]reat question",
        category="Sycophancy",
        language="en",
        severity="high",
        description='"Great question!"',
        alternatives=("Delete entirely",),
    ),
    Pattern(
        id="en013",
        rule="[Aa]bsolutely[!.]",
        category="Sycophancy",
        language="en",
        severity="high",
        description='"Absolutely!"',
        alternatives=("Delete", "Yes"),
    ),
    Pattern(
        id="en014",
        rule="I'?d be happy to help",
        category="Sycophancy",
        language="en",
        severity="high",
        description="\"I'd be happy to help\"",
        alternatives=("Delete, just help",),
    ),
    Pattern(
        id="en015",
        rule="[Tt]hat'?s a (great|excellent|fantastic)",
        category="Sycophancy",
        language="en",
        severity="high",
        description="\"That's a great...\"",
        alternatives=("Delete",),
    ),

    # --- Formatting ---
    Pattern(
        id="en016",
        rule="— [a-z]",
        category="Formatting",
        language="en",
        severity="low",
        description="Overuse of em dashes",
        alternatives=("Use commas or periods", "Restructure sentence"),
    ),

    # --- Hedging ---
    Pattern(
        id="en017",
        rule="[Ii]t'?s worth mentioning",
        category="Hedging",
        language="en",
        severity="high",
        description="\"It's worth mentioning\"",
        alternatives=("Delete",),
    ),
    Pattern(
        id="en018",
        rule="[Ii]nterestingly",
        category="Hedging",
        language="en",
        severity="medium",
        description='"Interestingly,"',
        alternatives=("Delete", "Let the reader decide if it's interesting"),
    ),
    Pattern(
        id="en019",
        rule="[Aa]s we( can)? see",
        category="Hedging",
        language="en",
        severity="medium",
        description='"As we can see"',
        alternatives=("Delete",),
    ),
    Pattern(
        id="en020",
        rule="[Uu]ltimately",
        category="Summary",
        language="en",
        severity="medium",
        description='"Ultimately"',
        alternatives=("Delete", "So"),
    ),

    # --- Wordy / meta-narration ---
    Pattern(
        id="en021",
        rule="[Ii]t is (important|crucial|essential|vital) to",
        category="Wordy",
        language="en",
        severity="medium",
        description='"It is important/crucial to..."',
        alternatives=("Delete, just state what to do",),
    ),
    Pattern(
        id="en022",
        rule="[Ii]n the realm of",
        category="Wordy",
        language="en",
        severity="high",
        description='"In the realm of"',
        alternatives=("In", "For", "Delete"),
    ),
    Pattern(
        id="en023",
        rule="[Ll]et me (explain|break)",
        category="Meta-narration",
        language="en",
        severity="medium",
        description='"Let me explain/break down"',
        alternatives=("Delete, just explain",),
    ),
    Pattern(
        id="en024",
        rule="[Hh]ere'?s the (thing|deal|catch)",
        category="Colloquial",
        language="en",
        severity="medium",
        description="\"Here's the thing\"",
        alternatives=("Delete",),
    ),
    Pattern(
        id="en025",
        rule="[Aa]t the end of the day",
        category="Cliché",
        language="en",
        severity="high",
        description='"At the end of the day"',
        alternatives=("Delete", "So"),
    ),
)


PATTERNS: tuple[Pattern, ...] = CHINESE_PATTERNS + ENGLISH_PATTERNS

# The reduced variant served by the original rewrite endpoint.
# High and medium entries only; weights are shared with the full catalog.
CORE_PATTERN_IDS: tuple[str, ...] = (
    "zh001", "zh004", "zh006", "zh007", "zh008", "zh009", "zh011",
    "zh015", "zh016", "zh022",
    "en001", "en002", "en003", "en008", "en009", "en012", "en014",
    "zh013", "zh024", "en005", "en006",
)


# ============================================================
# THE CATALOG
# ============================================================

class PatternCatalog:
    """
    Ordered, read-only collection of compiled patterns.

    Rules are resolved exactly once, here. A rule that is not a valid
    regular expression is kept as a literal substring and reported as
    a load-time warning; it never fails a detection call.
    """

    def __init__(self, patterns: Iterable[Pattern]):
        entries: list[CatalogEntry] = []
        seen: set[str] = set()

        for pattern in patterns:
            if pattern.id in seen:
                raise ValueError(f"Duplicate pattern id in catalog: {pattern.id}")
            if pattern.severity not in SEVERITIES:
                raise ValueError(
                    f"Pattern {pattern.id} has unknown severity: {pattern.severity}"
                )
            if pattern.language not in LANGUAGES:
                raise ValueError(
                    f"Pattern {pattern.id} has unknown language: {pattern.language}"
                )
            seen.add(pattern.id)

            matcher = compile_rule(pattern.rule)
            if isinstance(matcher, LiteralRule):
                logger.warning(
                    "Pattern %s rule is not a valid regex, using literal match",
                    pattern.id,
                    extra={"pattern_id": pattern.id},
                )
            entries.append(CatalogEntry(pattern=pattern, matcher=matcher))

        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._index: dict[str, int] = {
            e.pattern.id: i for i, e in enumerate(self._entries)
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._index

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    @property
    def patterns(self) -> tuple[Pattern, ...]:
        return tuple(e.pattern for e in self._entries)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(e.pattern.id for e in self._entries)

    def get(self, pattern_id: str) -> Optional[Pattern]:
        idx = self._index.get(pattern_id)
        return self._entries[idx].pattern if idx is not None else None

    def subset(self, pattern_ids: Iterable[str]) -> "PatternCatalog":
        """Build a catalog of the given ids, keeping this catalog's order."""
        wanted = set(pattern_ids)
        missing = wanted - set(self._index)
        if missing:
            raise KeyError(f"Unknown pattern ids: {', '.join(sorted(missing))}")
        return PatternCatalog(p for p in self.patterns if p.id in wanted)

    def by_language(self, language: str) -> tuple[Pattern, ...]:
        """
        Patterns tagged with a language, for listings only.

        Detection never filters by language.
        """
        if language in ("all", "", None):
            return self.patterns
        return tuple(p for p in self.patterns if p.language == language)

    def describe(self, language: str = "all") -> list[dict]:
        """
        Return the catalog as plain dicts.

        Used by GET /patterns and the CLI listing.
        """
        literal_ids = {e.pattern.id for e in self._entries if e.is_literal}
        return [
            {
                "id": p.id,
                "rule": p.rule,
                "category": p.category,
                "language": p.language,
                "severity": p.severity,
                "description": p.description,
                "alternatives": list(p.alternatives),
                "literal": p.id in literal_ids,
            }
            for p in self.by_language(language)
        ]


# ============================================================
# SINGLETONS: built once at import, never mutated
# ============================================================

default_catalog = PatternCatalog(PATTERNS)
core_catalog = default_catalog.subset(CORE_PATTERN_IDS)

_CATALOGS = {
    "full": default_catalog,
    "core": core_catalog,
}


def get_catalog(name: str = "full") -> PatternCatalog:
    """Return a named catalog variant ("full" or "core")."""
    try:
        return _CATALOGS[name]
    except KeyError:
        raise ValueError(f"Unknown catalog: {name}") from None

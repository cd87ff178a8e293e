"""
Tests for the Pattern Catalog — definitions, load-time compilation,
immutability and the two catalog variants.
"""

import dataclasses
import logging

import pytest

from unai.patterns import (
    CATALOG_VERSION,
    CORE_PATTERN_IDS,
    LANGUAGES,
    PATTERNS,
    SEVERITIES,
    CompiledRule,
    LiteralRule,
    Pattern,
    PatternCatalog,
    compile_rule,
    core_catalog,
    default_catalog,
    get_catalog,
)


def _pattern(pid: str, rule: str, severity: str = "high") -> Pattern:
    return Pattern(
        id=pid, rule=rule, category="test", language="zh",
        severity=severity, description=f"test {pid}",
    )


class TestCatalogContents:

    def test_version_exists(self):
        assert CATALOG_VERSION == "1.0.0"

    def test_full_catalog_size(self):
        assert len(PATTERNS) == 52
        assert len(default_catalog) == 52

    def test_ids_unique(self):
        ids = [p.id for p in PATTERNS]
        assert len(ids) == len(set(ids))

    def test_declaration_order_kept(self):
        assert default_catalog.ids == tuple(p.id for p in PATTERNS)
        assert default_catalog.ids[0] == "zh001"
        assert default_catalog.ids[-1] == "en025"

    def test_languages_and_severities_valid(self):
        for p in PATTERNS:
            assert p.language in LANGUAGES, p.id
            assert p.severity in SEVERITIES, p.id

    def test_every_pattern_has_alternatives(self):
        for p in PATTERNS:
            assert p.description
            assert len(p.alternatives) >= 1, p.id

    def test_zh008_is_worth_noting(self):
        p = default_catalog.get("zh008")
        assert p is not None
        assert p.rule == "值得注意的是"
        assert p.severity == "high"

    def test_all_rules_compile(self):
        """Every shipped rule is a valid regex — no literal fallbacks."""
        for entry in default_catalog:
            assert isinstance(entry.matcher, CompiledRule), entry.pattern.id
            assert entry.is_literal is False

    def test_get_unknown_returns_none(self):
        assert default_catalog.get("xx999") is None

    def test_contains_by_id(self):
        assert "en005" in default_catalog
        assert "en999" not in default_catalog


class TestImmutability:

    def test_pattern_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PATTERNS[0].severity = "low"

    def test_alternatives_are_tuples(self):
        for p in PATTERNS:
            assert isinstance(p.alternatives, tuple)

    def test_catalog_storage_is_tuple(self):
        assert isinstance(default_catalog.entries, tuple)
        assert isinstance(default_catalog.patterns, tuple)

    def test_entry_is_frozen(self):
        entry = default_catalog.entries[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.matcher = LiteralRule("x")


class TestRuleCompilation:

    def test_valid_regex_compiles(self):
        rule = compile_rule("[Ff]urthermore")
        assert isinstance(rule, CompiledRule)
        assert rule.count("Furthermore, furthermore") == 2

    def test_invalid_regex_becomes_literal(self):
        rule = compile_rule("值得(注意")
        assert isinstance(rule, LiteralRule)
        assert rule.literal == "值得(注意"

    def test_literal_counts_at_most_once(self):
        rule = LiteralRule("a(b")
        assert rule.count("a(b a(b a(b") == 1
        assert rule.count("ab") == 0

    def test_no_implicit_case_folding(self):
        rule = compile_rule("[Ii]n conclusion")
        assert rule.count("in conclusion") == 1
        assert rule.count("IN CONCLUSION") == 0

    def test_malformed_rule_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="unai.patterns"):
            catalog = PatternCatalog([_pattern("bad001", "不是(而是")])
        assert catalog.entries[0].is_literal
        assert any("bad001" in r.getMessage() for r in caplog.records)

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            PatternCatalog([_pattern("t1", "a"), _pattern("t1", "b")])

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValueError, match="severity"):
            PatternCatalog([_pattern("t1", "a", severity="critical")])

    def test_unknown_language_rejected(self):
        bad = Pattern(
            id="t1", rule="a", category="test", language="fr",
            severity="high", description="test t1",
        )
        with pytest.raises(ValueError, match="language"):
            PatternCatalog([bad])

    def test_both_language_accepted(self):
        both = Pattern(
            id="t1", rule="OK", category="test", language="both",
            severity="low", description="test t1",
        )
        assert len(PatternCatalog([both])) == 1


class TestCatalogVariants:

    def test_core_is_subset(self):
        assert len(core_catalog) == 21
        assert set(core_catalog.ids) == set(CORE_PATTERN_IDS)
        assert set(core_catalog.ids) <= set(default_catalog.ids)

    def test_core_keeps_full_catalog_order(self):
        expected = tuple(i for i in default_catalog.ids if i in set(CORE_PATTERN_IDS))
        assert core_catalog.ids == expected

    def test_core_has_no_low_severity(self):
        assert all(p.severity in ("high", "medium") for p in core_catalog.patterns)

    def test_core_shares_pattern_definitions(self):
        assert core_catalog.get("zh008") == default_catalog.get("zh008")

    def test_get_catalog(self):
        assert get_catalog("full") is default_catalog
        assert get_catalog("core") is core_catalog

    def test_get_catalog_unknown(self):
        with pytest.raises(ValueError):
            get_catalog("minimal")

    def test_subset_unknown_ids(self):
        with pytest.raises(KeyError):
            default_catalog.subset(["zh001", "nope"])


class TestListing:

    def test_by_language(self):
        assert len(default_catalog.by_language("zh")) == 27
        assert len(default_catalog.by_language("en")) == 25
        assert default_catalog.by_language("both") == ()
        assert len(default_catalog.by_language("all")) == 52

    def test_describe_shape(self):
        rows = default_catalog.describe()
        assert len(rows) == 52
        first = rows[0]
        for key in ("id", "rule", "category", "language", "severity",
                    "description", "alternatives", "literal"):
            assert key in first
        assert first["id"] == "zh001"
        assert isinstance(first["alternatives"], list)

    def test_describe_marks_literals(self):
        catalog = PatternCatalog([_pattern("ok1", "兜住"), _pattern("bad1", "兜(住")])
        rows = {r["id"]: r for r in catalog.describe()}
        assert rows["ok1"]["literal"] is False
        assert rows["bad1"]["literal"] is True

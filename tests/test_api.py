"""
API Integration Tests — Endpoint Verification

Tests every public API endpoint using FastAPI's TestClient.
No real LLM calls: the rewrite provider is swapped for a mock
through the get_llm dependency.

These tests catch:
  - Schema mismatches (response model vs actual data)
  - Request validation (length, mode)
  - Dependency injection bugs
  - Response format regressions
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from unai.llm import LLMProvider
from unai.samples import DEMO_EN, DEMO_ZH


class MockLLM(LLMProvider):
    name = "mock"

    def __init__(self, reply="Clean text.", configured=True, error=None):
        self._reply = reply
        self._configured = configured
        self._error = error
        self.calls = []

    @property
    def configured(self) -> bool:
        return self._configured

    async def generate(self, prompt, system_instruction=None, temperature=0.7,
                       max_output_tokens=None):
        self.calls.append({"prompt": prompt, "system_instruction": system_instruction})
        if self._error is not None:
            raise self._error
        return self._reply


# --- Fixtures ---

@pytest.fixture(scope="module")
def client():
    """Create a test client for the UnAI API."""
    from api.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def use_llm():
    """Install a mock provider for one test."""
    from api.main import app, get_llm

    def _install(llm: LLMProvider) -> LLMProvider:
        app.dependency_overrides[get_llm] = lambda: llm
        return llm

    yield _install
    app.dependency_overrides.pop(get_llm, None)


# ============================================================
# HEALTH & META
# ============================================================

class TestHealth:

    def test_health_returns_200(self, client, use_llm):
        use_llm(MockLLM())
        r = client.get("/health")
        assert r.status_code == 200

    def test_health_fields(self, client, use_llm):
        from api.main import catalog
        use_llm(MockLLM(configured=False))
        data = client.get("/health").json()
        assert data["status"] == "operational"
        assert data["catalog_version"] == "1.0.0"
        assert data["catalog_patterns"] == len(catalog)
        assert data["llm_provider"] == "mock"
        assert data["llm_configured"] is False

    def test_root_returns_200(self, client):
        assert client.get("/").status_code == 200


# ============================================================
# DETECT (no LLM)
# ============================================================

class TestDetect:

    def test_single_pattern(self, client):
        r = client.post("/detect", json={"text": "值得注意的是，今天天气很好。"})
        assert r.status_code == 200
        data = r.json()
        assert data["text_length"] == 14
        assert data["patterns_found"] == 1
        assert data["patterns"][0]["id"] == "zh008"
        assert data["patterns"][0]["count"] == 1
        assert data["score"] == 100
        assert data["level"] == "high"

    def test_clean_text(self, client):
        data = client.post("/detect", json={"text": "今天下午三点开会。"}).json()
        assert data["score"] == 0
        assert data["level"] == "low"
        assert data["patterns"] == []

    def test_breakdown_included(self, client):
        data = client.post("/detect", json={"text": DEMO_EN}).json()
        assert data["score_breakdown"]["final_score"] == data["score"]
        assert data["catalog_version"] == "1.0.0"

    def test_empty_text_rejected(self, client):
        r = client.post("/detect", json={"text": ""})
        assert r.status_code == 422

    def test_missing_text_rejected(self, client):
        r = client.post("/detect", json={})
        assert r.status_code == 422

    def test_too_long_rejected(self, client):
        r = client.post("/detect", json={"text": "a" * 10001})
        assert r.status_code == 422

    def test_max_length_accepted(self, client):
        r = client.post("/detect", json={"text": "a" * 10000})
        assert r.status_code == 200

    def test_oversized_body(self, client):
        r = client.post(
            "/detect",
            content=b"x" * 1_048_577,
            headers={"content-type": "application/json"},
        )
        assert r.status_code == 413
        assert "1048576 bytes" in r.json()["detail"]

    def test_max_length_cjk_under_body_limit(self, client):
        r = client.post("/detect", json={"text": "字" * 10000})
        assert r.status_code == 200
        assert r.json()["text_length"] == 10000


# ============================================================
# REWRITE (mocked LLM)
# ============================================================

class TestRewrite:

    def test_rewrite_success(self, client, use_llm):
        use_llm(MockLLM(reply="AI writing has limits."))
        r = client.post("/rewrite", json={"text": DEMO_EN, "mode": "light"})
        assert r.status_code == 200
        data = r.json()
        assert data["original"] == DEMO_EN
        assert data["rewritten"] == "AI writing has limits."
        assert data["original_score"] > 0
        assert data["new_score"] == 0
        assert data["patterns_found"] >= 8
        assert data["patterns_remaining"] == 0
        assert data["mode"] == "light"
        assert data["fallback"] is False

    def test_default_mode_is_balanced(self, client, use_llm):
        llm = use_llm(MockLLM())
        data = client.post("/rewrite", json={"text": DEMO_ZH}).json()
        assert data["mode"] == "balanced"
        assert "Intensity: Balanced." in llm.calls[0]["system_instruction"]

    def test_mode_reaches_prompt(self, client, use_llm):
        llm = use_llm(MockLLM())
        client.post("/rewrite", json={"text": DEMO_ZH, "mode": "aggressive"})
        assert "Intensity: Aggressively rewrite." in llm.calls[0]["system_instruction"]

    def test_invalid_mode_rejected(self, client, use_llm):
        llm = use_llm(MockLLM())
        r = client.post("/rewrite", json={"text": DEMO_ZH, "mode": "extreme"})
        assert r.status_code == 422
        assert llm.calls == []

    def test_empty_text_rejected(self, client, use_llm):
        use_llm(MockLLM())
        r = client.post("/rewrite", json={"text": ""})
        assert r.status_code == 422

    def test_too_long_rejected(self, client, use_llm):
        llm = use_llm(MockLLM())
        r = client.post("/rewrite", json={"text": "字" * 10001})
        assert r.status_code == 422
        assert llm.calls == []

    def test_unconfigured_provider(self, client, use_llm):
        llm = use_llm(MockLLM(configured=False))
        r = client.post("/rewrite", json={"text": DEMO_EN})
        assert r.status_code == 500
        assert r.json()["detail"] == "API key not configured"
        assert llm.calls == []

    def test_llm_failure_falls_back(self, client, use_llm):
        use_llm(MockLLM(error=RuntimeError("upstream down")))
        r = client.post("/rewrite", json={"text": DEMO_ZH})
        assert r.status_code == 200
        data = r.json()
        assert data["rewritten"] == DEMO_ZH
        assert data["new_score"] == data["original_score"]
        assert data["fallback"] is True


# ============================================================
# PATTERNS & SAMPLES
# ============================================================

class TestPatterns:

    def test_list_all(self, client):
        from api.main import catalog
        data = client.get("/patterns").json()
        assert data["total_patterns"] == len(catalog)
        assert [p["id"] for p in data["patterns"]] == list(catalog.ids)

    def test_filter_language(self, client):
        data = client.get("/patterns", params={"language": "zh"}).json()
        assert data["total_patterns"] > 0
        assert all(p["language"] == "zh" for p in data["patterns"])

    def test_invalid_language(self, client):
        r = client.get("/patterns", params={"language": "fr"})
        assert r.status_code == 422

    def test_pattern_fields(self, client):
        p = client.get("/patterns").json()["patterns"][0]
        for key in ("id", "rule", "category", "language", "severity",
                    "description", "alternatives", "literal"):
            assert key in p


class TestSamples:

    def test_samples(self, client):
        data = client.get("/samples").json()
        assert data["samples"]["zh"] == DEMO_ZH
        assert data["samples"]["en"] == DEMO_EN

"""
UnAI API — Main Application

POST /rewrite   — Rewrite text through the LLM, with before/after scores
POST /detect    — Detect clichés and score text (no LLM)
GET  /patterns  — List catalog patterns
GET  /samples   — Demo texts
GET  /health    — Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from unai import __version__
from unai.config import settings
from unai.detector import detect_patterns
from unai.llm import LLMProvider
from unai.llm.factory import get_provider
from unai.logging import get_logger, setup_logging
from unai.patterns import CATALOG_VERSION, get_catalog
from unai.rewriter import rewrite_and_score
from unai.samples import SAMPLES
from unai.scorer import score_detections, score_level
from unai.schemas.rewrite import (
    DetectRequest,
    DetectResponse,
    HealthResponse,
    PatternsResponse,
    RewriteRequest,
    RewriteResponse,
)

logger = get_logger("api")

# Active catalog variant, fixed for the process lifetime
catalog = get_catalog(settings.CATALOG)


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "UnAI API starting",
        extra={"catalog": settings.CATALOG, "provider": settings.LLM_PROVIDER},
    )
    yield
    logger.info("UnAI API shutting down")


app = FastAPI(
    title="UnAI API",
    description="Detect and remove AI writing clichés in Chinese and English text",
    version=f"{__version__} (catalog {CATALOG_VERSION})",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Catch unhandled exceptions — structured error, no internals leaked."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The request could not be completed."},
    )


# Lazy LLM provider
_llm: LLMProvider | None = None


def get_llm() -> LLMProvider:
    """FastAPI dependency — the process-wide rewrite provider."""
    global _llm
    if _llm is None:
        _llm = get_provider(settings.LLM_PROVIDER)
    return _llm


# ============================================================
# ROUTES
# ============================================================

@app.get("/", include_in_schema=False)
async def root():
    return JSONResponse({"message": "UnAI API", "docs": "/docs"})


@app.post("/rewrite", response_model=RewriteResponse)
async def rewrite(
    request: RewriteRequest,
    llm: LLMProvider = Depends(get_llm),
):
    """Rewrite text to remove AI clichés and compare before/after scores."""
    if not llm.configured:
        logger.error(
            "Rewrite requested without provider credentials",
            extra={"provider": llm.name},
        )
        raise HTTPException(500, "API key not configured")

    return await rewrite_and_score(
        request.text, request.mode, llm=llm, catalog=catalog,
    )


@app.post("/detect", response_model=DetectResponse)
async def detect(request: DetectRequest):
    """Detect clichés and score text. Deterministic, no LLM call."""
    detections = detect_patterns(request.text, catalog)
    score, breakdown = score_detections(detections, len(request.text))

    logger.info(
        f"Detect complete: score={score}",
        extra={
            "score": score,
            "patterns_found": len(detections),
            "text_length": len(request.text),
        },
    )

    return {
        "text_length": len(request.text),
        "score": score,
        "level": score_level(score),
        "patterns_found": len(detections),
        "patterns": [d.to_dict() for d in detections],
        "score_breakdown": breakdown,
        "catalog_version": CATALOG_VERSION,
    }


@app.get("/patterns", response_model=PatternsResponse)
async def get_patterns(
    language: str = Query("all", pattern="^(all|zh|en|both)$"),
):
    """
    Return the active catalog, in catalog order.

    The language filter applies to this listing only; detection always
    evaluates every pattern.
    """
    patterns = catalog.describe(language=language)
    return {
        "catalog": settings.CATALOG,
        "catalog_version": CATALOG_VERSION,
        "language": language,
        "total_patterns": len(patterns),
        "patterns": patterns,
    }


@app.get("/samples")
async def get_samples():
    """Demo texts for trying the service."""
    return {"samples": SAMPLES}


@app.get("/health", response_model=HealthResponse)
async def health(llm: LLMProvider = Depends(get_llm)):
    """Health check."""
    return {
        "status": "operational",
        "version": __version__,
        "catalog_version": CATALOG_VERSION,
        "catalog": settings.CATALOG,
        "catalog_patterns": len(catalog),
        "llm_provider": llm.name,
        "llm_configured": llm.configured,
    }


# --- Body Size Limit Middleware ---
# Ceiling on raw request bytes. The text limit (UNAI_MAX_TEXT_LENGTH) is a
# character count checked later by the request schemas.
_MAX_BODY_BYTES = 1_048_576


def _body_too_large() -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={"detail": f"Request body exceeds {_MAX_BODY_BYTES} bytes."},
    )


@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """
    Refuse oversized /detect and /rewrite payloads before JSON parsing.

    10,000 CJK characters encode to about 30 KB of UTF-8, so 1 MB only
    stops abusive bodies, never a text the schemas would accept.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > _MAX_BODY_BYTES:
        return _body_too_large()

    if request.method == "POST" and len(await request.body()) > _MAX_BODY_BYTES:
        return _body_too_large()

    return await call_next(request)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    One log line per request. Health checks are skipped; rewrite scores
    are logged separately by the rewriter.
    """
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn
    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

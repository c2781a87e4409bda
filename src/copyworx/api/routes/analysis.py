"""AI analysis and rewrite endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ...analysis import (
    ANALYZE_DOCUMENT,
    BRAND_ALIGNMENT,
    EXPAND,
    OPTIMIZE_ALIGNMENT,
    PERSONA_ALIGNMENT,
    REWRITE_CHANNEL,
    SHORTEN,
    TONE_SHIFT,
    AnalysisPipeline,
    EndpointConfig,
)
from ...analysis.validation import decode_body
from ...config.dependencies import Dependencies
from ..dependencies import get_dependencies

router = APIRouter(prefix="/api", tags=["analysis"])


async def _run(config: EndpointConfig, request: Request, dependencies: Dependencies) -> Dict[str, Any]:
    body = decode_body(await request.body())
    return await AnalysisPipeline(config, dependencies).run(body)


@router.post("/analyze-document")
async def analyze_document(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Analyze copy for tone, brand alignment and persona alignment in one call."""
    return await _run(ANALYZE_DOCUMENT, request, dependencies)


@router.post("/brand-alignment")
async def brand_alignment(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Detailed check of copy against a brand voice."""
    return await _run(BRAND_ALIGNMENT, request, dependencies)


@router.post("/persona-alignment")
async def persona_alignment(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Detailed check of copy against a target persona."""
    return await _run(PERSONA_ALIGNMENT, request, dependencies)


@router.post("/tone-shift")
async def tone_shift(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Rewrite copy in a different tone."""
    return await _run(TONE_SHIFT, request, dependencies)


@router.post("/shorten")
async def shorten(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Cut copy to roughly half its length, keeping its structure."""
    return await _run(SHORTEN, request, dependencies)


@router.post("/expand")
async def expand(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Add detail, examples and benefits to copy."""
    return await _run(EXPAND, request, dependencies)


@router.post("/rewrite-channel")
async def rewrite_channel(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Adapt copy to one marketing channel's conventions."""
    return await _run(REWRITE_CHANNEL, request, dependencies)


@router.post("/optimize-alignment")
async def optimize_alignment(request: Request, dependencies: Dependencies = Depends(get_dependencies)):
    """Rewrite copy to fix the issues an alignment check found, with a change summary."""
    return await _run(OPTIMIZE_ALIGNMENT, request, dependencies)

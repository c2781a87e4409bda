"""AI analysis and rewrite request pipeline shared by the model-backed endpoints."""

from .endpoints import (
    ANALYZE_DOCUMENT,
    BRAND_ALIGNMENT,
    ENDPOINTS,
    EXPAND,
    OPTIMIZE_ALIGNMENT,
    PERSONA_ALIGNMENT,
    REWRITE_CHANNEL,
    SHORTEN,
    TONE_SHIFT,
)
from .pipeline import AnalysisPipeline, EndpointConfig

__all__ = [
    "ANALYZE_DOCUMENT",
    "AnalysisPipeline",
    "BRAND_ALIGNMENT",
    "ENDPOINTS",
    "EXPAND",
    "EndpointConfig",
    "OPTIMIZE_ALIGNMENT",
    "PERSONA_ALIGNMENT",
    "REWRITE_CHANNEL",
    "SHORTEN",
    "TONE_SHIFT",
]

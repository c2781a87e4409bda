"""Models package for the CopyWorx service."""

from .brand import BrandVoice, Persona
from .analysis import (
    AlignmentContext,
    AlignmentJudgment,
    BrandAlignmentRequest,
    BrandAlignmentResult,
    ChannelRewriteRequest,
    DocumentAnalysis,
    DocumentAnalysisRequest,
    OptimizationResult,
    OptimizeAlignmentRequest,
    PersonaAlignmentRequest,
    PersonaAlignmentResult,
    RewriteRequest,
    RewriteResult,
    ToneJudgment,
    ToneShiftRequest,
)
from .records import BrandVoiceRecord, PersonaCreate, PersonaUpdate

__all__ = [
    "AlignmentContext",
    "AlignmentJudgment",
    "BrandAlignmentRequest",
    "BrandAlignmentResult",
    "BrandVoice",
    "BrandVoiceRecord",
    "ChannelRewriteRequest",
    "DocumentAnalysis",
    "DocumentAnalysisRequest",
    "OptimizationResult",
    "OptimizeAlignmentRequest",
    "Persona",
    "PersonaAlignmentRequest",
    "PersonaAlignmentResult",
    "PersonaCreate",
    "PersonaUpdate",
    "RewriteRequest",
    "RewriteResult",
    "ToneJudgment",
    "ToneShiftRequest",
]

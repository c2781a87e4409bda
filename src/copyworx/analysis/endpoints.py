"""Pipeline configurations for each analysis and rewrite endpoint."""

from typing import Any, Dict

from ..models.analysis import (
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
    ToneShiftRequest,
)
from . import parsing, prompts, rewrite_prompts, validation
from .pipeline import EndpointConfig
from .summary import summarize_changes


def _document_body(result: DocumentAnalysis, request: DocumentAnalysisRequest) -> Dict[str, Any]:
    return result.to_response()


def _brand_body(result: BrandAlignmentResult, request: BrandAlignmentRequest) -> Dict[str, Any]:
    return {
        "result": result.to_response(),
        "textLength": len(request.text),
        "brandName": request.brand_voice.brand_name,
    }


def _persona_body(result: PersonaAlignmentResult, request: PersonaAlignmentRequest) -> Dict[str, Any]:
    return {
        "result": result.to_response(),
        "textLength": len(request.text),
        "personaName": request.persona.name,
    }


def _rewrite_body(result: RewriteResult, request: Any, key: str = "rewrittenText") -> Dict[str, Any]:
    return {
        key: result.rewritten_text,
        "originalLength": len(request.text),
        "newLength": len(result.rewritten_text),
    }


def _shorten_body(result: RewriteResult, request: RewriteRequest) -> Dict[str, Any]:
    return _rewrite_body(result, request, key="shortenedText")


def _expand_body(result: RewriteResult, request: RewriteRequest) -> Dict[str, Any]:
    return _rewrite_body(result, request, key="expandedText")


def _channel_body(result: RewriteResult, request: ChannelRewriteRequest) -> Dict[str, Any]:
    return {**_rewrite_body(result, request), "channel": request.channel}


def _optimization_body(result: OptimizationResult, request: OptimizeAlignmentRequest) -> Dict[str, Any]:
    return {
        "rewrittenText": result.rewritten_text,
        "changesSummary": result.changes_summary,
        "originalLength": len(request.text),
        "newLength": len(result.rewritten_text),
        "targetName": request.target_name,
    }


ANALYZE_DOCUMENT: EndpointConfig[DocumentAnalysisRequest, DocumentAnalysis] = EndpointConfig(
    name="analyze-document",
    timeout_seconds=20,
    max_tokens=1000,
    system_prompt=prompts.DOCUMENT_ANALYSIS_SYSTEM_PROMPT,
    validate=validation.validate_document_analysis,
    build_prompt=prompts.build_document_analysis_prompt,
    parse_response=parsing.parse_document_analysis,
    shape_result=_document_body,
    temperature=0.2,
)

BRAND_ALIGNMENT: EndpointConfig[BrandAlignmentRequest, BrandAlignmentResult] = EndpointConfig(
    name="brand-alignment",
    timeout_seconds=30,
    max_tokens=4000,
    system_prompt=prompts.BRAND_ALIGNMENT_SYSTEM_PROMPT,
    validate=validation.validate_brand_alignment,
    build_prompt=prompts.build_brand_alignment_prompt,
    parse_response=parsing.parse_brand_alignment,
    shape_result=_brand_body,
    temperature=0.2,
)

PERSONA_ALIGNMENT: EndpointConfig[PersonaAlignmentRequest, PersonaAlignmentResult] = EndpointConfig(
    name="persona-alignment",
    timeout_seconds=30,
    max_tokens=4000,
    system_prompt=prompts.PERSONA_ALIGNMENT_SYSTEM_PROMPT,
    validate=validation.validate_persona_alignment,
    build_prompt=prompts.build_persona_alignment_prompt,
    parse_response=parsing.parse_persona_alignment,
    shape_result=_persona_body,
    temperature=0.2,
)

TONE_SHIFT: EndpointConfig[ToneShiftRequest, RewriteResult] = EndpointConfig(
    name="tone-shift",
    timeout_seconds=30,
    max_tokens=4000,
    system_prompt=prompts.TONE_SHIFT_SYSTEM_PROMPT,
    validate=validation.validate_tone_shift,
    build_prompt=prompts.build_tone_shift_prompt,
    parse_response=parsing.parse_rewrite,
    shape_result=_rewrite_body,
)

SHORTEN: EndpointConfig[RewriteRequest, RewriteResult] = EndpointConfig(
    name="shorten",
    timeout_seconds=30,
    max_tokens=4000,
    system_prompt=rewrite_prompts.SHORTEN_SYSTEM_PROMPT,
    validate=validation.validate_shorten,
    build_prompt=rewrite_prompts.build_shorten_prompt,
    parse_response=parsing.parse_rewrite,
    shape_result=_shorten_body,
)

EXPAND: EndpointConfig[RewriteRequest, RewriteResult] = EndpointConfig(
    name="expand",
    timeout_seconds=30,
    max_tokens=4000,
    system_prompt=rewrite_prompts.EXPAND_SYSTEM_PROMPT,
    validate=validation.validate_expand,
    build_prompt=rewrite_prompts.build_expand_prompt,
    parse_response=parsing.parse_rewrite,
    shape_result=_expand_body,
)

REWRITE_CHANNEL: EndpointConfig[ChannelRewriteRequest, RewriteResult] = EndpointConfig(
    name="rewrite-channel",
    timeout_seconds=30,
    max_tokens=4000,
    system_prompt=rewrite_prompts.CHANNEL_SYSTEM_PROMPT,
    validate=validation.validate_channel_rewrite,
    build_prompt=rewrite_prompts.build_channel_rewrite_prompt,
    parse_response=parsing.parse_rewrite,
    shape_result=_channel_body,
)

OPTIMIZE_ALIGNMENT: EndpointConfig[OptimizeAlignmentRequest, OptimizationResult] = EndpointConfig(
    name="optimize-alignment",
    timeout_seconds=45,
    max_tokens=4000,
    system_prompt=rewrite_prompts.optimization_system_prompt,
    validate=validation.validate_optimize_alignment,
    build_prompt=rewrite_prompts.build_optimization_prompt,
    parse_response=parsing.parse_optimization,
    shape_result=_optimization_body,
    followup=summarize_changes,
)

ENDPOINTS = {
    config.name: config
    for config in (
        ANALYZE_DOCUMENT,
        BRAND_ALIGNMENT,
        PERSONA_ALIGNMENT,
        TONE_SHIFT,
        SHORTEN,
        EXPAND,
        REWRITE_CHANNEL,
        OPTIMIZE_ALIGNMENT,
    )
}

"""
Parsing and coercion of model responses.

The model is prompted, not guaranteed, to follow the schema, so parsing is
lenient: scores are clamped into range, long strings are cut, missing lists
become empty lists. Only an unparseable payload is an error.
"""

from typing import Any, Dict, List, Optional, Union

from ..config.settings import Settings
from ..exceptions import MalformedUpstreamResponse
from ..models.analysis import (
    AlignmentJudgment,
    BrandAlignmentRequest,
    BrandAlignmentResult,
    DocumentAnalysis,
    DocumentAnalysisRequest,
    OptimizationResult,
    OptimizeAlignmentRequest,
    PersonaAlignmentRequest,
    PersonaAlignmentResult,
    RewriteResult,
    ToneJudgment,
)
from ..utils.json_parser import parse_llm_json, strip_code_fences
from ..utils.logging import get_logger
from .prompts import TONE_LABELS

logger = get_logger(__name__)

Number = Union[int, float]

SCORE_RANGE = (1, 10)
CONFIDENCE_RANGE = (0, 100)

_TONE_LOOKUP = {label.lower(): label for label in TONE_LABELS}


def load_json_object(text: str) -> Dict[str, Any]:
    """Parse the model's text as a JSON object, tolerating a code fence."""
    if not text or not text.strip():
        raise MalformedUpstreamResponse("The AI service returned an empty response. Please try again.")
    try:
        payload = parse_llm_json(text)
    except ValueError:
        logger.error("Failed to parse model response", response_length=len(text))
        raise MalformedUpstreamResponse()
    if not isinstance(payload, dict):
        logger.error("Model response is not a JSON object", payload_type=type(payload).__name__)
        raise MalformedUpstreamResponse()
    return payload


def as_number(value: Any) -> Optional[Number]:
    """Return ``value`` as a number, accepting numeric strings; None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if value == value else None  # NaN
    if isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
        if number != number:
            return None
        return int(number) if number.is_integer() else number
    return None


def clamp(value: Number, low: Number, high: Number) -> Number:
    return min(high, max(low, value))


def truncate(value: Any, limit: int) -> str:
    if not isinstance(value, str):
        return ""
    return value[:limit]


def string_list(value: Any) -> List[str]:
    """Coerce a list field, defaulting to an empty list and dropping non-string items."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _tone(raw: Any) -> Optional[ToneJudgment]:
    if not isinstance(raw, dict) or not isinstance(raw.get("label"), str):
        return None
    confidence = as_number(raw.get("confidence"))
    if confidence is None:
        return None
    label = _TONE_LOOKUP.get(raw["label"].strip().lower())
    if label is None:
        logger.warning("Dropping tone outside the known vocabulary", label=raw["label"][:50])
        return None
    return ToneJudgment(label=label, confidence=clamp(confidence, *CONFIDENCE_RANGE))


def _alignment(raw: Any, settings: Settings) -> Optional[AlignmentJudgment]:
    if not isinstance(raw, dict):
        return None
    score = as_number(raw.get("score"))
    if score is None:
        return None
    return AlignmentJudgment(
        score=clamp(score, *SCORE_RANGE),
        feedback=truncate(raw.get("feedback"), settings.feedback_max_chars),
    )


def parse_document_analysis(
    text: str, request: DocumentAnalysisRequest, settings: Settings
) -> DocumentAnalysis:
    """Parse the combined analysis, keeping only judgments for active metrics."""
    payload = load_json_object(text)
    result = DocumentAnalysis()
    if "tone" in request.metrics:
        result.tone = _tone(payload.get("tone"))
    if "brand" in request.metrics:
        result.brand_alignment = _alignment(payload.get("brandAlignment"), settings)
    if "persona" in request.metrics:
        result.persona_alignment = _alignment(payload.get("personaAlignment"), settings)
    return result


def _required_score(payload: Dict[str, Any]) -> Number:
    score = as_number(payload.get("score"))
    if score is None:
        logger.error("Model response has no numeric score")
        raise MalformedUpstreamResponse()
    return clamp(score, *SCORE_RANGE)


def parse_brand_alignment(
    text: str, request: BrandAlignmentRequest, settings: Settings
) -> BrandAlignmentResult:
    payload = load_json_object(text)
    return BrandAlignmentResult(
        score=_required_score(payload),
        assessment=truncate(payload.get("assessment"), settings.feedback_max_chars),
        matches=string_list(payload.get("matches")),
        violations=string_list(payload.get("violations")),
        recommendations=string_list(payload.get("recommendations")),
    )


def parse_persona_alignment(
    text: str, request: PersonaAlignmentRequest, settings: Settings
) -> PersonaAlignmentResult:
    payload = load_json_object(text)
    return PersonaAlignmentResult(
        score=_required_score(payload),
        assessment=truncate(payload.get("assessment"), settings.feedback_max_chars),
        strengths=string_list(payload.get("strengths")),
        improvements=string_list(payload.get("improvements")),
        recommendations=string_list(payload.get("recommendations")),
    )


def parse_rewrite(text: str, request: Any, settings: Settings) -> RewriteResult:
    """Take the model's HTML as the rewritten copy, minus any code fence."""
    rewritten = strip_code_fences(text)
    if not rewritten:
        raise MalformedUpstreamResponse("The AI service returned an empty response. Please try again.")
    return RewriteResult(rewritten_text=rewritten)


def parse_optimization(
    text: str, request: OptimizeAlignmentRequest, settings: Settings
) -> OptimizationResult:
    rewritten = parse_rewrite(text, request, settings).rewritten_text
    return OptimizationResult(rewritten_text=rewritten)


def parse_changes_summary(text: str) -> List[str]:
    """Read the JSON array of change descriptions; empty when there is none."""
    try:
        payload = parse_llm_json(text or "")
    except ValueError:
        logger.warning("Changes summary is not valid JSON", response_length=len(text or ""))
        return []
    return string_list(payload)

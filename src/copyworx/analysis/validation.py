"""
Input validation for the analysis endpoints.

Validators take the decoded JSON body and either return a typed request or
raise ``InvalidInput`` with a message that names the failing field. Metrics
whose configuration object is missing or unusable are dropped rather than
rejected.
"""

import json
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config.settings import Settings
from ..exceptions import InvalidInput
from ..models.analysis import (
    BrandAlignmentRequest,
    DocumentAnalysisRequest,
    PersonaAlignmentRequest,
    AlignmentContext,
    ChannelRewriteRequest,
    OptimizeAlignmentRequest,
    RewriteRequest,
    ToneShiftRequest,
)
from ..models.brand import BrandVoice, Persona
from ..utils.logging import get_logger
from .prompts import VALID_METRICS, VALID_TONES
from .rewrite_prompts import OPTIMIZATION_TARGETS, VALID_CHANNELS

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def decode_body(raw: bytes) -> Any:
    """Decode a raw request body, rejecting anything that is not JSON."""
    try:
        return json.loads(raw)
    except ValueError:
        raise InvalidInput(
            "Please send a valid JSON request body",
            error="Invalid JSON in request body",
        )


def _require_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise InvalidInput(
            "The request body must be a JSON object",
            error="Invalid JSON in request body",
        )
    return body


def validate_text(
    value: Any,
    settings: Settings,
    field_name: str = "text",
    label: str = "Text",
    purpose: str = "analyze",
) -> str:
    """Check that a text payload is a non-empty string within the length limit."""
    if not isinstance(value, str) or not value:
        raise InvalidInput(
            f'Please provide the copy to {purpose} as a string in the "{field_name}" field',
            error=f'Missing or invalid "{field_name}" field',
        )
    if not value.strip():
        raise InvalidInput(f"{label} cannot be empty.", error=f"Empty {field_name}")
    if len(value) > settings.max_text_length:
        raise InvalidInput(
            f"{label} exceeds maximum length of {settings.max_text_length:,} characters. "
            f"Current length: {len(value):,} characters. "
            "Please shorten your text and try again.",
            error=f"Invalid {field_name}",
        )
    return value


def _validate_config(model: Type[M], value: Any, field_name: str, error: str) -> M:
    if not isinstance(value, dict):
        raise InvalidInput(
            f'Please provide the "{field_name}" configuration as an object',
            error=f'Missing or invalid "{field_name}" field',
        )
    try:
        return model.model_validate(value)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or field_name
        raise InvalidInput(f"{field_name}.{location}: {first['msg']}", error=error)


def _active_metrics(requested: Any) -> List[str]:
    if not isinstance(requested, list) or not requested:
        raise InvalidInput(
            "Please specify which metrics to analyze",
            error="Missing metrics",
        )
    metrics: List[str] = []
    for metric in requested:
        if metric in VALID_METRICS and metric not in metrics:
            metrics.append(metric)
    if not metrics:
        raise InvalidInput(
            f"Valid metrics are: {', '.join(VALID_METRICS)}",
            error="Invalid metrics",
        )
    return metrics


def _config_or_none(model: Type[M], value: Any, field_name: str) -> Optional[M]:
    if not isinstance(value, dict):
        return None
    try:
        return model.model_validate(value)
    except ValidationError as e:
        logger.warning(
            "Ignoring unusable configuration",
            field=field_name,
            errors=e.error_count(),
        )
        return None


def validate_document_analysis(body: Any, settings: Settings) -> DocumentAnalysisRequest:
    """Validate an analyze-document body.

    A brand voice or persona is only parsed when its metric was requested. An
    absent or unusable one drops that metric, so the returned request may have
    no active metrics; that is a valid empty analysis.
    """
    body = _require_object(body)
    content = validate_text(body.get("content"), settings, field_name="content", label="Content")
    metrics = _active_metrics(body.get("metricsToAnalyze"))

    brand_voice = None
    if "brand" in metrics:
        brand_voice = _config_or_none(BrandVoice, body.get("brandVoice"), "brandVoice")
        if brand_voice is None:
            metrics.remove("brand")

    persona = None
    if "persona" in metrics:
        persona = _config_or_none(Persona, body.get("persona"), "persona")
        if persona is None:
            metrics.remove("persona")

    return DocumentAnalysisRequest(
        content=content,
        metrics=tuple(metrics),
        brand_voice=brand_voice,
        persona=persona,
    )


def validate_brand_alignment(body: Any, settings: Settings) -> BrandAlignmentRequest:
    body = _require_object(body)
    text = validate_text(body.get("text"), settings)
    brand_voice = _validate_config(BrandVoice, body.get("brandVoice"), "brandVoice", "Invalid brand voice")
    return BrandAlignmentRequest(text=text, brand_voice=brand_voice)


def validate_persona_alignment(body: Any, settings: Settings) -> PersonaAlignmentRequest:
    body = _require_object(body)
    text = validate_text(body.get("text"), settings)
    persona = _validate_config(Persona, body.get("persona"), "persona", "Invalid persona")
    return PersonaAlignmentRequest(text=text, persona=persona)


def validate_tone_shift(body: Any, settings: Settings) -> ToneShiftRequest:
    body = _require_object(body)
    text = validate_text(body.get("text"), settings)
    tone = body.get("tone")
    if not isinstance(tone, str) or not tone:
        raise InvalidInput(
            f"Please provide a tone as one of: {', '.join(VALID_TONES)}",
            error='Missing or invalid "tone" field',
        )
    if tone not in VALID_TONES:
        raise InvalidInput(
            f'Tone must be one of: {", ".join(VALID_TONES)}. Received: "{tone}"',
            error="Invalid tone value",
        )
    return ToneShiftRequest(text=text, tone=tone)


def validate_shorten(body: Any, settings: Settings) -> RewriteRequest:
    body = _require_object(body)
    return RewriteRequest(text=validate_text(body.get("text"), settings, purpose="shorten"))


def validate_expand(body: Any, settings: Settings) -> RewriteRequest:
    body = _require_object(body)
    return RewriteRequest(text=validate_text(body.get("text"), settings, purpose="expand"))


def validate_channel_rewrite(body: Any, settings: Settings) -> ChannelRewriteRequest:
    body = _require_object(body)
    text = validate_text(body.get("text"), settings, purpose="rewrite")
    channel = body.get("channel")
    if not isinstance(channel, str) or not channel:
        raise InvalidInput(
            f"Please provide a channel as one of: {', '.join(VALID_CHANNELS)}",
            error='Missing or invalid "channel" field',
        )
    if channel not in VALID_CHANNELS:
        raise InvalidInput(
            f'Channel must be one of: {", ".join(VALID_CHANNELS)}. Received: "{channel}"',
            error="Invalid channel value",
        )
    return ChannelRewriteRequest(text=text, channel=channel)


def _optimization_target(model: Type[M], value: Any, field_name: str, target: str, details: str) -> M:
    error = f'Missing "{field_name}" for {target} optimization'
    if not isinstance(value, dict):
        raise InvalidInput(details, error=error)
    return _validate_config(model, value, field_name, error)


def validate_optimize_alignment(body: Any, settings: Settings) -> OptimizeAlignmentRequest:
    """Validate an optimize-alignment body.

    ``type`` picks the target: ``personaContext`` is required for a persona
    optimization and ``brandContext`` for a brand one. The other is ignored.
    """
    body = _require_object(body)
    text = validate_text(body.get("text"), settings, purpose="optimize")
    target = body.get("type")
    if not isinstance(target, str) or target not in OPTIMIZATION_TARGETS:
        raise InvalidInput('Type must be "persona" or "brand"', error='Missing or invalid "type" field')
    analysis = _validate_config(
        AlignmentContext, body.get("analysisContext"), "analysisContext", "Invalid analysis context"
    )

    if target == "persona":
        persona = _optimization_target(
            Persona, body.get("personaContext"), "personaContext", target, "Please provide persona details"
        )
        return OptimizeAlignmentRequest(text=text, target=target, analysis=analysis, persona=persona)

    brand_voice = _optimization_target(
        BrandVoice, body.get("brandContext"), "brandContext", target, "Please provide brand voice details"
    )
    return OptimizeAlignmentRequest(text=text, target=target, analysis=analysis, brand_voice=brand_voice)

"""
Prompt composition for the analysis endpoints.

All builders are pure: the same request always yields the same prompt string.
Each analysis prompt ends with the literal JSON schema the model must emit and
a directive to return nothing but that JSON.
"""

from typing import Dict, List

from ..config.settings import Settings
from ..models.analysis import (
    BrandAlignmentRequest,
    DocumentAnalysisRequest,
    PersonaAlignmentRequest,
    ToneShiftRequest,
)
from ..models.brand import BrandVoice, Persona

VALID_METRICS = ("tone", "brand", "persona")

TONE_LABELS = (
    "Professional",
    "Casual",
    "Urgent",
    "Friendly",
    "Technical",
    "Playful",
    "Persuasive",
    "Informative",
    "Emotional",
    "Formal",
)

VALID_TONES = ("professional", "casual", "urgent", "friendly", "techy", "playful")

TRUNCATION_MARKER = "\n[Content truncated...]"
NOT_SPECIFIED = "Not specified"

DOCUMENT_ANALYSIS_SYSTEM_PROMPT = """You are an expert copywriter and content analyst. Your job is to analyze copy and provide structured feedback.

You will be asked to analyze text for one or more of the following:
1. TONE: Identify the primary tone/voice of the writing
2. BRAND ALIGNMENT: How well the copy aligns with a given brand voice
3. PERSONA ALIGNMENT: How well the copy resonates with a target persona

Always respond with valid JSON only. No markdown, no explanations outside the JSON."""

BRAND_ALIGNMENT_SYSTEM_PROMPT = """You are an expert brand voice analyst. Your job is to analyze copy and assess how well it aligns with a given brand voice.

When analyzing:
- Check for tone consistency with brand guidelines
- Identify usage of approved phrases
- Flag any forbidden words or phrases
- Assess alignment with brand values
- Consider mission statement alignment
- Provide specific, actionable recommendations

Be thorough, objective, and provide constructive feedback. Respond with valid JSON only."""

PERSONA_ALIGNMENT_SYSTEM_PROMPT = """You are an expert copywriter and audience analyst. Your job is to analyze copy and assess how well it resonates with a target persona.

When analyzing:
- Consider if the language matches the persona's demographics and communication style
- Check if the copy addresses the persona's pain points
- Assess if the copy speaks to the persona's goals and aspirations
- Evaluate if the psychographic profile would find this copy compelling
- Consider the emotional resonance with the target audience
- Provide specific, actionable recommendations

Be thorough, objective, and provide constructive feedback. Respond with valid JSON only."""

TONE_SHIFT_SYSTEM_PROMPT = """You are an expert copywriter. Your job is to rewrite copy to match a specific tone while preserving the core message, structure, and formatting.

Output valid HTML that preserves the original structure while changing the tone.
Use ONLY these tags: <h2>, <h3>, <p>, <ul>, <li>, <strong>, <em>, <br>.

Rules:
1. Headings stay headings and bullets stay bullets
2. Change only the tone, voice and word choice, not the structure
3. Keep the length roughly similar (within 20%)
4. Do not add new information or claims not in the original
5. Write tags consecutively with no blank lines between them

Return ONLY the HTML content, no markdown, explanations or preamble."""

TONE_DESCRIPTIONS: Dict[str, str] = {
    "professional": "Professional tone: formal, polished, business-appropriate, authoritative",
    "casual": "Casual tone: conversational, friendly, relaxed, approachable",
    "urgent": "Urgent tone: time-sensitive, compelling, action-oriented, creates FOMO",
    "friendly": "Friendly tone: warm, personable, welcoming, builds rapport",
    "techy": (
        "Technical, precise tone: technical terminology where appropriate, specific metrics "
        "and data points, clear and accurate language. Avoid jargon for jargon's sake."
    ),
    "playful": (
        "Playful, fun tone: energetic, upbeat language, light humor where appropriate, "
        "creative analogies. Avoid forced humor and never lose the core message."
    ),
}


def _joined(values: List[str], limit: int = 5) -> str:
    selected = [value for value in values[:limit] if value]
    return ", ".join(selected) or NOT_SPECIFIED


def _bulleted(title: str, values: List[str]) -> str:
    if not values:
        return ""
    return f"{title}:\n" + "\n".join(f"- {value}" for value in values)


def truncate_content(content: str, limit: int) -> str:
    """Cut content to ``limit`` characters, appending a visible marker if anything was cut."""
    if len(content) <= limit:
        return content
    return content[:limit] + TRUNCATION_MARKER


def _brand_task(brand_voice: BrandVoice) -> str:
    return f"""2. BRAND VOICE ALIGNMENT: Evaluate how well this copy aligns with the following brand voice:
- Brand: {brand_voice.brand_name}
- Tone: {brand_voice.brand_tone or NOT_SPECIFIED}
- Values: {_joined(brand_voice.brand_values, limit=len(brand_voice.brand_values))}
- Approved phrases: {_joined(brand_voice.approved_phrases)}
- Words to avoid: {_joined(brand_voice.forbidden_words)}
- Mission: {brand_voice.mission_statement or NOT_SPECIFIED}

Score 1-10 where 10 is perfect alignment. Provide brief feedback (max 50 words)."""


def _persona_task(persona: Persona) -> str:
    return f"""3. PERSONA ALIGNMENT: Evaluate how well this copy resonates with the target persona:
- Name: {persona.name}
- Demographics: {persona.demographics or NOT_SPECIFIED}
- Psychographics: {persona.psychographics or NOT_SPECIFIED}
- Pain Points: {persona.pain_points or NOT_SPECIFIED}
- Goals: {persona.goals or NOT_SPECIFIED}

Score 1-10 where 10 means the copy perfectly addresses this persona's needs. Provide brief feedback (max 50 words)."""


def build_document_analysis_prompt(request: DocumentAnalysisRequest, settings: Settings) -> str:
    """Compose the combined tone/brand/persona prompt.

    Returns an empty string when no metric is active, meaning there is nothing
    to ask the model.
    """
    tasks: List[str] = []
    response_format: List[str] = []

    if "tone" in request.metrics:
        tasks.append(
            "1. TONE DETECTION: Identify the primary tone of this copy from these options: "
            f"{', '.join(TONE_LABELS)}. Provide a confidence percentage (0-100)."
        )
        response_format.append('"tone": { "label": "Primary Tone", "confidence": 85 }')

    if "brand" in request.metrics and request.brand_voice is not None:
        tasks.append(_brand_task(request.brand_voice))
        response_format.append('"brandAlignment": { "score": 8, "feedback": "Brief feedback here" }')

    if "persona" in request.metrics and request.persona is not None:
        tasks.append(_persona_task(request.persona))
        response_format.append('"personaAlignment": { "score": 7, "feedback": "Brief feedback here" }')

    if not tasks:
        return ""

    content = truncate_content(request.content, settings.analysis_truncate_chars)
    tasks_text = "\n\n".join(tasks)
    format_text = ",\n  ".join(response_format)

    return f"""Analyze the following copy:

---
{content}
---

Tasks:
{tasks_text}

Respond with ONLY valid JSON in this exact format:
{{
  {format_text}
}}"""


def _sections(*parts: str) -> str:
    return "\n\n".join(part for part in parts if part)


def build_brand_alignment_prompt(request: BrandAlignmentRequest, settings: Settings) -> str:
    brand_voice = request.brand_voice
    guidelines = _sections(
        "BRAND VOICE GUIDELINES:\n"
        f"Brand Name: {brand_voice.brand_name}\n"
        f"Tone: {brand_voice.brand_tone or NOT_SPECIFIED}\n"
        f"Mission: {brand_voice.mission_statement or NOT_SPECIFIED}",
        _bulleted("Brand Values", brand_voice.brand_values),
        _bulleted("Approved Phrases", brand_voice.approved_phrases),
        _bulleted("Forbidden Words/Phrases", brand_voice.forbidden_words),
    )

    return f"""Analyze the following copy for brand voice alignment.

{guidelines}

COPY TO ANALYZE:
{request.text}

Please provide your analysis in the following JSON format:
{{
  "score": [1-10 numeric score where 10 is perfect alignment],
  "assessment": "[overall assessment in 1-2 sentences]",
  "matches": ["list", "of", "things", "that", "match", "brand", "voice"],
  "violations": ["list", "of", "things", "that", "violate", "brand", "voice"],
  "recommendations": ["specific", "actionable", "recommendations"]
}}

Return ONLY the JSON object, no other text."""


def build_persona_alignment_prompt(request: PersonaAlignmentRequest, settings: Settings) -> str:
    persona = request.persona
    profile_lines = [f"Name: {persona.name}"]
    for label, value in (
        ("Demographics", persona.demographics),
        ("Psychographics", persona.psychographics),
        ("Pain Points", persona.pain_points),
        ("Language Patterns", persona.language_patterns),
        ("Goals", persona.goals),
    ):
        if value:
            profile_lines.append(f"{label}: {value}")
    profile = "\n".join(profile_lines)

    return f"""Analyze the following copy for persona alignment.

TARGET PERSONA:
{profile}

COPY TO ANALYZE:
{request.text}

Please provide your analysis in the following JSON format:
{{
  "score": [1-10 numeric score where 10 means the copy perfectly fits the persona],
  "assessment": "[overall assessment in 1-2 sentences explaining how well this copy would resonate with the persona]",
  "strengths": ["list", "of", "things", "that", "work", "well", "for", "this", "persona"],
  "improvements": ["list", "of", "areas", "that", "don't", "quite", "fit", "the", "persona"],
  "recommendations": ["specific", "actionable", "recommendations", "to", "better", "reach", "this", "persona"]
}}

Return ONLY the JSON object, no other text."""


def build_tone_shift_prompt(request: ToneShiftRequest, settings: Settings) -> str:
    return f"""Rewrite the following copy in a {request.tone} tone while preserving its structure.

TARGET TONE: {TONE_DESCRIPTIONS[request.tone]}

ORIGINAL COPY:
{request.text}

REWRITTEN COPY (HTML only):"""

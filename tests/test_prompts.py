from copyworx.analysis.prompts import (
    TRUNCATION_MARKER,
    build_brand_alignment_prompt,
    build_document_analysis_prompt,
    build_persona_alignment_prompt,
    build_tone_shift_prompt,
)
from copyworx.models import (
    BrandAlignmentRequest,
    BrandVoice,
    DocumentAnalysisRequest,
    Persona,
    PersonaAlignmentRequest,
    ToneShiftRequest,
)


def _request(**overrides):
    values = {
        "content": "Our new blender crushes ice in seconds.",
        "metrics": ("tone", "brand", "persona"),
        "brand_voice": BrandVoice(
            brand_name="Acme",
            brand_tone="Bold",
            forbidden_words=["cheap"],
            brand_values=["Quality", "Speed"],
        ),
        "persona": Persona(name="Dana", pain_points="No time"),
    }
    values.update(overrides)
    return DocumentAnalysisRequest(**values)


def test_document_prompt_is_deterministic(settings):
    assert build_document_analysis_prompt(_request(), settings) == build_document_analysis_prompt(_request(), settings)


def test_document_prompt_lists_each_active_task(settings):
    prompt = build_document_analysis_prompt(_request(), settings)

    assert "TONE DETECTION" in prompt
    assert "- Brand: Acme" in prompt
    assert "- Words to avoid: cheap" in prompt
    assert "- Pain Points: No time" in prompt
    assert '"personaAlignment"' in prompt
    assert prompt.rstrip().endswith("}")


def test_document_prompt_skips_inactive_tasks(settings):
    prompt = build_document_analysis_prompt(_request(metrics=("tone",)), settings)

    assert "TONE DETECTION" in prompt
    assert "BRAND VOICE ALIGNMENT" not in prompt
    assert '"brandAlignment"' not in prompt


def test_document_prompt_is_empty_without_metrics(settings):
    assert build_document_analysis_prompt(_request(metrics=()), settings) == ""


def test_long_content_is_truncated_with_marker(settings):
    prompt = build_document_analysis_prompt(_request(content="a" * 5000), settings)

    assert "a" * 3000 + TRUNCATION_MARKER in prompt
    assert "a" * 3001 not in prompt


def test_brand_alignment_prompt_includes_guidelines(settings):
    request = BrandAlignmentRequest(
        text="Buy now!",
        brand_voice=BrandVoice(brand_name="Acme", forbidden_words=["buy now"], approved_phrases=["Crafted"]),
    )

    prompt = build_brand_alignment_prompt(request, settings)

    assert "Brand Name: Acme" in prompt
    assert "Forbidden Words/Phrases:\n- buy now" in prompt
    assert "Approved Phrases:\n- Crafted" in prompt
    assert "Brand Values" not in prompt
    assert "COPY TO ANALYZE:\nBuy now!" in prompt


def test_persona_prompt_omits_empty_fields(settings):
    request = PersonaAlignmentRequest(text="Hello", persona=Persona(name="Dana", goals="Save time"))

    prompt = build_persona_alignment_prompt(request, settings)

    assert "Name: Dana\nGoals: Save time" in prompt
    assert "Demographics" not in prompt


def test_tone_shift_prompt_describes_target_tone(settings):
    prompt = build_tone_shift_prompt(ToneShiftRequest(text="<p>Hi</p>", tone="urgent"), settings)

    assert "TARGET TONE: Urgent tone" in prompt
    assert "<p>Hi</p>" in prompt

"""
Prompt composition for the rewrite endpoints.

Rewrites come back as HTML restricted to a small tag set, keeping the
structure of the original copy. Builders are pure, like the analysis ones.
"""

from typing import Dict, List, Optional, Union

from ..config.settings import Settings
from ..models.analysis import ChannelRewriteRequest, OptimizeAlignmentRequest, RewriteRequest

VALID_CHANNELS = ("linkedin", "twitter", "instagram", "facebook", "email")
OPTIMIZATION_TARGETS = ("persona", "brand")
NONE_IDENTIFIED = "• None identified"

_HTML_FORMAT = """CRITICAL OUTPUT FORMAT:
You must output valid HTML that preserves the original structure while {action}.
Use only these tags:
- <h2> or <h3> for headings and subject lines
- <p> for paragraphs
- <ul> and <li> for bullet lists
- <strong> for bold emphasis
- <em> for italic emphasis"""

SHORTEN_SYSTEM_PROMPT = f"""You are an expert copywriter with 40 years of experience. Your job is to AGGRESSIVELY shorten copy by cutting it to approximately 40-50% of its original length while preserving only the essential core message.

{_HTML_FORMAT.format(action="shortening the content")}

HTML RULES:
- Preserve the original document structure (headings stay headings, bullets stay bullets)
- Shorten ONLY the content/wording, NOT the structure
- Output ONLY HTML, no markdown, no preamble
- Do NOT add blank lines between tags

SHORTENING STRATEGY:
- TARGET: Reduce to approximately HALF the original length
- Remove redundant phrases, filler words and stacked adjectives
- Keep ONLY the essential information and core value proposition
- Keep critical facts, numbers and calls-to-action
- Combine related ideas into single, tight sentences
- Cut examples and backstory unless they ARE the message

Do NOT change the core message or add new information.

Return ONLY the shortened HTML, no explanations or preambles."""

EXPAND_SYSTEM_PROMPT = f"""You are an expert copywriter with 40 years of experience. Your job is to expand copy by adding detail, examples, benefits, and supporting information while maintaining the original message and tone.

{_HTML_FORMAT.format(action="expanding the content")}

HTML RULES:
- Preserve the original document structure (headings stay headings, bullets stay bullets)
- Expand ONLY the content/detail, NOT the structure
- Output ONLY HTML, no markdown, no preamble
- Do NOT add blank lines between tags

When expanding:
- Keep the original core message and tone intact
- Add relevant details, examples, and supporting facts
- Expand on benefits and value propositions
- Maintain readability and flow
- Do NOT change the fundamental message or claims
- Do NOT add information that contradicts the original

Return ONLY the expanded HTML, no explanations or preambles."""

CHANNEL_SYSTEM_PROMPT = f"""You are an expert copywriter with 40 years of experience across all marketing channels. Your job is to rewrite copy to optimize it for specific platforms while preserving the core message and maximizing engagement.

{_HTML_FORMAT.format(action="adapting to the channel")}

HTML RULES:
- Preserve the original document structure (headings stay headings, bullets stay bullets)
- Adapt the tone and wording for the channel, NOT the structure
- Output ONLY HTML, no markdown, no preamble
- Do NOT add blank lines between tags

When rewriting:
- Adapt the tone, format, and style to match the platform's best practices
- Maintain the original meaning and key value propositions
- Optimize for the platform's audience expectations
- Remove redundancies and awkward phrasing
- DO NOT add new information or claims not in the original

Return ONLY the rewritten HTML, no explanations or preambles."""

CHANNEL_PROMPTS: Dict[str, str] = {
    "linkedin": """Rewrite this copy for LinkedIn with a professional yet personable tone. Add business context and thought leadership angle. Aim for 1-2 impactful paragraphs that engage professional audiences.

LINKEDIN BEST PRACTICES:
- Professional but conversational tone
- Business value and insights focus
- Thought leadership positioning
- 1-3 paragraphs ideal
- Strong opening hook
- Can include relevant hashtags (2-3 max)

ORIGINAL COPY:""",
    "twitter": """Rewrite this copy for Twitter/X. Make it punchy and conversational with maximum impact in minimal words. Create a strong hook in the first 10 words. Keep it under 280 characters if possible, but prioritize impact over strict character limits.

TWITTER BEST PRACTICES:
- Punchy and concise
- Strong opening hook (first 10 words critical)
- Aim for under 280 characters when possible
- Can use 1-2 relevant hashtags

ORIGINAL COPY:""",
    "instagram": """Rewrite this copy for Instagram with an emotional, story-driven approach. Use casual, relatable language that connects personally. Make it work well alongside visual content.

INSTAGRAM BEST PRACTICES:
- Emotional and story-driven
- Casual, relatable language
- Longer captions are OK if engaging
- Can include emojis where appropriate
- 3-5 relevant hashtags at the end

ORIGINAL COPY:""",
    "facebook": """Rewrite this copy for Facebook with a community-focused, conversational tone. Make it relatable and engaging for diverse audiences. Use friendly, approachable language that encourages interaction.

FACEBOOK BEST PRACTICES:
- Community-focused and conversational
- Friendly and approachable tone
- Encourage comments and engagement
- Questions work well
- Can include emojis naturally

ORIGINAL COPY:""",
    "email": """Rewrite this copy for email with a direct, personal tone. Make it scannable with clear value proposition and strong call-to-action. Use short paragraphs and bullet points where appropriate.

EMAIL BEST PRACTICES:
- Direct and personal tone
- Clear value proposition up front
- Scannable format (short paragraphs)
- Use bullet points for key benefits
- Strong, clear call-to-action

ORIGINAL COPY:""",
}

PERSONA_OPTIMIZATION_SYSTEM_PROMPT = f"""You are an expert copywriter with 40 years of experience specializing in audience-targeted messaging. Your job is to rewrite copy to better resonate with a specific target persona.

{_HTML_FORMAT.format(action="optimizing the content")}

REWRITING RULES:
1. ONLY fix the specific alignment issues identified - do NOT rewrite everything
2. PRESERVE what's working well (the identified strengths)
3. Maintain the original structure and formatting
4. Keep the core message intact
5. Match the persona's language patterns and vocabulary
6. Address their pain points and goals
7. Keep similar length - don't pad or over-expand

Return ONLY the rewritten HTML content, no explanations or preambles."""

BRAND_OPTIMIZATION_SYSTEM_PROMPT = f"""You are an expert copywriter with 40 years of experience specializing in brand voice consistency. Your job is to rewrite copy to better align with brand voice guidelines.

{_HTML_FORMAT.format(action="optimizing the content")}

REWRITING RULES:
1. ONLY fix the specific brand voice violations identified - do NOT rewrite everything
2. PRESERVE what's working well (the identified matches)
3. Maintain the original structure and formatting
4. Keep the core message intact
5. Use approved phrases where appropriate
6. REMOVE or replace any forbidden words/phrases
7. Match the brand tone consistently throughout
8. Keep similar length - don't pad or over-expand

Return ONLY the rewritten HTML content, no explanations or preambles."""


def build_shorten_prompt(request: RewriteRequest, settings: Settings) -> str:
    return f"""AGGRESSIVELY shorten the following copy to approximately 40-50% of its original length. Cut ruthlessly while preserving only the essential core message.

CRITICAL: Output must be valid HTML with preserved structure. If the input has headings, keep them as headings. If it has bullets, keep them as bullets (just drastically shorter).

Example:
INPUT (33 words):
<p>Our coffee delivers a bold, robust flavor profile that awakens your senses with every sip. The carefully selected beans provide a powerful energizing kick that will keep you going all day long.</p>

OUTPUT (11 words):
<p><strong>Bold coffee</strong> that energizes and keeps you going.</p>

ORIGINAL COPY:
{request.text}

SHORTENED HTML:"""


def build_expand_prompt(request: RewriteRequest, settings: Settings) -> str:
    return f"""Expand the following copy by adding detail, examples, benefits, and supporting information. Maintain the original message and tone, but make it more comprehensive and engaging.

CRITICAL: Output must be valid HTML with preserved structure. If the input has headings, keep them as headings. If it has bullets, keep them as bullets (just expanded).

Example:
INPUT:
<p>Our coffee is bold and energizing.</p>
OUTPUT:
<p>Our coffee delivers a <strong>bold, robust flavor profile</strong> that awakens your senses with every sip. The carefully selected beans provide a powerful <strong>energizing kick</strong> that keeps you focused throughout your entire day.</p>

ORIGINAL COPY:
{request.text}

EXPANDED HTML:"""


def build_channel_rewrite_prompt(request: ChannelRewriteRequest, settings: Settings) -> str:
    return f"{CHANNEL_PROMPTS[request.channel]}\n\n{request.text}"


def optimization_system_prompt(request: OptimizeAlignmentRequest) -> str:
    if request.target == "persona":
        return PERSONA_OPTIMIZATION_SYSTEM_PROMPT
    return BRAND_OPTIMIZATION_SYSTEM_PROMPT


def _bullets(values: List[str], quoted: bool = False) -> str:
    if not values:
        return NONE_IDENTIFIED
    return "\n".join(f'• "{value}"' if quoted else f"• {value}" for value in values)


def _score(value: Optional[Union[int, float]]) -> str:
    if value is None:
        return "Not specified"
    return f"{value:g}%"


def _labelled(label: str, value: str) -> Optional[str]:
    return f"{label}: {value}" if value else None


def _persona_target(request: OptimizeAlignmentRequest) -> List[Optional[str]]:
    persona = request.persona
    return [
        "TARGET PERSONA:",
        f"Name: {persona.name}",
        _labelled("Demographics", persona.demographics),
        _labelled("Psychographics", persona.psychographics),
        _labelled("Pain Points", persona.pain_points),
        _labelled("Goals", persona.goals),
    ]


def _brand_target(request: OptimizeAlignmentRequest) -> List[Optional[str]]:
    brand = request.brand_voice
    lines = [
        "BRAND VOICE GUIDELINES:",
        f"Brand Name: {brand.brand_name}",
        _labelled("Tone", brand.brand_tone),
        _labelled("Mission", brand.mission_statement),
        _labelled("Values", ", ".join(brand.brand_values)),
    ]
    if brand.approved_phrases:
        lines.append(f"\nApproved Phrases to USE:\n{_bullets(brand.approved_phrases, quoted=True)}")
    if brand.forbidden_words:
        lines.append(f"\nForbidden Words to AVOID:\n{_bullets(brand.forbidden_words, quoted=True)}")
    return lines


def build_optimization_prompt(request: OptimizeAlignmentRequest, settings: Settings) -> str:
    """Compose the rewrite prompt from the target and the earlier check's findings."""
    analysis = request.analysis
    if request.target == "persona":
        intro = (
            "Rewrite this copy to better align with the target persona. "
            "Focus ONLY on fixing the identified issues while preserving the strengths."
        )
        target = _persona_target(request)
        keep_heading = "STRENGTHS TO PRESERVE (do not change these aspects):"
        fix_heading = "ISSUES TO FIX (focus your changes here):"
        instructions = [
            "Preserve the strengths listed above - don't change what's already working",
            "Fix ONLY the specific issues identified",
        ]
    else:
        intro = (
            "Rewrite this copy to better align with the brand voice. "
            "Focus ONLY on fixing the identified violations while preserving what matches well."
        )
        target = _brand_target(request)
        keep_heading = "WHAT MATCHES WELL (preserve these aspects):"
        fix_heading = "VIOLATIONS TO FIX (focus your changes here):"
        instructions = [
            "Preserve what matches the brand voice - don't change what's already working",
            "Fix ONLY the specific violations identified",
            "Replace any forbidden words with brand-appropriate alternatives",
            "Use approved phrases where they fit naturally",
        ]
    instructions += [
        "Implement the recommendations where possible",
        "Keep the same structure (headings, bullets, paragraphs)",
        "Maintain similar length",
    ]
    numbered = "\n".join(f"{index}. {line}" for index, line in enumerate(instructions, start=1))
    target_text = "\n".join(line for line in target if line)

    return f"""{intro}

{target_text}

ANALYSIS RESULTS:
Current Score: {_score(analysis.score)}
Assessment: {analysis.assessment or "Not specified"}

{keep_heading}
{_bullets(analysis.strengths)}

{fix_heading}
{_bullets(analysis.issues)}

RECOMMENDATIONS TO IMPLEMENT:
{_bullets(analysis.recommendations)}

ORIGINAL COPY TO REWRITE:
{request.text}

INSTRUCTIONS:
{numbered}

Return ONLY the rewritten HTML:"""


def build_changes_summary_prompt(original: str, rewritten: str) -> str:
    return f"""Compare these two versions of copy and provide a brief summary of the key changes made.

ORIGINAL:
{original}

REWRITTEN:
{rewritten}

Provide 2-4 brief bullet points summarizing the main changes. Format as a JSON array of strings.
Example: ["Changed generic greeting to persona-specific language", "Added industry terminology", "Softened aggressive sales tone"]

Return ONLY the JSON array:"""

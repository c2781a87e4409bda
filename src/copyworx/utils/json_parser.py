"""JSON parsing utilities for model-generated responses."""

import json
import re
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z0-9_-]*[ \t]*\n?([\s\S]*?)\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove a single markdown code fence (optionally tagged, e.g. ``json``) around the text.

    Text that is not fenced is returned stripped but otherwise untouched.
    """
    if not text:
        return ""
    cleaned = text.strip()
    match = _FENCE_PATTERN.match(cleaned)
    if match:
        return match.group(1).strip()
    # Unterminated fence: drop the opening marker only
    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```[a-zA-Z0-9_-]*[ \t]*\n?", "", cleaned)
    return cleaned.strip()


def try_parse_json(json_str: str):
    """Attempt to parse a JSON string directly.

    Returns:
        tuple: ``(True, value)`` on success, ``(False, None)`` otherwise
    """
    try:
        return True, json.loads(json_str)
    except (json.JSONDecodeError, TypeError):
        return False, None


def parse_llm_json(text: str) -> Any:
    """Parse a model response that is supposed to be JSON, tolerating code fences.

    Raises:
        ValueError: If no JSON value can be decoded from the text
    """
    cleaned = strip_code_fences(text)
    success, value = try_parse_json(cleaned)
    if success:
        return value

    logger.debug("Initial JSON parsing failed, trying embedded value extraction")

    # Models occasionally wrap the value in a sentence despite instructions
    for opening, closing in (("{", "}"), ("[", "]")):
        start, end = cleaned.find(opening), cleaned.rfind(closing)
        if start != -1 and end > start:
            success, value = try_parse_json(cleaned[start:end + 1])
            if success:
                return value

    raise ValueError("Response is not valid JSON")

"""Helpers for constructing the chat model used by the analysis endpoints."""

from typing import Any, Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from ..config.settings import Settings


def configure_llm(
    settings: Settings,
    *,
    max_tokens: int,
    temperature: Optional[float] = None,
) -> ChatGoogleGenerativeAI:
    """Configure a Gemini chat model for one pipeline run.

    Args:
        settings (Settings): Process settings holding the model id and API key
        max_tokens (int): Maximum output tokens for the endpoint
        temperature (Optional[float]): Overrides ``settings.model_temperature``

    Returns:
        ChatGoogleGenerativeAI: A configured LLM instance

    Raises:
        ConfigurationError: If no API key is configured
    """
    api_key = settings.require_llm_credentials()

    return ChatGoogleGenerativeAI(
        model=settings.model_name,
        temperature=settings.model_temperature if temperature is None else temperature,
        max_output_tokens=max_tokens,
        google_api_key=api_key,
        # One upstream call per request; retries belong to the caller
        max_retries=0,
        callbacks=settings.get_langsmith_callbacks(),
    )


def response_text(message: Any) -> str:
    """Extract the text of the first content block of a chat model response."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        for block in content:
            if isinstance(block, str):
                return block.strip()
            if isinstance(block, dict) and block.get("type") == "text":
                return str(block.get("text", "")).strip()
    return ""

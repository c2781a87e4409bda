"""Bounded remote invocation of the language model."""

import asyncio

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from ..exceptions import AnalysisTimeout, CopyWorxError
from ..utils.llm import response_text
from ..utils.logging import get_logger
from .errors import classify_upstream_error

logger = get_logger(__name__)


async def invoke_with_timeout(
    llm: BaseChatModel,
    system_prompt: str,
    user_prompt: str,
    timeout_seconds: float,
    *,
    endpoint: str,
) -> str:
    """
    Send one request to the model and wait at most ``timeout_seconds`` for it.

    On timeout the in-flight call is cancelled, not abandoned, so a late
    upstream answer cannot leak past the response already sent.

    Returns:
        str: Text of the first content block of the response

    Raises:
        AnalysisTimeout: If the model did not answer in time
        UpstreamError: If the provider failed with an HTTP status
        Exception: Provider failures without a status propagate unchanged
    """
    messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning("Model call timed out", endpoint=endpoint, timeout_seconds=timeout_seconds)
        raise AnalysisTimeout(
            f"The request timed out after {timeout_seconds:g} seconds. "
            "Please try again with shorter text."
        )
    except CopyWorxError:
        raise
    except Exception as e:
        upstream = classify_upstream_error(e)
        if upstream is None:
            raise
        logger.warning(
            "Model call failed",
            endpoint=endpoint,
            upstream_status=upstream.upstream_status,
            error_type=type(e).__name__,
        )
        raise upstream from e

    return response_text(response)

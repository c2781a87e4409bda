"""Change summary attached to an optimize-alignment rewrite."""

from ..config.dependencies import Dependencies
from ..exceptions import AnalysisTimeout, UpstreamError
from ..models.analysis import OptimizationResult, OptimizeAlignmentRequest
from ..utils.logging import get_logger
from .invocation import invoke_with_timeout
from .parsing import parse_changes_summary
from .rewrite_prompts import build_changes_summary_prompt

logger = get_logger(__name__)

CHANGES_SUMMARY_TIMEOUT_SECONDS = 15
CHANGES_SUMMARY_MAX_TOKENS = 500
DEFAULT_CHANGES_SUMMARY = ("Copy optimized for better alignment",)

CHANGES_SUMMARY_SYSTEM_PROMPT = (
    "You are an expert copy editor. You describe the edits between two versions "
    "of copy as a JSON array of short strings and return nothing else."
)


async def summarize_changes(
    result: OptimizationResult,
    request: OptimizeAlignmentRequest,
    dependencies: Dependencies,
) -> OptimizationResult:
    """
    Ask the model for 2-4 notes on what the rewrite changed.

    The rewrite has already succeeded at this point, so a summary call that
    times out, fails upstream or returns no usable array yields
    ``DEFAULT_CHANGES_SUMMARY`` instead of failing the request.
    """
    llm = dependencies.create_llm(max_tokens=CHANGES_SUMMARY_MAX_TOKENS)
    prompt = build_changes_summary_prompt(request.text, result.rewritten_text)
    try:
        text = await invoke_with_timeout(
            llm,
            CHANGES_SUMMARY_SYSTEM_PROMPT,
            prompt,
            CHANGES_SUMMARY_TIMEOUT_SECONDS,
            endpoint="optimize-alignment.summary",
        )
    except (AnalysisTimeout, UpstreamError) as e:
        logger.warning("Changes summary unavailable", error_type=type(e).__name__)
        text = ""

    changes = parse_changes_summary(text) or list(DEFAULT_CHANGES_SUMMARY)
    return result.model_copy(update={"changes_summary": changes})

"""
The analysis request pipeline.

Every model-backed endpoint runs the same sequence: validate the body, compose
a prompt, make one bounded call to the model, parse the answer, optionally run
a follow-up stage, then classify any failure. An ``EndpointConfig`` supplies
the per-endpoint pieces; the ``AnalysisPipeline`` runs them.

Example:
    ```python
    pipeline = AnalysisPipeline(BRAND_ALIGNMENT, create_dependencies())
    body = await pipeline.run({"text": "Buy now!", "brandVoice": {"brandName": "Acme"}})
    ```
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar, Union

from ..config.dependencies import Dependencies
from ..config.settings import Settings
from ..exceptions import CopyWorxError, MalformedUpstreamResponse
from ..utils.logging import get_logger
from ..utils.retry import retry_with_backoff
from .errors import classify_error
from .invocation import invoke_with_timeout

logger = get_logger(__name__)

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class EndpointConfig(Generic[RequestT, ResultT]):
    """Per-endpoint parameters of the analysis pipeline.

    Attributes:
        name: Endpoint name used in logs
        timeout_seconds: Wall-clock budget for the model call
        max_tokens: Maximum output tokens requested from the model
        system_prompt: System instruction, or a function of the request choosing one
        validate: Turns the decoded body into a typed request, raising InvalidInput
        build_prompt: Composes the user prompt; an empty prompt means nothing to analyze
        parse_response: Turns the model's text into a typed result
        shape_result: Builds the success body from the result and the request
        temperature: Overrides the configured model temperature
        followup: Optional second stage that enriches the parsed result, e.g. with
            another bounded model call
    """

    name: str
    timeout_seconds: float
    max_tokens: int
    system_prompt: Union[str, Callable[[RequestT], str]]
    validate: Callable[[Any, Settings], RequestT]
    build_prompt: Callable[[RequestT, Settings], str]
    parse_response: Callable[[str, RequestT, Settings], ResultT]
    shape_result: Callable[[ResultT, RequestT], Dict[str, Any]]
    temperature: Optional[float] = None
    followup: Optional[Callable[[ResultT, RequestT, Dependencies], Awaitable[ResultT]]] = None


class AnalysisPipeline(Generic[RequestT, ResultT]):
    """Runs one endpoint's validate, compose, invoke, parse and classify stages."""

    def __init__(self, config: EndpointConfig[RequestT, ResultT], dependencies: Dependencies):
        self.config = config
        self.dependencies = dependencies

    @property
    def settings(self) -> Settings:
        return self.dependencies.settings

    async def run(self, body: Any) -> Dict[str, Any]:
        """
        Run the pipeline on a decoded JSON body.

        Returns:
            Dict[str, Any]: The success response body

        Raises:
            CopyWorxError: For every failure, already classified
        """
        config = self.config
        request = config.validate(body, self.settings)
        prompt = config.build_prompt(request, self.settings)
        if not prompt:
            logger.info("No active metrics, returning empty analysis", endpoint=config.name)
            return {}
        system_prompt = config.system_prompt
        if callable(system_prompt):
            system_prompt = system_prompt(request)

        try:
            llm = self.dependencies.create_llm(
                max_tokens=config.max_tokens, temperature=config.temperature
            )

            async def attempt() -> ResultT:
                text = await invoke_with_timeout(
                    llm,
                    system_prompt,
                    prompt,
                    config.timeout_seconds,
                    endpoint=config.name,
                )
                return config.parse_response(text, request, self.settings)

            result = await retry_with_backoff(
                attempt,
                max_retries=self.settings.analysis_parse_retries,
                base_delay=self.settings.retry_delay,
                backoff=self.settings.retry_backoff,
                max_delay=self.settings.retry_max_delay,
                retry_on=lambda e: isinstance(e, MalformedUpstreamResponse),
                operation=config.name,
            )
            if config.followup is not None:
                result = await config.followup(result, request, self.dependencies)
        except CopyWorxError as e:
            logger.warning(
                "Analysis request failed",
                endpoint=config.name,
                error_type=type(e).__name__,
                status_code=e.status_code,
            )
            raise
        except Exception as e:
            raise classify_error(e, endpoint=config.name) from e

        logger.info("Analysis complete", endpoint=config.name, prompt_length=len(prompt))
        return config.shape_result(result, request)

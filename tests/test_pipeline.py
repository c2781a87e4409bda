import asyncio
import time
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from conftest import make_settings, reply
from copyworx.analysis import ANALYZE_DOCUMENT, BRAND_ALIGNMENT, TONE_SHIFT, AnalysisPipeline
from copyworx.analysis.prompts import BRAND_ALIGNMENT_SYSTEM_PROMPT
from copyworx.config.dependencies import Dependencies
from copyworx.exceptions import (
    AnalysisTimeout,
    ConfigurationError,
    CopyWorxError,
    InvalidInput,
    MalformedUpstreamResponse,
    UpstreamRateLimited,
)


class QuotaExceeded(Exception):
    code = 429


@pytest.fixture
def brand_body(brand_voice):
    return {"text": "Buy now!", "brandVoice": brand_voice}


@pytest.mark.asyncio
async def test_brand_alignment_result_shape(dependencies, llm, llm_factory, brand_body):
    reply(llm, '{"score": 3, "assessment": "Uses a forbidden phrase.", "violations": ["buy now"]}')

    body = await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    assert body == {
        "result": {
            "score": 3,
            "assessment": "Uses a forbidden phrase.",
            "matches": [],
            "violations": ["buy now"],
            "recommendations": [],
        },
        "textLength": 8,
        "brandName": "Acme",
    }
    llm_factory.assert_called_once_with(dependencies.settings, max_tokens=4000, temperature=0.2)


@pytest.mark.asyncio
async def test_model_receives_system_and_user_messages(dependencies, llm, brand_body):
    reply(llm, '{"score": 5}')

    await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    messages = llm.ainvoke.call_args.args[0]
    assert isinstance(messages[0], SystemMessage)
    assert messages[0].content == BRAND_ALIGNMENT_SYSTEM_PROMPT
    assert isinstance(messages[1], HumanMessage)
    assert "Buy now!" in messages[1].content


@pytest.mark.asyncio
async def test_empty_analysis_skips_the_model(dependencies, llm, llm_factory):
    body = await AnalysisPipeline(ANALYZE_DOCUMENT, dependencies).run(
        {"content": "Hello there", "metricsToAnalyze": ["brand"]}
    )

    assert body == {}
    llm_factory.assert_not_called()
    llm.ainvoke.assert_not_called()


@pytest.mark.asyncio
async def test_validation_failure_does_not_call_model(dependencies, llm):
    with pytest.raises(InvalidInput):
        await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run({"text": ""})

    llm.ainvoke.assert_not_called()


@pytest.mark.asyncio
async def test_timeout_cancels_the_upstream_call(dependencies, llm, brand_body):
    cancelled = asyncio.Event()

    async def never_answers(messages):
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    llm.ainvoke = never_answers
    config = replace(BRAND_ALIGNMENT, timeout_seconds=0.05)

    started = time.monotonic()
    with pytest.raises(AnalysisTimeout) as excinfo:
        await AnalysisPipeline(config, dependencies).run(brand_body)
    elapsed = time.monotonic() - started

    assert elapsed < 1
    assert excinfo.value.status_code == 408
    assert "timed out" in excinfo.value.details
    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_upstream_rate_limit_is_classified(dependencies, llm, brand_body):
    llm.ainvoke = AsyncMock(side_effect=QuotaExceeded("quota"))

    with pytest.raises(UpstreamRateLimited) as excinfo:
        await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    assert excinfo.value.status_code == 429


@pytest.mark.asyncio
async def test_unknown_failure_is_hidden(dependencies, llm, brand_body):
    llm.ainvoke = AsyncMock(side_effect=RuntimeError("socket closed at 10.0.0.3"))

    with pytest.raises(CopyWorxError) as excinfo:
        await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    assert excinfo.value.status_code == 500
    assert "10.0.0.3" not in excinfo.value.details


@pytest.mark.asyncio
async def test_malformed_response_is_not_retried_by_default(dependencies, llm, brand_body):
    reply(llm, "Sorry, I can't do that.")

    with pytest.raises(MalformedUpstreamResponse):
        await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    assert llm.ainvoke.await_count == 1


@pytest.mark.asyncio
async def test_malformed_response_retried_when_enabled(llm, llm_factory, brand_body):
    dependencies = Dependencies(settings=make_settings(analysis_parse_retries=1), llm_factory=llm_factory)
    llm.ainvoke = AsyncMock(
        side_effect=[AIMessage(content="not json"), AIMessage(content='{"score": 7}')]
    )

    body = await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    assert body["result"]["score"] == 7
    assert llm.ainvoke.await_count == 2


@pytest.mark.asyncio
async def test_missing_api_key_is_configuration_error(brand_body):
    dependencies = Dependencies(settings=make_settings(gemini_api_key=None))

    with pytest.raises(ConfigurationError) as excinfo:
        await AnalysisPipeline(BRAND_ALIGNMENT, dependencies).run(brand_body)

    assert excinfo.value.status_code == 500
    assert excinfo.value.error == "Server configuration error"


@pytest.mark.asyncio
async def test_tone_shift_reports_lengths(dependencies, llm):
    reply(llm, "<p>Hey, check this out!</p>")

    body = await AnalysisPipeline(TONE_SHIFT, dependencies).run(
        {"text": "<p>Please review this.</p>", "tone": "casual"}
    )

    assert body == {
        "rewrittenText": "<p>Hey, check this out!</p>",
        "originalLength": 26,
        "newLength": 27,
    }

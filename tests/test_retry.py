from unittest.mock import AsyncMock

import pytest

from copyworx.utils.retry import retry_with_backoff


@pytest.mark.asyncio
async def test_returns_first_success():
    fn = AsyncMock(side_effect=[ValueError("flaky"), ValueError("flaky"), "done"])

    assert await retry_with_backoff(fn, max_retries=3, base_delay=0) == "done"
    assert fn.await_count == 3


@pytest.mark.asyncio
async def test_zero_retries_means_single_attempt():
    fn = AsyncMock(side_effect=ValueError("nope"))

    with pytest.raises(ValueError):
        await retry_with_backoff(fn, max_retries=0, base_delay=0)

    assert fn.await_count == 1


@pytest.mark.asyncio
async def test_rejected_errors_are_raised_immediately():
    fn = AsyncMock(side_effect=KeyError("fatal"))

    with pytest.raises(KeyError):
        await retry_with_backoff(
            fn, max_retries=5, base_delay=0, retry_on=lambda e: isinstance(e, ValueError)
        )

    assert fn.await_count == 1


@pytest.mark.asyncio
async def test_delay_grows_and_is_capped(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("copyworx.utils.retry.asyncio.sleep", fake_sleep)
    fn = AsyncMock(side_effect=[ValueError()] * 4 + ["ok"])

    await retry_with_backoff(fn, max_retries=4, base_delay=1, backoff=2, max_delay=5)

    assert delays == [1, 2, 4, 5]

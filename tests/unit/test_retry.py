"""Tests for retry utilities."""

from unittest.mock import AsyncMock, patch

import pytest

from rosetta_llm.utils.retry import is_rate_limit_error, is_transient_error, run_with_retry


class StatusError(Exception):
    def __init__(self, status_code: int, message: str = "error"):
        super().__init__(message)
        self.status_code = status_code


def test_is_rate_limit_error():
    assert is_rate_limit_error(StatusError(429))
    assert is_rate_limit_error(Exception("Rate limit reached"))
    assert not is_rate_limit_error(StatusError(400))


def test_is_transient_error():
    assert is_transient_error(ConnectionError())
    assert is_transient_error(StatusError(529, "overloaded"))
    assert is_transient_error(Exception("Connection reset by peer"))
    assert not is_transient_error(ValueError("bad input"))


@pytest.mark.asyncio
async def test_run_with_retry_retries_transient_then_succeeds():
    func = AsyncMock(side_effect=[StatusError(503), "ok"])
    with patch("rosetta_llm.utils.retry.asyncio.sleep", AsyncMock()) as mock_sleep:
        assert await run_with_retry(func, max_retries=3, initial_delay=1.0) == "ok"
    assert func.await_count == 2
    mock_sleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_run_with_retry_uses_server_wait_hint():
    func = AsyncMock(side_effect=[StatusError(429, "retry after 7 seconds"), "ok"])
    with patch("rosetta_llm.utils.retry.asyncio.sleep", AsyncMock()) as mock_sleep:
        await run_with_retry(func, max_retries=2)
    mock_sleep.assert_awaited_once_with(7.0)


@pytest.mark.asyncio
async def test_run_with_retry_does_not_retry_permanent_errors():
    func = AsyncMock(side_effect=ValueError("bad request"))
    with pytest.raises(ValueError):
        await run_with_retry(func, max_retries=3)
    assert func.await_count == 1


@pytest.mark.asyncio
async def test_run_with_retry_gives_up_after_max_retries():
    func = AsyncMock(side_effect=ConnectionError("down"))
    with patch("rosetta_llm.utils.retry.asyncio.sleep", AsyncMock()):
        with pytest.raises(ConnectionError):
            await run_with_retry(func, max_retries=2)
    assert func.await_count == 2

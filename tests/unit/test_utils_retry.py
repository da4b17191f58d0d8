"""Contains unit tests for the utils.retry module."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from githubkit.exception import RequestFailed

from github_ci_helpers.utils.retry import retry_on_rate_limit


def make_request_failed(status_code: int, headers: dict[str, str] | None = None) -> RequestFailed:
    """Build a githubkit RequestFailed error carrying a fake response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    return RequestFailed(response)


def make_flaky(outcomes: list[Any]) -> tuple[Any, list[int]]:
    """Build an async function that raises or returns each outcome in turn, and a call counter."""
    calls: list[int] = []

    async def flaky() -> Any:
        calls.append(1)
        outcome = outcomes[min(len(calls), len(outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return flaky, calls


@pytest.mark.asyncio
async def test_returns_result_without_retrying() -> None:
    """Test that a successful call is returned untouched."""
    func, calls = make_flaky(["ok"])
    assert await retry_on_rate_limit()(func)() == "ok"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_non_rate_limit_error_is_not_retried() -> None:
    """Test that errors other than rate limits propagate immediately."""
    func, calls = make_flaky([make_request_failed(500)])
    with pytest.raises(RequestFailed):
        await retry_on_rate_limit()(func)()
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_rate_limit_error_is_retried_using_retry_after() -> None:
    """Test that a 429 response is retried after the retry-after delay."""
    func, calls = make_flaky([make_request_failed(429, {"retry-after": "3"}), "ok"])
    with patch("github_ci_helpers.utils.retry.asyncio.sleep", new=AsyncMock()) as mock_sleep:
        assert await retry_on_rate_limit()(func)() == "ok"
    mock_sleep.assert_awaited_once_with(3.0)
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_rate_limit_error_gives_up_after_max_retries() -> None:
    """Test that the last rate limit error is raised once retries are exhausted."""
    func, calls = make_flaky([make_request_failed(429)])
    with patch("github_ci_helpers.utils.retry.asyncio.sleep", new=AsyncMock()):
        with pytest.raises(RequestFailed):
            await retry_on_rate_limit(max_retries=2)(func)()
    assert len(calls) == 3


def test_sync_function_is_rejected() -> None:
    """Test that decorating a plain function fails loudly."""

    def not_async() -> None:
        return None

    with pytest.raises(TypeError):
        retry_on_rate_limit()(not_async)  # type: ignore[type-var]

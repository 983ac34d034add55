"""
Unit tests for the retry policy.

Sleep is always injected as an AsyncMock so delays are recorded, not waited.
"""

from unittest.mock import AsyncMock, call

import pytest

from interview_practice.llm.exceptions import LLMConnectionError, LLMHttpError
from interview_practice.retry.exceptions import RetryExhaustedError, ServiceOverloadedError
from interview_practice.retry.policy import (
    RetryPolicy,
    is_overload_error,
    retry_call,
    with_retry,
)


class TestIsOverloadError:
    """Failure classification."""

    def test_status_code_503(self):
        error = LLMHttpError("Transcription failed", status_code=503, body="")
        assert is_overload_error(error) is True

    def test_message_contains_503(self):
        assert is_overload_error(RuntimeError("Feedback generation failed: 503 - busy")) is True

    def test_message_contains_overloaded_any_case(self):
        assert is_overload_error(RuntimeError("The model is OVERLOADED")) is True

    def test_other_status_code(self):
        error = LLMHttpError("Problem generation failed: 400 Bad Request - {}", status_code=400, body="{}")
        assert is_overload_error(error) is False

    def test_network_error(self):
        assert is_overload_error(LLMConnectionError("connection refused")) is False


class TestRetryPolicy:
    """Policy configuration and backoff arithmetic."""

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_attempts == 5
        assert policy.base_delay_ms == 3000

    def test_from_settings(self, test_settings):
        policy = RetryPolicy.from_settings(test_settings)
        assert policy.max_attempts == 3
        assert policy.base_delay_ms == 1000

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=-1)
        with pytest.raises(ValueError):
            RetryPolicy(base_delay_ms=-5)

    def test_backoff(self):
        policy = RetryPolicy(max_attempts=5, base_delay_ms=3000)
        assert policy.backoff_ms(1, overloaded=False) == 3000
        assert policy.backoff_ms(2, overloaded=False) == 6000
        assert policy.backoff_ms(1, overloaded=True) == 6000
        assert policy.backoff_ms(3, overloaded=True) == 18000

    def test_immutable(self):
        policy = RetryPolicy()
        with pytest.raises(Exception):
            policy.max_attempts = 10


@pytest.mark.asyncio
async def test_first_attempt_success_does_not_sleep(fast_policy, mock_sleep):
    operation = AsyncMock(return_value="result")

    result = await retry_call(operation, fast_policy, sleep=mock_sleep)

    assert result == "result"
    assert operation.await_count == 1
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_success_on_attempt_k_stops_invoking(mock_sleep):
    policy = RetryPolicy(max_attempts=5, base_delay_ms=1000)
    operation = AsyncMock(side_effect=[ValueError("a"), ValueError("b"), "third"])

    result = await retry_call(operation, policy, sleep=mock_sleep)

    assert result == "third"
    assert operation.await_count == 3
    assert mock_sleep.await_args_list == [call(1.0), call(2.0)]


@pytest.mark.asyncio
async def test_non_overload_failure_then_success(fast_policy, mock_sleep):
    """One plain failure: two invocations and a single 1000ms wait."""
    operation = AsyncMock(side_effect=[RuntimeError("network down"), "second"])

    result = await retry_call(operation, fast_policy, sleep=mock_sleep)

    assert result == "second"
    assert operation.await_count == 2
    mock_sleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_non_overload_exhaustion_reraises_original(fast_policy, mock_sleep):
    original = LLMConnectionError("connection refused")
    operation = AsyncMock(side_effect=original)

    with pytest.raises(LLMConnectionError) as exc_info:
        await retry_call(operation, fast_policy, sleep=mock_sleep)

    assert exc_info.value is original
    assert operation.await_count == 3
    # base * (i-1) before attempt i
    assert mock_sleep.await_args_list == [call(1.0), call(2.0)]


@pytest.mark.asyncio
async def test_overload_exhaustion_raises_service_overloaded(fast_policy, mock_sleep):
    """Always "503": three invocations, waits of 2000ms then 4000ms."""
    original = RuntimeError("Feedback generation failed: 503 Service Unavailable - {}")
    operation = AsyncMock(side_effect=original)

    with pytest.raises(ServiceOverloadedError) as exc_info:
        await retry_call(operation, fast_policy, operation_name="feedback", sleep=mock_sleep)

    error = exc_info.value
    assert operation.await_count == 3
    assert mock_sleep.await_args_list == [call(2.0), call(4.0)]
    assert "overloaded" in str(error).lower()
    assert error is not original
    assert error.last_error is original
    assert error.__cause__ is original
    assert error.operation == "feedback"
    assert error.attempts == 3


@pytest.mark.asyncio
async def test_overload_is_a_retry_exhausted_error(fast_policy, mock_sleep):
    operation = AsyncMock(side_effect=LLMHttpError("busy", status_code=503))

    with pytest.raises(RetryExhaustedError):
        await retry_call(operation, fast_policy, sleep=mock_sleep)


@pytest.mark.asyncio
async def test_classification_of_final_attempt_decides_error(fast_policy, mock_sleep):
    """Overload earlier, plain failure last: the plain error propagates."""
    last = ValueError("bad request")
    operation = AsyncMock(side_effect=[RuntimeError("overloaded"), RuntimeError("503"), last])

    with pytest.raises(ValueError) as exc_info:
        await retry_call(operation, fast_policy, sleep=mock_sleep)

    assert exc_info.value is last
    assert mock_sleep.await_args_list == [call(2.0), call(4.0)]


@pytest.mark.asyncio
async def test_mixed_failures_use_per_attempt_backoff(mock_sleep):
    policy = RetryPolicy(max_attempts=4, base_delay_ms=100)
    operation = AsyncMock(side_effect=[RuntimeError("x"), RuntimeError("overloaded"), RuntimeError("y"), "ok"])

    result = await retry_call(operation, policy, sleep=mock_sleep)

    assert result == "ok"
    assert mock_sleep.await_args_list == [call(0.1), call(0.4), call(0.3)]


@pytest.mark.asyncio
async def test_zero_attempts_raises_without_invoking(mock_sleep):
    operation = AsyncMock(return_value="never")

    with pytest.raises(RetryExhaustedError) as exc_info:
        await retry_call(
            operation, RetryPolicy(max_attempts=0), operation_name="transcription", sleep=mock_sleep
        )

    assert not isinstance(exc_info.value, ServiceOverloadedError)
    assert exc_info.value.attempts == 0
    operation.assert_not_awaited()
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_single_attempt_never_sleeps(mock_sleep):
    operation = AsyncMock(side_effect=RuntimeError("503"))

    with pytest.raises(ServiceOverloadedError):
        await retry_call(operation, RetryPolicy(max_attempts=1), sleep=mock_sleep)

    assert operation.await_count == 1
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_with_retry_decorator(fast_policy, mock_sleep):
    calls = []

    @with_retry(fast_policy, sleep=mock_sleep)
    async def flaky(value: int) -> int:
        """Fails once, then doubles."""
        calls.append(value)
        if len(calls) == 1:
            raise RuntimeError("temporary")
        return value * 2

    assert await flaky(21) == 42
    assert calls == [21, 21]
    assert flaky.__name__ == "flaky"
    mock_sleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_with_retry_uses_operation_name(fast_policy, mock_sleep):
    @with_retry(fast_policy, operation_name="problem_generation", sleep=mock_sleep)
    async def always_busy():
        raise RuntimeError("model overloaded")

    with pytest.raises(ServiceOverloadedError) as exc_info:
        await always_busy()

    assert exc_info.value.operation == "problem_generation"

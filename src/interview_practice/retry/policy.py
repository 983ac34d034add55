"""
Bounded retry policy with overload-aware backoff.

Every failure of the retried operation is classified:

- **overload**: HTTP 503 or an "overloaded" message. Waits
  ``base_delay_ms * attempt * 2`` before the next attempt; when attempts run
  out, raises ServiceOverloadedError instead of the original error.
- **other**: anything else. Waits ``base_delay_ms * attempt``; when attempts
  run out, re-raises the original error unchanged.

Usage:
    policy = RetryPolicy(max_attempts=5, base_delay_ms=3000)
    text = await retry_call(lambda: client.generate(request), policy, operation_name="feedback")

    @with_retry(policy, operation_name="feedback")
    async def fetch_feedback(question: str, answer: str) -> str: ...
"""

import asyncio
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from interview_practice.config import Settings
from interview_practice.monitoring.metrics import retry_attempts_total, retry_outcomes_total
from interview_practice.retry.exceptions import RetryExhaustedError, ServiceOverloadedError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[Any]]

OVERLOAD_STATUS_CODE = 503
OVERLOAD_MARKERS = ("503", "overloaded")


def is_overload_error(error: BaseException) -> bool:
    """
    Classify an error as a transient overload.

    Checks a ``status_code`` attribute first (LLMHttpError carries one),
    then falls back to the message, since some failures only mention the
    status in text.
    """
    if getattr(error, "status_code", None) == OVERLOAD_STATUS_CODE:
        return True
    message = str(error).lower()
    return any(marker in message for marker in OVERLOAD_MARKERS)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration, immutable per invocation.

    Attributes:
        max_attempts: Total attempts including the first one
        base_delay_ms: Base backoff unit in milliseconds
    """

    max_attempts: int = 5
    base_delay_ms: int = 3000

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            base_delay_ms=settings.RETRY_BASE_DELAY_MS,
        )

    def backoff_ms(self, attempt: int, overloaded: bool) -> int:
        """Delay to wait after failed attempt number ``attempt`` (1-indexed)."""
        delay = self.base_delay_ms * attempt
        return delay * 2 if overloaded else delay


async def retry_call(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    operation_name: str = "operation",
    sleep: SleepFn | None = None,
) -> T:
    """
    Invoke ``operation`` under ``policy``.

    Args:
        operation: Zero-argument coroutine function, called once per attempt
        policy: Attempt count and backoff unit
        operation_name: Name used in logs, metrics and terminal errors
        sleep: Awaitable delay function taking seconds (default: asyncio.sleep)

    Returns:
        Result of the first successful attempt

    Raises:
        ServiceOverloadedError: Final attempt failed with an overload error
        RetryExhaustedError: Policy allows zero attempts
        Exception: Final attempt's error, unchanged, for non-overload failures
    """
    sleep_fn = sleep or asyncio.sleep

    for attempt in range(1, policy.max_attempts + 1):
        try:
            result = await operation()
        except Exception as exc:
            overloaded = is_overload_error(exc)
            classification = "overload" if overloaded else "other"
            retry_attempts_total.labels(
                operation=operation_name, classification=classification
            ).inc()

            if attempt >= policy.max_attempts:
                if overloaded:
                    retry_outcomes_total.labels(operation=operation_name, outcome="overloaded").inc()
                    logger.error(
                        "Upstream overloaded, giving up",
                        operation=operation_name,
                        attempts=attempt,
                        error=str(exc),
                    )
                    raise ServiceOverloadedError(operation_name, attempt, exc) from exc

                retry_outcomes_total.labels(operation=operation_name, outcome="failed").inc()
                logger.error(
                    "Operation failed after all attempts",
                    operation=operation_name,
                    attempts=attempt,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                raise

            delay_ms = policy.backoff_ms(attempt, overloaded)
            logger.warning(
                f"Attempt {attempt} failed, retrying in {delay_ms}ms",
                operation=operation_name,
                attempt=attempt,
                max_attempts=policy.max_attempts,
                classification=classification,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            await sleep_fn(delay_ms / 1000)
        else:
            retry_outcomes_total.labels(operation=operation_name, outcome="success").inc()
            if attempt > 1:
                logger.info(
                    "Operation succeeded after retry",
                    operation=operation_name,
                    attempt=attempt,
                )
            return result

    # Only reachable with max_attempts == 0
    retry_outcomes_total.labels(operation=operation_name, outcome="exhausted").inc()
    logger.error("Retry policy allows no attempts", operation=operation_name)
    raise RetryExhaustedError(operation_name, 0)


def with_retry(
    policy: RetryPolicy,
    operation_name: str | None = None,
    sleep: SleepFn | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorate a coroutine function so every call runs under ``policy``.

    Each retry re-invokes the function with the same arguments.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await retry_call(
                lambda: func(*args, **kwargs),
                policy,
                operation_name=name,
                sleep=sleep,
            )

        return wrapper

    return decorator

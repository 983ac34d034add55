"""
Retry policy for calls to the generative-language API.

Failures are classified as transient overload (HTTP 503, "overloaded")
or other. Overloads back off twice as long and end in
ServiceOverloadedError; other failures end by re-raising the original error.

Main Components:
    - RetryPolicy: Immutable attempt count + backoff unit
    - retry_call: Run a zero-argument coroutine function under a policy
    - with_retry: Decorator form of retry_call
    - is_overload_error: Failure classifier
    - RetryExhaustedError / ServiceOverloadedError: Terminal errors

Usage:
    >>> from interview_practice.retry import RetryPolicy, retry_call
    >>> text = await retry_call(lambda: fetch(), RetryPolicy(5, 3000), operation_name="feedback")
"""

from interview_practice.retry.exceptions import RetryExhaustedError, ServiceOverloadedError
from interview_practice.retry.policy import (
    RetryPolicy,
    is_overload_error,
    retry_call,
    with_retry,
)

__all__ = [
    "RetryPolicy",
    "RetryExhaustedError",
    "ServiceOverloadedError",
    "is_overload_error",
    "retry_call",
    "with_retry",
]

"""
Retry policy exceptions.

Both terminal errors raised by the retry policy share one base class so
callers can catch "gave up" with a single except clause:

- RetryExhaustedError: no result after all configured attempts
- ServiceOverloadedError: every attempt failed with a transient overload;
  resubmitting later may succeed
"""


class RetryExhaustedError(Exception):
    """
    Raised when the retry policy runs out of attempts without a result.

    Non-overload failures are re-raised unchanged, so in practice this is
    only seen directly when the policy is configured with zero attempts.

    Attributes:
        operation: Name of the retried operation (for logs/metrics)
        attempts: Number of attempts actually made
        last_error: Error from the final attempt, if any
    """

    def __init__(
        self,
        operation: str,
        attempts: int,
        last_error: Exception | None = None,
        message: str | None = None,
    ) -> None:
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            message
            or f"Retry attempts exhausted for {operation} after {attempts} attempts"
        )


class ServiceOverloadedError(RetryExhaustedError):
    """
    Raised when every attempt failed because the upstream service is overloaded.

    The original overload error is kept on ``last_error`` and chained as
    ``__cause__``.
    """

    def __init__(self, operation: str, attempts: int, last_error: Exception | None = None) -> None:
        super().__init__(
            operation,
            attempts,
            last_error,
            message=(
                "The AI service is currently overloaded. "
                "Please try again in a few minutes."
            ),
        )

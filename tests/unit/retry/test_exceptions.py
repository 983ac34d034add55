"""Unit tests for retry policy exceptions."""

from interview_practice.retry.exceptions import RetryExhaustedError, ServiceOverloadedError


def test_retry_exhausted_default_message():
    error = RetryExhaustedError("feedback", 5)

    assert error.operation == "feedback"
    assert error.attempts == 5
    assert error.last_error is None
    assert str(error) == "Retry attempts exhausted for feedback after 5 attempts"


def test_retry_exhausted_custom_message():
    error = RetryExhaustedError("feedback", 0, message="No attempts allowed")
    assert str(error) == "No attempts allowed"


def test_service_overloaded_message_is_user_facing():
    cause = RuntimeError("503 Service Unavailable")
    error = ServiceOverloadedError("transcription", 5, cause)

    assert isinstance(error, RetryExhaustedError)
    assert error.last_error is cause
    assert "overloaded" in str(error)
    assert "try again" in str(error)
    # Upstream details stay out of the user-facing message
    assert "503" not in str(error)

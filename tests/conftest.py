"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import sys

import pytest

from interview_practice.config import Settings
from interview_practice.models.enums import Difficulty
from interview_practice.retry.policy import RetryPolicy


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.RETRY_MAX_ATTEMPTS = 2
    """
    return Settings(
        # === Application ===
        APP_NAME="Interview Practice API (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Gemini ===
        GEMINI_API_KEY="test-key",
        GEMINI_BASE_URL="https://gemini.test/v1beta",
        GEMINI_MODEL="gemini-1.5-flash",
        GEMINI_TIMEOUT=5.0,

        # === Retry ===
        RETRY_MAX_ATTEMPTS=3,
        RETRY_BASE_DELAY_MS=1000,

        # === Sandbox ===
        SANDBOX_PYTHON_BINARY=sys.executable,
        SANDBOX_TIMEOUT_SECONDS=5.0,

        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Three attempts with a 1000ms base unit (sleeps are always mocked)."""
    return RetryPolicy(max_attempts=3, base_delay_ms=1000)


@pytest.fixture
def valid_problem_json() -> str:
    """Problem document as the model is asked to produce it."""
    return """{
  "title": "Two Sum",
  "description": "Return indices of the two numbers that add up to target.",
  "difficulty": "beginner",
  "examples": [
    {"input": "nums = [2,7,11,15], target = 9", "output": "[0,1]", "explanation": "2 + 7 = 9"}
  ],
  "constraints": ["2 <= nums.length <= 10^4"],
  "hints": ["Use a hash map"]
}"""


@pytest.fixture(params=list(Difficulty))
def difficulty(request) -> Difficulty:
    """Every difficulty level."""
    return request.param

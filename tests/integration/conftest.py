"""Integration test fixtures (service checks and prerequisites).

Provides fixtures for checking if external services are available.
Live tests are skipped if required credentials or runtimes are missing.
"""

import os

import pytest

from interview_practice.config import Settings


@pytest.fixture(scope="session")
def check_gemini_key():
    """Skip live tests unless GEMINI_API_KEY is set in the environment."""
    if not os.environ.get("GEMINI_API_KEY"):
        pytest.skip("GEMINI_API_KEY not set")


@pytest.fixture
def live_settings(check_gemini_key) -> Settings:
    """Settings read from the real environment, with short retry delays."""
    return Settings(RETRY_MAX_ATTEMPTS=2, RETRY_BASE_DELAY_MS=500)

"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import AsyncMock

import pytest

from interview_practice.llm.base_client import BaseLLMClient
from interview_practice.llm.prompt_builder import PromptBuilder
from interview_practice.models.llm_models import LLMGenerationResponse


def _llm_response(content: str) -> LLMGenerationResponse:
    """LLMGenerationResponse with fixed metadata around ``content``."""
    return LLMGenerationResponse(
        content=content,
        model="gemini-1.5-flash",
        finish_reason="STOP",
        prompt_tokens=40,
        completion_tokens=120,
        latency_ms=850,
    )


@pytest.fixture
def mock_llm_client():
    """Mock LLM client; set ``generate.return_value`` or ``side_effect`` per test."""
    client = AsyncMock(spec=BaseLLMClient)
    client.generate = AsyncMock(return_value=_llm_response("ok"))
    client.health_check = AsyncMock(return_value=True)
    return client


@pytest.fixture
def mock_sleep():
    """Recorded replacement for asyncio.sleep."""
    return AsyncMock(return_value=None)


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """Prompt builder over the bundled templates."""
    return PromptBuilder()


@pytest.fixture
def llm_response():
    """Factory fixture building an LLMGenerationResponse from generated text.

    Usage:
        def test_something(mock_llm_client, llm_response):
            mock_llm_client.generate.return_value = llm_response("Good answer")
    """
    return _llm_response

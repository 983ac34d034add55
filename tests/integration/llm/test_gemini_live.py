"""Integration tests against the real Gemini API.

These tests require network access and a valid key:
    GEMINI_API_KEY=... pytest tests/integration/llm

Tests are skipped if GEMINI_API_KEY is not set.
"""

import pytest
import pytest_asyncio

from interview_practice.llm.gemini_client import GeminiClient
from interview_practice.llm.prompt_builder import PromptBuilder
from interview_practice.models.enums import Difficulty
from interview_practice.services.interview import InterviewService

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def gemini_client(live_settings):
    """Real Gemini client for tests."""
    client = GeminiClient(
        api_key=live_settings.GEMINI_API_KEY,
        model=live_settings.GEMINI_MODEL,
        base_url=live_settings.GEMINI_BASE_URL,
        timeout=live_settings.GEMINI_TIMEOUT,
    )
    yield client
    await client.close()


@pytest.fixture
def live_service(gemini_client, live_settings) -> InterviewService:
    return InterviewService.from_settings(gemini_client, PromptBuilder(), live_settings)


@pytest.mark.asyncio
async def test_gemini_health_check(gemini_client):
    assert await gemini_client.health_check() is True


@pytest.mark.asyncio
async def test_live_feedback(live_service):
    feedback = await live_service.generate_feedback(
        "Tell me about yourself.",
        "I am a software engineer with five years of experience building APIs.",
    )
    assert feedback.strip()


@pytest.mark.asyncio
async def test_live_problem_generation(live_service):
    """Whatever the model returns, the result is a valid problem at the requested level."""
    problem = await live_service.generate_problem(Difficulty.INTERMEDIATE)

    assert problem.title
    assert problem.difficulty == Difficulty.INTERMEDIATE

"""
FastAPI dependency injection for the Interview Practice API.

Provides singleton instances of expensive resources (LLM client, prompt
builder, sandbox) and a factory for the per-request InterviewService.
"""

from functools import lru_cache

from fastapi import Depends

from interview_practice.config import Settings, settings
from interview_practice.llm.base_client import BaseLLMClient
from interview_practice.llm.gemini_client import GeminiClient
from interview_practice.llm.prompt_builder import PromptBuilder
from interview_practice.sandbox.executor import CodeSandbox
from interview_practice.services.interview import InterviewService


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_llm_client() -> BaseLLMClient:
    """
    Get singleton Gemini client with connection pooling.

    The client keeps one httpx connection pool for the whole process.
    A missing API key does not fail here; it fails the first generate call
    so the service can still start and report itself as not configured.

    Returns:
        GeminiClient instance
    """
    current = get_settings()
    return GeminiClient(
        api_key=current.GEMINI_API_KEY,
        model=current.GEMINI_MODEL,
        base_url=current.GEMINI_BASE_URL,
        timeout=current.GEMINI_TIMEOUT,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.

    Loads Jinja2 templates once and reuses them across requests.
    """
    current = get_settings()
    return PromptBuilder(
        feedback_max_tokens=current.FEEDBACK_MAX_TOKENS,
        feedback_temperature=current.FEEDBACK_TEMPERATURE,
        problem_max_tokens=current.PROBLEM_MAX_TOKENS,
        problem_temperature=current.PROBLEM_TEMPERATURE,
    )


@lru_cache()
def get_sandbox() -> CodeSandbox:
    """Get singleton code sandbox."""
    return CodeSandbox.from_settings(get_settings())


def get_interview_service(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> InterviewService:
    """
    Create interview service with injected dependencies.

    Note: InterviewService is NOT cached because it's lightweight and stateless.
    All heavy resources (client, builder) are singletons.
    """
    return InterviewService.from_settings(llm_client, prompt_builder, settings)

"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- GeminiClient: Implementation for the Generative Language generateContent API
- PromptBuilder: Builds requests for transcription, feedback and problem generation
- text_utils: Output cleanup (code-fence stripping)
- exceptions: LLM-specific exceptions
"""

from interview_practice.llm.base_client import BaseLLMClient
from interview_practice.llm.exceptions import (
    LLMClientError,
    LLMConfigurationError,
    LLMConnectionError,
    LLMHttpError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from interview_practice.llm.gemini_client import GeminiClient
from interview_practice.llm.prompt_builder import PromptBuilder

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConfigurationError",
    "LLMConnectionError",
    "LLMHttpError",
    "LLMResponseFormatError",
    "LLMTimeoutError",
]

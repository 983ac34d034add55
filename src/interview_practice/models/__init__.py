"""
Pydantic data models for the Interview Practice API.

Includes:
- Enums (Difficulty, Language, ExecutionStatus)
- Problem models (ProblemSpec, ProblemExample, fallback_problem)
- LLM models (LLMGenerationRequest, LLMGenerationResponse, content parts)
- Execution models (ExecutionResult)
"""

from interview_practice.models.enums import Difficulty, ExecutionStatus, Language
from interview_practice.models.execution import ExecutionResult
from interview_practice.models.llm_models import (
    ContentPart,
    InlineDataPart,
    LLMGenerationRequest,
    LLMGenerationResponse,
    TextPart,
)
from interview_practice.models.problem import ProblemExample, ProblemSpec, fallback_problem

__all__ = [
    "Difficulty",
    "ExecutionStatus",
    "Language",
    "ExecutionResult",
    "ContentPart",
    "InlineDataPart",
    "LLMGenerationRequest",
    "LLMGenerationResponse",
    "TextPart",
    "ProblemExample",
    "ProblemSpec",
    "fallback_problem",
]

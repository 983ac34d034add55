"""
API-specific request and response models for FastAPI endpoints.

ProblemSpec and ExecutionResult are returned as-is; these models cover the
remaining request bodies and wrappers.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from interview_practice.models.enums import Difficulty, Language


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedbackRequest(BaseModel):
    """Request for interview answer feedback."""

    question: str = Field(
        min_length=1,
        max_length=2000,
        description="Interview question that was asked",
        examples=["Tell me about a time you disagreed with a teammate."]
    )
    answer: str = Field(
        min_length=1,
        max_length=20000,
        description="Candidate's answer (typed or transcribed)"
    )


class FeedbackResponse(BaseModel):
    """Generated feedback text."""

    feedback: str


class ProblemRequest(BaseModel):
    """Request for a generated coding problem."""

    difficulty: Difficulty = Field(
        default=Difficulty.BEGINNER,
        description="Requested difficulty"
    )


class TranscriptionResponse(BaseModel):
    """Transcribed audio text."""

    text: str


class ExecutionRequest(BaseModel):
    """Code submitted to the sandbox."""

    code: str = Field(description="Source code")
    language: Language = Field(default=Language.JAVASCRIPT)


class TemplateResponse(BaseModel):
    """Starter code for a language."""

    language: Language
    code: str


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded", "unhealthy"]
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Component-specific health status",
        examples=[{"gemini": "ok", "sandbox_python": "ok", "sandbox_javascript": "unavailable"}]
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code or type",
        examples=["service_overloaded", "upstream_error", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[dict] = Field(
        default=None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)"
    )

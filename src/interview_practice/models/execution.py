"""Sandbox execution result model."""

from pydantic import BaseModel, Field

from interview_practice.models.enums import ExecutionStatus, Language


class ExecutionResult(BaseModel):
    """Captured outcome of running submitted code."""

    language: Language
    status: ExecutionStatus
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = Field(default=None, description="None when the process never ran or was killed")
    duration_ms: int = Field(default=0, ge=0)
    truncated: bool = Field(default=False, description="Output was cut to the configured limit")
    line_count: int = Field(default=0, ge=0)
    char_count: int = Field(default=0, ge=0)
    message: str | None = Field(default=None, description="Human-readable note for non-ok statuses")

"""
Enumerations for Interview Practice data models.

All enums are closed sets - no values outside these sets are accepted by the API.
"""

from enum import Enum


class Difficulty(str, Enum):
    """
    Coding problem difficulty.

    Ordered from easiest to hardest.
    """

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Language(str, Enum):
    """Languages the practice editor offers starter templates for."""

    JAVASCRIPT = "javascript"
    PYTHON = "python"
    JAVA = "java"
    CPP = "cpp"


class ExecutionStatus(str, Enum):
    """Outcome of a sandbox execution."""

    OK = "ok"
    ERROR = "error"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"

"""
Coding problem models.

ProblemSpec is what problem generation returns: either parsed from the model
output or the fallback problem for the requested difficulty.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from interview_practice.models.enums import Difficulty


def _as_text(value: Any) -> Any:
    """Render a non-string JSON value (9, [0, 1], true) as its JSON text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class ProblemExample(BaseModel):
    """
    Single worked example shown with a problem.

    Models often answer with raw JSON values (``"output": [0, 1]``); these
    are kept as their JSON text.
    """

    input: str = Field(..., description="Example input, e.g. 'nums = [2,7,11,15], target = 9'")
    output: str = Field(..., description="Expected output for the input")
    explanation: str = Field(default="", description="Why the output is correct")

    @field_validator("input", "output", "explanation", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Any:
        return _as_text(v)


class ProblemSpec(BaseModel):
    """
    Structured coding exercise.

    Field names match the JSON document the model is asked to produce, so
    parsed JSON can be validated with ``ProblemSpec.model_validate``.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, description="Problem title")
    description: str = Field(..., description="Problem statement")
    difficulty: Difficulty = Field(..., description="Difficulty level")
    examples: list[ProblemExample] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    hints: list[str] = Field(default_factory=list)

    @field_validator("constraints", "hints", mode="before")
    @classmethod
    def coerce_items_to_text(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [_as_text(item) for item in v]
        return v


def fallback_problem(difficulty: Difficulty) -> ProblemSpec:
    """
    Problem served when the generated one cannot be parsed.

    Title is scoped to the requested difficulty, everything else is fixed.
    """
    return ProblemSpec(
        title=f"{difficulty.value.capitalize()} Array Problem",
        description=(
            "Find the solution to this array-based problem using optimal "
            "time and space complexity."
        ),
        difficulty=difficulty,
        examples=[
            ProblemExample(
                input="arr = [1, 2, 3, 4, 5]",
                output="result",
                explanation="Process the array according to the problem requirements.",
            )
        ],
        constraints=["1 <= arr.length <= 1000", "Values are integers"],
        hints=["Consider using two pointers", "Think about time complexity"],
    )

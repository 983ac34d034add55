"""
Unit tests for domain and LLM request models.
"""

import pytest
from pydantic import ValidationError

from interview_practice.models.enums import Difficulty
from interview_practice.models.llm_models import InlineDataPart, LLMGenerationRequest, TextPart
from interview_practice.models.problem import ProblemSpec, fallback_problem


class TestFallbackProblem:
    def test_title_uses_difficulty(self, difficulty):
        problem = fallback_problem(difficulty)

        assert problem.title == f"{difficulty.value.capitalize()} Array Problem"
        assert problem.difficulty == difficulty

    def test_fixed_content(self):
        problem = fallback_problem(Difficulty.BEGINNER)

        assert problem.examples[0].input == "arr = [1, 2, 3, 4, 5]"
        assert problem.constraints == ["1 <= arr.length <= 1000", "Values are integers"]
        assert problem.hints == ["Consider using two pointers", "Think about time complexity"]


class TestProblemSpec:
    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            ProblemSpec(title="", description="D", difficulty="beginner")

    def test_example_explanation_optional(self):
        problem = ProblemSpec.model_validate(
            {
                "title": "T",
                "description": "D",
                "difficulty": "intermediate",
                "examples": [{"input": "1", "output": "2"}],
            }
        )
        assert problem.examples[0].explanation == ""

    def test_numeric_example_output_rendered_as_json(self):
        problem = ProblemSpec.model_validate(
            {
                "title": "T",
                "description": "D",
                "difficulty": "beginner",
                "examples": [{"input": 5, "output": [1, 2], "explanation": 3.5}],
            }
        )

        example = problem.examples[0]
        assert (example.input, example.output, example.explanation) == ("5", "[1, 2]", "3.5")

    def test_non_list_hints_rejected(self):
        with pytest.raises(ValidationError):
            ProblemSpec(title="T", description="D", difficulty="beginner", hints="use a map")


class TestLLMGenerationRequest:
    def test_requires_a_part(self):
        with pytest.raises(ValidationError):
            LLMGenerationRequest(parts=[])

    def test_payload_without_generation_config(self):
        request = LLMGenerationRequest(parts=[TextPart(text="hi")])
        assert request.to_payload() == {"contents": [{"parts": [{"text": "hi"}]}]}

    def test_payload_preserves_part_order(self):
        request = LLMGenerationRequest(
            parts=[
                TextPart(text="first"),
                InlineDataPart(mime_type="audio/wav", data="AA=="),
                TextPart(text="last"),
            ],
            temperature=0.5,
        )

        payload = request.to_payload()

        assert payload["contents"][0]["parts"] == [
            {"text": "first"},
            {"inline_data": {"mime_type": "audio/wav", "data": "AA=="}},
            {"text": "last"},
        ]
        assert payload["generationConfig"] == {"temperature": 0.5}

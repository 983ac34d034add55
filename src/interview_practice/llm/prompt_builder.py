"""
Prompt builder for LLM requests.

Responsible for:
- Loading and rendering Jinja2 templates for each use-case
- Inlining audio as base64 for transcription
- Constructing complete LLMGenerationRequest objects with generation config
"""

import base64
from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from interview_practice.models.enums import Difficulty
from interview_practice.models.llm_models import InlineDataPart, LLMGenerationRequest, TextPart


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptBuilder:
    """
    Build LLMGenerationRequest objects for the three use-cases.

    Templates:
    - transcription_prompt.txt: static instruction placed before the audio part
    - feedback_prompt.txt: variables ``question``, ``answer``
    - problem_prompt.txt: variable ``difficulty``
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        feedback_max_tokens: int = 300,
        feedback_temperature: float = 0.7,
        problem_max_tokens: int = 500,
        problem_temperature: float = 0.8,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates (default: bundled)
            feedback_max_tokens: maxOutputTokens for feedback generation
            feedback_temperature: Temperature for feedback generation
            problem_max_tokens: maxOutputTokens for problem generation
            problem_temperature: Temperature for problem generation
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.feedback_max_tokens = feedback_max_tokens
        self.feedback_temperature = feedback_temperature
        self.problem_max_tokens = problem_max_tokens
        self.problem_temperature = problem_temperature

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False  # We're generating prompts, not HTML
        )

        try:
            self.transcription_template = self.jinja_env.get_template("transcription_prompt.txt")
            self.feedback_template = self.jinja_env.get_template("feedback_prompt.txt")
            self.problem_template = self.jinja_env.get_template("problem_prompt.txt")
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_transcription_request(
        self, audio: bytes, mime_type: str = "audio/wav"
    ) -> LLMGenerationRequest:
        """
        Build a multipart request: instruction text followed by inline audio.

        Args:
            audio: Raw audio bytes
            mime_type: Audio MIME type

        Returns:
            LLMGenerationRequest without generation config
        """
        encoded = base64.b64encode(audio).decode("ascii")
        return LLMGenerationRequest(
            parts=[
                TextPart(text=self.transcription_template.render()),
                InlineDataPart(mime_type=mime_type, data=encoded),
            ]
        )

    def build_feedback_request(self, question: str, answer: str) -> LLMGenerationRequest:
        """Build the HR-interviewer feedback request."""
        prompt = self.feedback_template.render(question=question, answer=answer)
        return LLMGenerationRequest(
            parts=[TextPart(text=prompt)],
            max_output_tokens=self.feedback_max_tokens,
            temperature=self.feedback_temperature,
        )

    def build_problem_request(self, difficulty: Difficulty) -> LLMGenerationRequest:
        """Build the JSON-only problem generation request."""
        prompt = self.problem_template.render(difficulty=difficulty.value)
        return LLMGenerationRequest(
            parts=[TextPart(text=prompt)],
            max_output_tokens=self.problem_max_tokens,
            temperature=self.problem_temperature,
        )

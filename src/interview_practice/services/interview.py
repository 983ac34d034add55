"""
Interview practice use-cases.

Each use-case builds its request with PromptBuilder, sends it through the
LLM client under the retry policy, and post-processes the generated text:

- transcribe: text returned verbatim
- generate_feedback: text returned verbatim
- generate_problem: code fences stripped, parsed into ProblemSpec; any parse
  failure, or a response with no candidate text, is replaced by the fallback
  problem for the requested difficulty
"""

import json

import structlog
from pydantic import ValidationError as PydanticValidationError

from interview_practice.config import Settings
from interview_practice.llm.base_client import BaseLLMClient
from interview_practice.llm.exceptions import LLMResponseFormatError
from interview_practice.llm.prompt_builder import PromptBuilder
from interview_practice.llm.text_utils import strip_code_fences
from interview_practice.models.enums import Difficulty
from interview_practice.models.llm_models import LLMGenerationRequest
from interview_practice.models.problem import ProblemSpec, fallback_problem
from interview_practice.monitoring.metrics import problem_fallbacks_total
from interview_practice.retry.policy import RetryPolicy, SleepFn, retry_call

logger = structlog.get_logger(__name__)


class InterviewService:
    """
    Use-case layer consumed by the API routes.

    Attributes:
        llm_client: Client used for every generateContent call
        prompt_builder: Builds per-use-case requests
        retry_policy: Policy shared by all three use-cases
        default_mime_type: MIME type assumed for audio without one
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        retry_policy: RetryPolicy,
        default_mime_type: str = "audio/wav",
        sleep: SleepFn | None = None,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.retry_policy = retry_policy
        self.default_mime_type = default_mime_type
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls, llm_client: BaseLLMClient, prompt_builder: PromptBuilder, settings: Settings
    ) -> "InterviewService":
        return cls(
            llm_client=llm_client,
            prompt_builder=prompt_builder,
            retry_policy=RetryPolicy.from_settings(settings),
            default_mime_type=settings.TRANSCRIPTION_DEFAULT_MIME_TYPE,
        )

    async def _generate_text(
        self,
        request: LLMGenerationRequest,
        operation: str,
        operation_name: str,
        allow_missing_content: bool = False,
    ) -> str | None:
        """
        Run one generateContent call under the retry policy.

        With ``allow_missing_content`` a response carrying no candidate text
        returns None immediately instead of raising (and being retried).
        """

        async def call() -> str | None:
            try:
                response = await self.llm_client.generate(request, operation=operation)
            except LLMResponseFormatError as e:
                if not allow_missing_content:
                    raise
                logger.warning(
                    "Generated response had no usable content",
                    operation=operation_name,
                    error=e.message,
                )
                return None
            return response.content

        return await retry_call(
            call,
            self.retry_policy,
            operation_name=operation_name,
            sleep=self._sleep,
        )

    async def transcribe(self, audio: bytes, mime_type: str | None = None) -> str:
        """
        Transcribe recorded audio.

        Args:
            audio: Raw audio bytes
            mime_type: Audio MIME type (default: configured default, audio/wav)

        Returns:
            Transcribed text, verbatim
        """
        mime = mime_type or self.default_mime_type
        logger.info("Starting audio transcription", audio_bytes=len(audio), mime_type=mime)
        request = self.prompt_builder.build_transcription_request(audio, mime)
        return await self._generate_text(request, "Transcription", "transcription")

    async def generate_feedback(self, question: str, answer: str) -> str:
        """
        Generate a short critique of an interview answer.

        Returns:
            Feedback text, verbatim
        """
        logger.info(
            "Generating interview feedback",
            question_chars=len(question),
            answer_chars=len(answer),
        )
        request = self.prompt_builder.build_feedback_request(question, answer)
        return await self._generate_text(request, "Feedback generation", "feedback")

    async def generate_problem(self, difficulty: Difficulty) -> ProblemSpec:
        """
        Generate a coding problem.

        Malformed or missing output never fails the call: it is replaced by
        ``fallback_problem(difficulty)``. Transport, HTTP and retry errors
        still propagate.

        Returns:
            ProblemSpec whose difficulty equals the requested one
        """
        logger.info("Generating DSA problem", difficulty=difficulty.value)
        request = self.prompt_builder.build_problem_request(difficulty)
        text = await self._generate_text(
            request, "Problem generation", "problem_generation", allow_missing_content=True
        )
        if text is None:
            return _use_fallback(difficulty, "No candidate text in response", "")
        return parse_problem(text, difficulty)


def parse_problem(text: str, difficulty: Difficulty) -> ProblemSpec:
    """
    Parse generated text into a ProblemSpec, echoing ``difficulty``.

    Falls back to the difficulty's fallback problem when the text is not a
    JSON object with the ProblemSpec shape.
    """
    cleaned = strip_code_fences(text)
    try:
        raw = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return _use_fallback(difficulty, f"{e.msg} at line {e.lineno} col {e.colno}", cleaned)

    if not isinstance(raw, dict):
        return _use_fallback(difficulty, f"Expected object, got {type(raw).__name__}", cleaned)

    # Models sometimes answer with their own wording ("easy", "Medium")
    raw["difficulty"] = difficulty.value
    try:
        return ProblemSpec.model_validate(raw)
    except PydanticValidationError as e:
        return _use_fallback(difficulty, f"{e.error_count()} schema errors", cleaned)


def _use_fallback(difficulty: Difficulty, reason: str, content: str) -> ProblemSpec:
    problem_fallbacks_total.labels(difficulty=difficulty.value).inc()
    logger.warning(
        "Failed to parse generated problem, using fallback",
        difficulty=difficulty.value,
        reason=reason,
        content_snippet=content[:200],
    )
    return fallback_problem(difficulty)

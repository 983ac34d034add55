"""
API routes for the practice tool.

- POST /transcriptions: transcribe an uploaded audio answer
- POST /feedback: feedback on an interview answer
- POST /problems: generate a coding problem
- GET /templates/{language}: starter code
- POST /executions: run code in the sandbox
- GET /health: upstream and sandbox status
"""

import logging
import time
from contextlib import contextmanager

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram

from interview_practice.api.dependencies import (
    get_interview_service,
    get_llm_client,
    get_sandbox,
    get_settings,
)
from interview_practice.api.models import (
    ExecutionRequest,
    FeedbackRequest,
    FeedbackResponse,
    HealthResponse,
    ProblemRequest,
    TemplateResponse,
    TranscriptionResponse,
)
from interview_practice.config import Settings
from interview_practice.llm.base_client import BaseLLMClient
from interview_practice.models.enums import Language
from interview_practice.models.execution import ExecutionResult
from interview_practice.models.problem import ProblemSpec
from interview_practice.sandbox.executor import CodeSandbox
from interview_practice.sandbox.templates import code_template
from interview_practice.services.interview import InterviewService

logger = logging.getLogger(__name__)

# Prometheus metrics
practice_requests_total = Counter(
    "practice_requests_total",
    "Total use-case requests",
    ["endpoint", "status"]
)

practice_duration_seconds = Histogram(
    "practice_duration_seconds",
    "Use-case request duration in seconds",
    ["endpoint"]
)

router = APIRouter()

ERROR_RESPONSES = {
    502: {"description": "AI service error"},
    503: {"description": "AI service overloaded after all retries"},
    504: {"description": "AI service timed out"},
}


@contextmanager
def _track(endpoint: str):
    """Record request count and duration for one endpoint."""
    start = time.time()
    try:
        yield
    except Exception as exc:
        practice_requests_total.labels(endpoint=endpoint, status="error").inc()
        logger.warning(
            f"{endpoint} request failed",
            extra={"error_type": type(exc).__name__},
        )
        raise
    else:
        practice_requests_total.labels(endpoint=endpoint, status="success").inc()
    finally:
        practice_duration_seconds.labels(endpoint=endpoint).observe(time.time() - start)


@router.post(
    "/transcriptions",
    response_model=TranscriptionResponse,
    summary="Transcribe a recorded answer",
    responses={400: {"description": "Empty audio"}, 413: {"description": "Audio too large"}, **ERROR_RESPONSES},
)
async def transcribe(
    audio: UploadFile = File(..., description="Recorded audio (wav, webm, mp3, ...)"),
    service: InterviewService = Depends(get_interview_service),
    settings: Settings = Depends(get_settings),
) -> TranscriptionResponse:
    """
    Transcribe an uploaded audio file.

    The upload's content type is forwarded as the audio MIME type; uploads
    without one are treated as the configured default (audio/wav).
    """
    data = await audio.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Audio file is empty")
    if len(data) > settings.TRANSCRIPTION_MAX_AUDIO_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Audio exceeds {settings.TRANSCRIPTION_MAX_AUDIO_BYTES} bytes",
        )

    mime_type = audio.content_type
    if not mime_type or mime_type == "application/octet-stream":
        mime_type = None

    with _track("transcriptions"):
        text = await service.transcribe(data, mime_type)
    return TranscriptionResponse(text=text)


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    summary="Feedback on an interview answer",
    responses=ERROR_RESPONSES,
)
async def feedback(
    request: FeedbackRequest,
    service: InterviewService = Depends(get_interview_service),
) -> FeedbackResponse:
    with _track("feedback"):
        text = await service.generate_feedback(request.question, request.answer)
    return FeedbackResponse(feedback=text)


@router.post(
    "/problems",
    response_model=ProblemSpec,
    summary="Generate a coding problem",
    description="""
    Generate a DSA problem at the requested difficulty.

    If the AI output cannot be parsed, a fallback problem for the same
    difficulty is returned instead of an error.
    """,
    responses=ERROR_RESPONSES,
)
async def generate_problem(
    request: ProblemRequest,
    service: InterviewService = Depends(get_interview_service),
) -> ProblemSpec:
    with _track("problems"):
        return await service.generate_problem(request.difficulty)


@router.get(
    "/templates/{language}",
    response_model=TemplateResponse,
    summary="Starter code for a language",
)
async def get_template(language: Language) -> TemplateResponse:
    return TemplateResponse(language=language, code=code_template(language))


@router.post(
    "/executions",
    response_model=ExecutionResult,
    summary="Run code in the sandbox",
    responses={400: {"description": "Empty code"}, 413: {"description": "Code too large"}},
)
async def execute_code(
    request: ExecutionRequest,
    sandbox: CodeSandbox = Depends(get_sandbox),
) -> ExecutionResult:
    """
    Execute submitted code.

    Python and JavaScript run in an isolated subprocess; Java and C++ are
    reported as unsupported with basic code statistics.
    """
    with _track("executions"):
        return await sandbox.execute(request.code, request.language)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Healthy or degraded"},
        503: {"description": "AI service unreachable or not configured"},
    },
)
async def health_check(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    sandbox: CodeSandbox = Depends(get_sandbox),
    settings: Settings = Depends(get_settings),
):
    """
    Check the AI service and sandbox runtimes.

    The AI service is critical (503 when down); a missing sandbox runtime
    only degrades the service.
    """
    services = {
        "gemini": "ok" if await llm_client.health_check() else "unreachable",
        "sandbox_python": "ok" if sandbox.runtime_available(Language.PYTHON) else "unavailable",
        "sandbox_javascript": "ok" if sandbox.runtime_available(Language.JAVASCRIPT) else "unavailable",
    }

    if all(value == "ok" for value in services.values()):
        health_status = "healthy"
        status_code = status.HTTP_200_OK
    elif services["gemini"] == "ok":
        health_status = "degraded"
        status_code = status.HTTP_200_OK
    else:
        health_status = "unhealthy"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    logger.info(
        "Health check",
        extra={"status": health_status, "services": services},
    )

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )

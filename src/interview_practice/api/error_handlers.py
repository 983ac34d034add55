"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to HTTP status codes. Every error body has the
ErrorResponse shape: {"error", "message", "details", "timestamp"}.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from interview_practice.api.models import ErrorResponse
from interview_practice.llm.exceptions import (
    LLMConfigurationError,
    LLMConnectionError,
    LLMHttpError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from interview_practice.retry.exceptions import RetryExhaustedError, ServiceOverloadedError
from interview_practice.sandbox.exceptions import CodeTooLargeError, EmptyCodeError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, error: str, message: str, details: dict | None = None
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def service_overloaded_handler(request: Request, exc: ServiceOverloadedError) -> JSONResponse:
    """
    Handle upstream overload after all attempts.

    Maps to 503 Service Unavailable; the client may resubmit later.
    """
    logger.warning(
        "Upstream overloaded",
        extra={"operation": exc.operation, "attempts": exc.attempts},
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "service_overloaded",
        str(exc),
        {"operation": exc.operation, "attempts": exc.attempts},
    )


async def retry_exhausted_handler(request: Request, exc: RetryExhaustedError) -> JSONResponse:
    """Handle retry exhaustion without a classified cause. Maps to 503."""
    logger.error(
        "Retry exhausted",
        extra={"operation": exc.operation, "attempts": exc.attempts},
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "retry_exhausted",
        "Unable to process request after multiple attempts",
        {"operation": exc.operation, "attempts": exc.attempts},
    )


async def llm_http_error_handler(request: Request, exc: LLMHttpError) -> JSONResponse:
    """
    Handle non-2xx responses from the generative-language API.

    Maps to 502 Bad Gateway. The upstream body is logged, not returned.
    """
    logger.error(
        "Upstream HTTP error",
        extra={"upstream_status": exc.status_code, "error": exc.message[:500]},
    )
    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "upstream_error",
        "The AI service returned an error",
        {"upstream_status": exc.status_code},
    )


async def llm_response_format_handler(request: Request, exc: LLMResponseFormatError) -> JSONResponse:
    """Handle 2xx responses without generated text. Maps to 502."""
    logger.error("Upstream response without content", extra={"details": exc.details})
    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "upstream_invalid_response",
        "The AI service returned no usable content",
    )


async def llm_connection_error_handler(request: Request, exc: LLMConnectionError) -> JSONResponse:
    """Handle network errors. Maps to 502 Bad Gateway."""
    logger.error(
        "LLM connection error",
        extra={"error": str(exc)},
    )
    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        "llm_connection_failed",
        "Unable to connect to the AI service",
    )


async def llm_timeout_error_handler(request: Request, exc: LLMTimeoutError) -> JSONResponse:
    """Handle upstream timeouts. Maps to 504 Gateway Timeout."""
    logger.error(
        "LLM timeout error",
        extra={"error": str(exc)},
    )
    return _error_response(
        status.HTTP_504_GATEWAY_TIMEOUT,
        "llm_timeout",
        "The AI service request timed out",
    )


async def llm_configuration_error_handler(
    request: Request, exc: LLMConfigurationError
) -> JSONResponse:
    """Handle missing credentials. Maps to 500; this is an operator problem."""
    logger.error("LLM client not configured", extra={"details": exc.details})
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "not_configured",
        "The AI service is not configured on this server",
    )


async def empty_code_handler(request: Request, exc: EmptyCodeError) -> JSONResponse:
    """Handle empty sandbox submissions. Maps to 400."""
    return _error_response(status.HTTP_400_BAD_REQUEST, "empty_code", exc.message)


async def code_too_large_handler(request: Request, exc: CodeTooLargeError) -> JSONResponse:
    """Handle oversized sandbox submissions. Maps to 413."""
    return _error_response(
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "code_too_large", exc.message, exc.details
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception(
        "Unexpected error",
        extra={"error_type": type(exc).__name__},
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
# Starlette resolves handlers along the MRO, so subclasses listed here win.
EXCEPTION_HANDLERS = {
    ServiceOverloadedError: service_overloaded_handler,
    RetryExhaustedError: retry_exhausted_handler,
    LLMHttpError: llm_http_error_handler,
    LLMResponseFormatError: llm_response_format_handler,
    LLMTimeoutError: llm_timeout_error_handler,
    LLMConnectionError: llm_connection_error_handler,
    LLMConfigurationError: llm_configuration_error_handler,
    EmptyCodeError: empty_code_handler,
    CodeTooLargeError: code_too_large_handler,
    Exception: generic_error_handler,
}

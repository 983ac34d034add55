"""
Gemini client implementation for the Generative Language API.

Communicates with the generateContent endpoint using httpx AsyncClient.
Supports:
- Text-only and multipart (inline base64 audio) prompts
- Generation config (maxOutputTokens, temperature)
- Connection pooling via a persistent client
- Health check against the model metadata endpoint

Retries are NOT done here; callers wrap generate() in the retry policy.
"""

import time
from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import SecretStr

from interview_practice.llm.base_client import BaseLLMClient
from interview_practice.llm.exceptions import (
    LLMConfigurationError,
    LLMConnectionError,
    LLMHttpError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from interview_practice.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from interview_practice.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)


def _metric_label(operation: str) -> str:
    return operation.lower().replace(" ", "_")


class GeminiClient(BaseLLMClient):
    """
    Gemini-specific LLM client using httpx for async HTTP communication.

    API Endpoints:
    - POST /models/{model}:generateContent: Generate content
    - GET /models/{model}: Model metadata (health check)

    The API key is sent as the ``key`` query parameter and is never logged.
    """

    def __init__(
        self,
        api_key: SecretStr | str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Generative Language API key
            model: Model name (e.g. "gemini-1.5-flash")
            base_url: API base URL including version segment
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits (default: 10 max connections)
            transport: Optional httpx transport (tests use httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)

        self._api_key = api_key if isinstance(api_key, SecretStr) else SecretStr(api_key)
        self.model = model

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

        logger.info(
            "Gemini client initialized",
            model=self.model,
            api_key_configured=bool(self._api_key.get_secret_value()),
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def _require_key(self) -> str:
        key = self._api_key.get_secret_value()
        if not key:
            raise LLMConfigurationError(
                "GEMINI_API_KEY is not set",
                details={"setting": "GEMINI_API_KEY"},
            )
        return key

    async def generate(
        self, request: LLMGenerationRequest, operation: str = "Generation"
    ) -> LLMGenerationResponse:
        """
        Generate content via POST /models/{model}:generateContent.

        Payload:
        {
            "contents": [{"parts": [{"text": "..."}, {"inline_data": {...}}]}],
            "generationConfig": {"maxOutputTokens": 300, "temperature": 0.7}
        }

        Response (abridged):
        {
            "candidates": [{"content": {"parts": [{"text": "..."}]}, "finishReason": "STOP"}],
            "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 80},
            "modelVersion": "gemini-1.5-flash-002"
        }
        """
        api_key = self._require_key()
        label = _metric_label(operation)
        payload = request.to_payload()
        start_time = time.time()

        logger.info(
            "Sending generateContent request",
            operation=operation,
            model=self.model,
            parts=len(request.parts),
            max_output_tokens=request.max_output_tokens,
            temperature=request.temperature,
        )

        try:
            client = await self._get_client()
            response = await client.post(
                f"/models/{self.model}:generateContent",
                params={"key": api_key},
                json=payload,
            )
        except httpx.TimeoutException as e:
            llm_latency_seconds.labels(operation=label, success="false").observe(time.time() - start_time)
            logger.warning("Gemini request timeout", operation=operation, timeout=self.timeout)
            raise LLMTimeoutError(
                f"{operation} timed out after {self.timeout}s",
                details={"timeout": self.timeout},
            ) from e
        except httpx.TransportError as e:
            llm_latency_seconds.labels(operation=label, success="false").observe(time.time() - start_time)
            logger.warning("Gemini network error", operation=operation, error=str(e))
            raise LLMConnectionError(
                f"{operation} failed: network error: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if not response.is_success:
            llm_latency_seconds.labels(operation=label, success="false").observe(time.time() - start_time)
            error_text = response.text
            logger.error(
                "Gemini HTTP error",
                operation=operation,
                status_code=response.status_code,
                error_text=error_text[:500],
            )
            raise LLMHttpError(
                f"{operation} failed: {response.status_code} {response.reason_phrase} - {error_text}",
                status_code=response.status_code,
                body=error_text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise LLMResponseFormatError(
                f"{operation} failed: response is not JSON",
                details={"body": response.text[:500]},
            ) from e

        content = self._extract_text(data, operation)
        latency_ms = int((time.time() - start_time) * 1000)
        llm_latency_seconds.labels(operation=label, success="true").observe(latency_ms / 1000.0)

        usage = data.get("usageMetadata") or {}
        prompt_tokens = usage.get("promptTokenCount")
        completion_tokens = usage.get("candidatesTokenCount")
        if prompt_tokens:
            llm_tokens_total.labels(operation=label, token_type="prompt").inc(prompt_tokens)
        if completion_tokens:
            llm_tokens_total.labels(operation=label, token_type="completion").inc(completion_tokens)

        finish_reason = data["candidates"][0].get("finishReason")
        logger.info(
            "Gemini generation successful",
            operation=operation,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=finish_reason,
        )

        return LLMGenerationResponse(
            content=content,
            model=data.get("modelVersion", self.model),
            finish_reason=finish_reason,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
        )

    @staticmethod
    def _extract_text(data: Dict[str, Any], operation: str) -> str:
        """Pull ``candidates[0].content.parts[0].text`` out of a response body."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            prompt_feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            raise LLMResponseFormatError(
                f"{operation} failed: response contained no generated text",
                details={"prompt_feedback": prompt_feedback},
            ) from e
        if not isinstance(text, str):
            raise LLMResponseFormatError(
                f"{operation} failed: generated text is not a string",
                details={"type": type(text).__name__},
            )
        return text

    async def health_check(self) -> bool:
        """
        Check reachability and credentials via GET /models/{model}.

        Returns True on a 2xx response, False otherwise (including a missing key).
        """
        try:
            api_key = self._require_key()
            client = await self._get_client()
            response = await client.get(
                f"/models/{self.model}", params={"key": api_key}, timeout=5.0
            )
            response.raise_for_status()
            logger.debug("Gemini health check passed")
            return True
        except (LLMConfigurationError, httpx.HTTPError) as e:
            logger.warning("Gemini health check failed", error_type=type(e).__name__)
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Gemini client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

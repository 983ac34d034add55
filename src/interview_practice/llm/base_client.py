"""
Abstract base client for LLM inference.

Defines the interface that LLM client implementations must adhere to, so the
use-case layer (InterviewService) can be tested against a mock client and
the provider can be swapped without touching it.
"""

from abc import ABC, abstractmethod

import structlog

from interview_practice.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM inference clients.

    Responsibilities:
    - Send generation requests to the inference endpoint
    - Parse responses into LLMGenerationResponse
    - Translate transport/HTTP failures into LLMClientError subclasses

    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Retries (that's the retry policy's job)
    """

    def __init__(self, base_url: str, timeout: float = 60.0, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the inference API
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(
        self, request: LLMGenerationRequest, operation: str = "Generation"
    ) -> LLMGenerationResponse:
        """
        Generate a completion.

        Args:
            request: Standardized generation request
            operation: Human-readable operation name used in error messages
                (e.g. "Transcription", "Feedback generation")

        Returns:
            LLMGenerationResponse with generated text and metadata

        Raises:
            LLMConfigurationError: Client not configured (missing key)
            LLMConnectionError: Network errors
            LLMTimeoutError: Request exceeded timeout
            LLMHttpError: Non-2xx response
            LLMResponseFormatError: 2xx response without generated text
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the inference endpoint is reachable with our credentials.

        Returns:
            True if healthy, False otherwise

        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass

    async def close(self):
        """
        Close client connections and cleanup resources.

        Default implementation does nothing.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )

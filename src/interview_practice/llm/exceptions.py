"""
Custom exceptions for the LLM client layer.

These exceptions give structured error handling for generateContent calls,
letting the retry policy classify failures (status_code 503 is an overload)
and the API layer map them to HTTP responses.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.

    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMConfigurationError(LLMClientError):
    """
    Raised when the client cannot build a request from its configuration.

    The usual cause is a missing GEMINI_API_KEY.
    """
    pass


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to reach the generative-language endpoint.

    Includes network errors, DNS failures, refused connections, etc.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """Raised when the request exceeds the configured timeout."""
    pass


class LLMHttpError(LLMClientError):
    """
    Raised for any non-2xx HTTP response.

    The message embeds status code, reason and response body, e.g.
    ``"Feedback generation failed: 503 Service Unavailable - {...}"``.

    Attributes:
        status_code: HTTP status code
        body: Raw response body text
    """
    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message, details={"status": status_code, "body": body[:1000]})
        self.status_code = status_code
        self.body = body


class LLMResponseFormatError(LLMClientError):
    """
    Raised when a 2xx response lacks the expected candidate text.

    Examples: no candidates (prompt blocked), empty parts, non-JSON body.
    """
    pass

"""
Sandbox exceptions.

Raised before any process is started, when submitted code is rejected.
"""


class SandboxError(Exception):
    """Base exception for code submission rejections."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmptyCodeError(SandboxError):
    """Submitted code is empty or whitespace-only."""
    pass


class CodeTooLargeError(SandboxError):
    """Submitted code exceeds SANDBOX_MAX_CODE_CHARS."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Code is {size} characters, limit is {limit}",
            details={"size": size, "limit": limit},
        )

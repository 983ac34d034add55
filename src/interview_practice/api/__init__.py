"""
FastAPI API routes and endpoints.

- routes.py: Use-case, sandbox, template and health endpoints
- dependencies.py: Dependency injection for LLM client, service, sandbox
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing
"""

from interview_practice.api import dependencies, error_handlers, models
from interview_practice.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]

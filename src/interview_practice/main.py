"""
FastAPI application entry point for the Interview Practice API.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from interview_practice.api.dependencies import get_llm_client, get_sandbox
from interview_practice.api.error_handlers import EXCEPTION_HANDLERS
from interview_practice.api.middleware import RequestTracingMiddleware
from interview_practice.api.routes import router
from interview_practice.config import settings
from interview_practice.logging_config import configure_logging
from interview_practice.models.enums import Language

# Configure structured logging before the app starts logging
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Interview practice backend: transcription, feedback, problem generation, code sandbox",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router)


@app.on_event("startup")
async def startup():
    """Application startup - report configuration problems early."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        model=settings.GEMINI_MODEL,
        retry_max_attempts=settings.RETRY_MAX_ATTEMPTS,
        retry_base_delay_ms=settings.RETRY_BASE_DELAY_MS,
    )

    if not settings.GEMINI_API_KEY.get_secret_value():
        logger.error("GEMINI_API_KEY is not set; AI endpoints will fail until it is configured")

    sandbox = get_sandbox()
    for language in (Language.PYTHON, Language.JAVASCRIPT):
        if not sandbox.runtime_available(language):
            logger.warning("Sandbox runtime not available", language=language.value)

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close the pooled HTTP client."""
    logger.info("Application shutdown")
    await get_llm_client().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "interview_practice.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )

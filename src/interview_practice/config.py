"""
Configuration settings for the Interview Practice API.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development. The Gemini API key has no default and
must be supplied through the environment.
"""

import sys

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Interview Practice API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # === Gemini (Generative Language API) ===
    GEMINI_API_KEY: SecretStr = SecretStr("")  # Never commit a real key
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_TIMEOUT: float = 60.0  # seconds

    # === Retry Policy ===
    RETRY_MAX_ATTEMPTS: int = Field(default=5, ge=1)
    RETRY_BASE_DELAY_MS: int = Field(default=3000, ge=0)

    # === Generation Parameters ===
    FEEDBACK_MAX_TOKENS: int = 300
    FEEDBACK_TEMPERATURE: float = 0.7
    PROBLEM_MAX_TOKENS: int = 500
    PROBLEM_TEMPERATURE: float = 0.8

    # === Transcription ===
    TRANSCRIPTION_DEFAULT_MIME_TYPE: str = "audio/wav"
    TRANSCRIPTION_MAX_AUDIO_BYTES: int = 15 * 1024 * 1024  # inline data limit is ~20MB

    # === Code Sandbox ===
    SANDBOX_PYTHON_BINARY: str = sys.executable
    SANDBOX_NODE_BINARY: str = "node"
    SANDBOX_TIMEOUT_SECONDS: float = 10.0
    SANDBOX_MAX_CODE_CHARS: int = 50_000
    SANDBOX_MAX_OUTPUT_CHARS: int = 10_000
    SANDBOX_MEMORY_LIMIT_MB: int = 256
    SANDBOX_CPU_LIMIT_SECONDS: int = 5

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
